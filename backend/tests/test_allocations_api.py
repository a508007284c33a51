from decimal import Decimal

import pytest


async def _post(client, url, payload):
    resp = await client.post(url, json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
async def world(client):
    qa = await _post(client, "/expertises", {"name": "QA"})
    kim = await _post(client, "/people", {"name": "Kim Smith", "email": "kim@acme.com", "expertise_id": qa["id"]})
    dave = await _post(client, "/people", {"name": "David Johnson"})
    dept = await _post(client, "/departments", {"name": "Corporate"})
    ongoing = await _post(
        client, "/projects", {"name": "Overhead", "department_id": dept["id"], "start_date": "2025-01-01"}
    )
    targeted = await _post(
        client,
        "/projects",
        {"name": "Info-capture", "department_id": dept["id"], "target_date": "2025-12-31", "sort_order": 1},
    )
    finished = await _post(
        client,
        "/projects",
        {
            "name": "Training",
            "department_id": dept["id"],
            "start_date": "2025-01-01",
            "actual_completion_date": "2025-10-15",
            "sort_order": 2,
        },
    )
    month = await _post(client, "/allocation-months", {"month": "2025-11-15"})
    await _post(client, "/holidays", {"name": "Thanksgiving", "date": "2025-11-27"})
    await _post(client, "/holidays", {"name": "Thanksgiving", "date": "2025-11-28"})
    return {
        "kim": kim["id"],
        "dave": dave["id"],
        "ongoing": ongoing["id"],
        "targeted": targeted["id"],
        "finished": finished["id"],
        "month": month["id"],
    }


def _upsert(world, person, project, pct):
    return {
        "person_id": world[person],
        "project_id": world[project],
        "allocation_month_id": world["month"],
        "percentage": pct,
    }


async def test_month_is_normalized_to_first_day(client, world):
    months = (await client.get("/allocation-months")).json()
    assert months[0]["month"] == "2025-11-01"
    assert months[0]["name"] == "November 2025"


async def test_upsert_creates_then_overwrites(client, world):
    created = await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 60))
    assert created["action"] == "create"
    assert Decimal(str(created["allocation"]["percentage"])) == 60

    updated = await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 45))
    assert updated["action"] == "update"
    assert updated["allocation"]["id"] == created["allocation"]["id"]

    rows = (await client.get("/allocations", params={"month_id": world["month"]})).json()
    assert len(rows) == 1
    assert Decimal(str(rows[0]["percentage"])) == 45


async def test_zero_percentage_deletes_record(client, world):
    await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 60))

    deleted = await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 0))
    assert deleted == {"action": "delete", "allocation": None}
    assert (await client.get("/allocations", params={"month_id": world["month"]})).json() == []

    again = await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 0))
    assert again["action"] == "noop"


async def test_list_requires_month_id(client, world):
    resp = await client.get("/allocations")
    assert resp.status_code == 400


async def test_upsert_unknown_references(client, world):
    payload = _upsert(world, "kim", "ongoing", 20)
    payload["person_id"] = 999
    payload["allocation_month_id"] = 999
    resp = await client.post("/allocations", json=payload)
    assert resp.status_code == 404
    assert "person" in resp.json()["detail"]
    assert "allocation month" in resp.json()["detail"]


@pytest.mark.parametrize("pct", [150, -1, 100.5])
async def test_upsert_rejects_out_of_range_percentage(client, world, pct):
    resp = await client.post("/allocations", json=_upsert(world, "kim", "ongoing", pct))
    assert resp.status_code == 422
    assert (await client.get("/allocations", params={"month_id": world["month"]})).json() == []


async def test_summary_totals_hours_and_scope(client, world):
    await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 60))
    await _post(client, "/allocations", _upsert(world, "kim", "targeted", 55))
    await _post(client, "/allocations", _upsert(world, "dave", "ongoing", 40))

    summary = (await client.get("/allocations/summary", params={"month_id": world["month"]})).json()

    assert summary["month_name"] == "November 2025"
    assert summary["available_hours_per_person"] == 144
    assert summary["headcount"] == 2
    assert summary["available_hours_team"] == 288

    people = {p["person_id"]: p for p in summary["people"]}
    kim = people[world["kim"]]
    assert Decimal(str(kim["total_pct"])) == 115
    assert Decimal(str(kim["allocated_hours"])) == Decimal("165.6")
    assert kim["status"] == "over_allocated"
    assert kim["expertise_name"] == "QA"
    assert people[world["dave"]]["status"] == "under_allocated"

    (department,) = summary["departments"]
    projects = {p["project_id"]: p for p in department["projects"]}
    # completed projects drop out of the month
    assert set(projects) == {world["ongoing"], world["targeted"]}
    assert Decimal(str(projects[world["ongoing"]]["total_hours"])) == 144
    assert Decimal(str(projects[world["targeted"]]["total_hours"])) == Decimal("79.2")


async def test_summary_reflects_new_holiday(client, world):
    await _post(client, "/holidays", {"name": "Founders Day", "date": "2025-11-03"})
    summary = (await client.get("/allocations/summary", params={"month_id": world["month"]})).json()
    assert summary["available_hours_per_person"] == 136


async def test_summary_without_month_uses_active_month(client, world):
    summary = (await client.get("/allocations/summary")).json()
    assert summary["allocation_month_id"] == world["month"]


async def test_summary_unknown_month(client, world):
    resp = await client.get("/allocations/summary", params={"month_id": 999})
    assert resp.status_code == 404


async def test_insights_report(client, world):
    await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 60))
    await _post(client, "/allocations", _upsert(world, "kim", "targeted", 55))
    await _post(client, "/allocations", _upsert(world, "dave", "ongoing", 40))

    insights = (await client.get("/allocations/insights", params={"month_id": world["month"]})).json()

    assert insights["available_hours"] == 144
    assert [p["name"] for p in insights["over_allocated"]] == ["Kim Smith"]
    assert [p["name"] for p in insights["under_utilized"]] == ["David Johnson"]
    assert insights["analysis"].startswith("RESOURCE ALLOCATION ANALYSIS - November 2025")


async def test_batch_keeps_items_before_failure(client, world):
    bad = _upsert(world, "kim", "targeted", 20)
    bad["person_id"] = 999
    resp = await client.post(
        "/allocations/batch",
        json={"items": [_upsert(world, "kim", "ongoing", 30), bad, _upsert(world, "dave", "ongoing", 20)]},
    )
    assert resp.status_code == 404

    rows = (await client.get("/allocations", params={"month_id": world["month"]})).json()
    assert [(r["person_id"], r["project_id"]) for r in rows] == [(world["kim"], world["ongoing"])]


async def test_batch_applies_all(client, world):
    results = await _post(
        client,
        "/allocations/batch",
        {"items": [_upsert(world, "kim", "ongoing", 30), _upsert(world, "kim", "ongoing", 0)]},
    )
    assert [r["action"] for r in results] == ["create", "delete"]


async def test_person_detail_lists_allocations(client, world):
    await _post(client, "/allocations", _upsert(world, "kim", "ongoing", 15))
    await _post(client, "/allocations", _upsert(world, "kim", "targeted", 15))

    detail = (await client.get(f"/people/{world['kim']}")).json()
    assert {a["project_name"] for a in detail["allocations"]} == {"Overhead", "Info-capture"}
    assert all(a["month_name"] == "November 2025" for a in detail["allocations"])
    assert all(a["department_name"] == "Corporate" for a in detail["allocations"])


async def test_percentage_beyond_stored_scale_is_rejected(client, world):
    resp = await client.post("/allocations", json=_upsert(world, "kim", "ongoing", "99.9999"))
    assert resp.status_code == 422
    assert (await client.get("/allocations", params={"month_id": world["month"]})).json() == []


async def test_percentage_at_stored_scale_keeps_status(client, world):
    await _post(client, "/allocations", _upsert(world, "kim", "ongoing", "99.999"))

    summary = (await client.get("/allocations/summary", params={"month_id": world["month"]})).json()
    kim = next(p for p in summary["people"] if p["person_id"] == world["kim"])
    assert Decimal(str(kim["total_pct"])) == Decimal("99.999")
    assert kim["status"] == "under_allocated"
