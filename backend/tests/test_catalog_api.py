from decimal import Decimal


async def _post(client, url, payload):
    resp = await client.post(url, json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


async def _project(client, **fields):
    dept = await _post(client, "/departments", {"name": fields.pop("department", "Corporate")})
    return await _post(client, "/projects", {"department_id": dept["id"], **fields})


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


async def test_expertise_names_are_unique(client):
    await _post(client, "/expertises", {"name": " QA "})
    resp = await client.post("/expertises", json={"name": "QA"})
    assert resp.status_code == 400


async def test_renaming_expertise_to_existing_name(client):
    await _post(client, "/expertises", {"name": "QA"})
    software = await _post(client, "/expertises", {"name": "Software"})

    resp = await client.patch(f"/expertises/{software['id']}", json={"name": " QA "})
    assert resp.status_code == 400

    renamed = await client.patch(f"/expertises/{software['id']}", json={"name": "Software", "sort_order": 3})
    assert renamed.status_code == 200
    assert renamed.json()["sort_order"] == 3


async def test_deleting_expertise_unassigns_people(client):
    qa = await _post(client, "/expertises", {"name": "QA"})
    kim = await _post(client, "/people", {"name": "Kim Smith", "expertise_id": qa["id"]})

    resp = await client.delete(f"/expertises/{qa['id']}")
    assert resp.status_code == 200

    person = (await client.get(f"/people/{kim['id']}")).json()
    assert person["expertise_id"] is None
    assert person["expertise_name"] is None


async def test_people_filter_and_email_uniqueness(client):
    qa = await _post(client, "/expertises", {"name": "QA"})
    await _post(client, "/expertises", {"name": "Software"})
    await _post(client, "/people", {"name": "Kim Smith", "email": "kim@acme.com", "expertise_id": qa["id"]})
    await _post(client, "/people", {"name": "Steve Brown"})

    qa_people = (await client.get("/people", params={"expertise": "QA"})).json()
    assert [p["name"] for p in qa_people] == ["Kim Smith"]

    resp = await client.post("/people", json={"name": "Other Kim", "email": "kim@acme.com"})
    assert resp.status_code == 400

    resp = await client.post("/people", json={"name": "Nobody", "expertise_id": 999})
    assert resp.status_code == 404


async def test_expertise_list_groups_people(client):
    qa = await _post(client, "/expertises", {"name": "QA", "sort_order": 1})
    await _post(client, "/people", {"name": "Kim Smith", "expertise_id": qa["id"]})

    (expertise,) = (await client.get("/expertises")).json()
    assert [p["name"] for p in expertise["people"]] == ["Kim Smith"]


async def test_allocation_month_lifecycle(client):
    month = await _post(client, "/allocation-months", {"month": "2025-12-01"})
    resp = await client.post("/allocation-months", json={"month": "2025-12-20"})
    assert resp.status_code == 400

    patched = (await client.patch(f"/allocation-months/{month['id']}", json={"is_active": False})).json()
    assert patched["is_active"] is False
    assert (await client.get("/allocation-months")).json() == []
    everything = (await client.get("/allocation-months", params={"include_inactive": True})).json()
    assert [m["name"] for m in everything] == ["December 2025"]


async def test_holidays(client):
    christmas = await _post(client, "/holidays", {"name": "Christmas", "date": "2025-12-25"})
    await _post(client, "/holidays", {"name": "Thanksgiving", "date": "2025-11-27"})

    names = [h["name"] for h in (await client.get("/holidays")).json()]
    assert names == ["Thanksgiving", "Christmas"]

    assert (await client.delete(f"/holidays/{christmas['id']}")).status_code == 200
    assert (await client.delete(f"/holidays/{christmas['id']}")).status_code == 404


async def test_project_create_and_patch(client):
    pm = await _post(client, "/people", {"name": "Travis Lee"})
    qa = await _post(client, "/expertises", {"name": "QA"})
    project = await _project(
        client,
        name="Client Iris",
        department="Transportation",
        target_date="2025-12-31",
        project_manager_id=pm["id"],
        expertise_ids=[qa["id"]],
    )
    assert project["status"] == "Green"
    assert project["department_name"] == "Transportation"
    assert project["project_manager_name"] == "Travis Lee"
    assert project["expertise_ids"] == [qa["id"]]

    resp = await client.patch(
        f"/projects/{project['id']}", json={"status": "Red", "target_date": None, "expertise_ids": []}
    )
    patched = resp.json()
    assert patched["status"] == "Red"
    assert patched["target_date"] is None
    assert patched["expertise_ids"] == []

    resp = await client.patch(f"/projects/{project['id']}", json={"status": "Purple"})
    assert resp.status_code == 422


async def test_project_requires_existing_department(client):
    resp = await client.post("/projects", json={"name": "Orphan", "department_id": 999})
    assert resp.status_code == 404


async def test_departments_list_projects(client):
    await _project(client, name="Escrow Invoices", department="CBCS")
    (dept,) = (await client.get("/departments")).json()
    assert dept["name"] == "CBCS"
    assert [p["name"] for p in dept["projects"]] == ["Escrow Invoices"]


async def test_portfolio_insights(client):
    await _project(client, name="Engage360", department="Wellness")
    insights = (await client.get("/projects/insights")).json()
    assert insights["total_projects"] == 1
    assert insights["without_pm"] == 1
    assert insights["without_target_date"] == 1
    assert insights["by_department"] == {"Wellness": 1}
    assert "PROJECT PORTFOLIO ANALYSIS" in insights["analysis"]


async def test_estimate_workflow(client):
    project = await _project(client, name="Data Submission Page", department="CBCS")

    estimate = await _post(client, "/estimates", {"project_id": project["id"], "blended_rate": "100"})
    again = await _post(client, "/estimates", {"project_id": project["id"], "blended_rate": "999"})
    assert again["id"] == estimate["id"]
    assert Decimal(str(again["blended_rate"])) == 100

    login = await _post(client, "/user-stories", {"estimate_id": estimate["id"], "name": "Login"})
    upload = await _post(client, "/user-stories", {"estimate_id": estimate["id"], "name": "Upload"})
    assert (login["sort_order"], upload["sort_order"]) == (0, 1)

    await _post(client, "/estimate-items", {"user_story_id": login["id"], "discipline": "Dev", "hours": "8"})
    await _post(client, "/estimate-items", {"user_story_id": login["id"], "discipline": "QA", "hours": "2"})
    await _post(client, "/estimate-items", {"user_story_id": upload["id"], "discipline": "Dev", "hours": "5.5"})
    # same story and discipline overwrites
    await _post(client, "/estimate-items", {"user_story_id": login["id"], "discipline": "Dev", "hours": "10"})

    resp = await client.put(
        "/user-stories/reorder",
        json={"stories": [{"id": login["id"], "sort_order": 1}, {"id": upload["id"], "sort_order": 0}]},
    )
    assert resp.status_code == 200

    full = (await client.get(f"/estimates/{project['id']}")).json()
    assert [s["name"] for s in full["user_stories"]] == ["Upload", "Login"]
    assert Decimal(str(full["total_hours"])) == Decimal("17.5")
    assert Decimal(str(full["total_cost"])) == Decimal("1750")
    assert {k: Decimal(str(v)) for k, v in full["hours_by_discipline"].items()} == {
        "Dev": Decimal("15.5"),
        "QA": Decimal("2"),
    }

    patched = (await client.patch(f"/estimates/{estimate['id']}", json={"blended_rate": "150"})).json()
    assert Decimal(str(patched["total_cost"])) == Decimal("2625")

    assert (await client.delete(f"/user-stories/{login['id']}")).status_code == 200
    remaining = (await client.get(f"/estimates/{project['id']}")).json()
    assert [s["name"] for s in remaining["user_stories"]] == ["Upload"]
    assert Decimal(str(remaining["total_hours"])) == Decimal("5.5")

    listed = (await client.get("/projects")).json()
    assert Decimal(str(listed[0]["estimate"]["total_hours"])) == Decimal("5.5")


async def test_estimate_for_unknown_project(client):
    resp = await client.post("/estimates", json={"project_id": 999})
    assert resp.status_code == 404
    assert (await client.get("/estimates/999")).status_code == 404


async def test_weekly_reports_keyed_by_monday(client):
    project = await _project(client, name="Producer Top 10", department="Transportation")

    first = await _post(
        client,
        "/weekly-reports",
        {"project_id": project["id"], "week_starting": "2025-11-19", "accomplishments": "Kickoff"},
    )
    assert first["week_starting"] == "2025-11-17"

    second = await _post(
        client,
        "/weekly-reports",
        {"project_id": project["id"], "week_starting": "2025-11-17", "goals": "Ship v1"},
    )
    assert second["id"] == first["id"]
    assert second["accomplishments"] is None
    assert second["goals"] == "Ship v1"

    reports = (await client.get("/weekly-reports", params={"project_id": project["id"]})).json()
    assert len(reports) == 1
    assert (await client.get("/weekly-reports")).json() == []
