"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resource_planner.config import get_settings
from resource_planner.database import init_db
from resource_planner.logging_config import configure_logging
from resource_planner.routers import (
    allocation_months,
    allocations,
    departments,
    estimates,
    expertises,
    holidays,
    people,
    projects,
    weekly_reports,
)

settings = get_settings()
configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


app = FastAPI(
    title="Resource Planner",
    description="Department projects, estimates and monthly staff allocation",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(expertises.router)
app.include_router(people.router)
app.include_router(departments.router)
app.include_router(projects.router)
app.include_router(holidays.router)
app.include_router(allocation_months.router)
app.include_router(allocations.router)
app.include_router(estimates.router)
app.include_router(weekly_reports.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
