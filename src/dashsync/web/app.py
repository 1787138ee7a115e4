"""FastAPI Web application — projects, telemetry and clip export."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from dashsync.export.ffmpeg import ExportError
from dashsync.projects.models import ProjectNotFoundError, ProjectValidationError
from dashsync.projects.service import ProjectService
from dashsync.projects.storage import ProjectStorage
from dashsync.web.schemas import (
    ExportBody,
    ExportResponse,
    HealthResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    TelemetryRequest,
    TelemetryResponse,
)
from dashsync.web.service import MediaService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

VERSION = "0.1.0"


def _storage() -> ProjectStorage:
    return ProjectStorage(os.environ.get("DASHSYNC_DB", "projects.db"))


@asynccontextmanager
async def _lifespan(app: FastAPI):
    storage = _storage()
    try:
        ProjectService(storage).seed_default()
    finally:
        storage.close()
    yield


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Dashcam Sync", version=VERSION, lifespan=_lifespan)

app.mount(
    "/exports",
    StaticFiles(directory=os.environ.get("DASHSYNC_EXPORT_DIR", "exports"), check_dir=False),
    name="exports",
)


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {"loc": (), "msg": "Invalid request"}
    loc = [str(p) for p in first.get("loc", ()) if p != "body"]
    return JSONResponse(status_code=400, content={"message": first["msg"], "field": ".".join(loc)})


@app.exception_handler(ProjectValidationError)
async def _project_invalid(request: Request, exc: ProjectValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc), "field": exc.field})


@app.exception_handler(ProjectNotFoundError)
async def _project_missing(request: Request, exc: ProjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "Project not found"})


@app.exception_handler(ExportError)
async def _export_failed(request: Request, exc: ExportError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": str(exc)})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION)


@app.get("/api/projects", response_model=list[ProjectResponse])
def list_projects() -> list[ProjectResponse]:
    """Return all projects, newest first."""
    storage = _storage()
    try:
        projects = ProjectService(storage).list_projects()
    finally:
        storage.close()
    return [ProjectResponse.from_project(p) for p in projects]


@app.get("/api/projects/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int) -> ProjectResponse:
    storage = _storage()
    try:
        project = ProjectService(storage).get(project_id)
    finally:
        storage.close()
    return ProjectResponse.from_project(project)


@app.post("/api/projects", response_model=ProjectResponse, status_code=201)
def create_project(req: ProjectCreate) -> ProjectResponse:
    storage = _storage()
    try:
        project = ProjectService(storage).create(
            req.name, req.layoutConfig.model_dump(), description=req.description
        )
    finally:
        storage.close()
    return ProjectResponse.from_project(project)


@app.put("/api/projects/{project_id}", response_model=ProjectResponse)
def update_project(project_id: int, req: ProjectUpdate) -> ProjectResponse:
    """Partial update: only fields present in the body are changed."""
    changes: dict = {}
    if "name" in req.model_fields_set:
        changes["name"] = req.name
    if "description" in req.model_fields_set:
        changes["description"] = req.description
    if "layoutConfig" in req.model_fields_set:
        changes["layout_config"] = (
            req.layoutConfig.model_dump() if req.layoutConfig is not None else None
        )

    storage = _storage()
    try:
        project = ProjectService(storage).update(project_id, **changes)
    finally:
        storage.close()
    return ProjectResponse.from_project(project)


@app.delete("/api/projects/{project_id}", status_code=204)
def delete_project(project_id: int) -> Response:
    storage = _storage()
    try:
        ProjectService(storage).delete(project_id)
    finally:
        storage.close()
    return Response(status_code=204)


@app.post("/api/telemetry", response_model=TelemetryResponse)
def extract_telemetry(req: TelemetryRequest) -> TelemetryResponse:
    """Extract telemetry for a front-camera file; falls back to synthetic data."""
    result = MediaService.from_env().load_telemetry(req.filename)
    return TelemetryResponse(
        source=result.source,
        samples=[s.to_dict() for s in result.series],
    )


@app.post("/api/export", response_model=ExportResponse)
def export_clip(req: ExportBody) -> ExportResponse:
    """Burn the single telemetry sample (if any) into a clip of the selected view."""
    try:
        result = MediaService.from_env().export(req)
    except ValueError as exc:
        # only the telemetry sample is parsed past pydantic validation
        return JSONResponse(
            status_code=400,
            content={"message": str(exc), "field": "telemetry.0.timestamp"},
        )
    return ExportResponse(url=result.url)
