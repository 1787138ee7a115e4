"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from dashsync.projects.models import Project

Vector3 = tuple[float, float, float]
ViewName = Literal["front", "back", "left", "right"]


class PoseSchema(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    scale: float
    position: Vector3
    rotation: Vector3


class SyncOffsetsSchema(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    front: float = 0.0
    back: float = 0.0
    left: float = 0.0
    right: float = 0.0


class LayoutConfigSchema(BaseModel):
    front: PoseSchema
    back: PoseSchema
    left: PoseSchema
    right: PoseSchema
    syncOffsets: SyncOffsetsSchema = Field(default_factory=SyncOffsetsSchema)


class ProjectCreate(BaseModel):
    name: str
    description: str | None = None
    layoutConfig: LayoutConfigSchema


class ProjectUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    layoutConfig: LayoutConfigSchema | None = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    description: str | None
    layoutConfig: LayoutConfigSchema
    createdAt: str

    @classmethod
    def from_project(cls, project: Project) -> ProjectResponse:
        return cls.model_validate(project.to_dict())


class HealthResponse(BaseModel):
    status: str
    version: str


class TelemetryRequest(BaseModel):
    filename: str


class TelemetryResponse(BaseModel):
    source: Literal["extracted", "synthetic"]
    samples: list[dict[str, Any]]


class ExportBody(BaseModel):
    view: ViewName
    filename: str
    telemetry: list[dict[str, Any]] = Field(default_factory=list, max_length=1)


class ExportResponse(BaseModel):
    url: str
