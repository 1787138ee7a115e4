"""Project model and persistence errors."""

from __future__ import annotations

import json
from dataclasses import dataclass

from dashsync.layout.models import LayoutConfig


class ProjectValidationError(ValueError):
    """Raised before any write when a project payload is invalid.

    ``field`` names the offending input (e.g. ``"name"``).
    """

    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(message)
        self.field = field


class ProjectNotFoundError(LookupError):
    """Raised when no project exists with the requested id."""

    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


@dataclass
class Project:
    """A named, persisted camera layout."""

    id: int
    name: str
    description: str | None
    layout_config: LayoutConfig
    created_at: str
    """ISO-8601 UTC, assigned by storage."""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "layoutConfig": self.layout_config.to_dict(),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_row(cls, row: dict) -> Project:
        """Create a :class:`Project` from a ``projects`` table row dict."""
        return cls(
            id=int(row["id"]),
            name=row["name"],
            description=row["description"],
            layout_config=LayoutConfig.from_dict(json.loads(row["layout_config"])),
            created_at=row["created_at"],
        )
