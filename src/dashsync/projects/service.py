"""ProjectService — validated CRUD over :class:`ProjectStorage`."""

from __future__ import annotations

import logging

from dashsync.layout.models import LayoutConfig, LayoutError
from dashsync.projects.models import Project, ProjectNotFoundError, ProjectValidationError
from dashsync.projects.storage import ProjectStorage

_logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Default Configuration"
DEFAULT_PROJECT_DESCRIPTION = "Standard four-camera layout"

_UNSET = object()


def _check_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ProjectValidationError("Project name must not be empty", field="name")
    return name


def _check_layout(layout) -> LayoutConfig:
    if isinstance(layout, LayoutConfig):
        return layout
    try:
        return LayoutConfig.from_dict(layout)
    except LayoutError as exc:
        raise ProjectValidationError(str(exc), field="layoutConfig") from exc


class ProjectService:
    """Validates project payloads and maps missing rows to errors.

    Validation happens before the storage call, so a rejected request never
    writes anything.

    Parameters
    ----------
    storage:
        Backing :class:`ProjectStorage`.
    """

    def __init__(self, storage: ProjectStorage) -> None:
        self._storage = storage

    def list_projects(self) -> list[Project]:
        return [Project.from_row(r) for r in self._storage.list_projects()]

    def get(self, project_id: int) -> Project:
        row = self._storage.get_project(project_id)
        if row is None:
            raise ProjectNotFoundError(project_id)
        return Project.from_row(row)

    def create(
        self,
        name: str,
        layout_config: LayoutConfig | dict,
        description: str | None = None,
    ) -> Project:
        """Create a project.

        Raises
        ------
        ProjectValidationError
            If *name* is empty/blank or the layout is malformed.
        """
        name = _check_name(name)
        layout = _check_layout(layout_config)
        row = self._storage.create_project(name, description, layout.to_dict())
        _logger.info("Created project %d (%s)", row["id"], name)
        return Project.from_row(row)

    def update(
        self,
        project_id: int,
        name=_UNSET,
        description=_UNSET,
        layout_config=_UNSET,
    ) -> Project:
        """Apply a partial update; omitted fields are left unchanged."""
        fields: dict = {}
        if name is not _UNSET:
            fields["name"] = _check_name(name)
        if description is not _UNSET:
            fields["description"] = description
        if layout_config is not _UNSET:
            fields["layout_config"] = _check_layout(layout_config).to_dict()

        row = self._storage.update_project(project_id, **fields)
        if row is None:
            raise ProjectNotFoundError(project_id)
        return Project.from_row(row)

    def delete(self, project_id: int) -> None:
        """Delete a project.  Deleting an unknown id is not an error."""
        if not self._storage.delete_project(project_id):
            _logger.info("Delete of unknown project %d ignored", project_id)

    def seed_default(self) -> Project | None:
        """Insert the default layout when the store is empty."""
        if self._storage.count():
            return None
        return self.create(
            DEFAULT_PROJECT_NAME,
            LayoutConfig.default(),
            description=DEFAULT_PROJECT_DESCRIPTION,
        )
