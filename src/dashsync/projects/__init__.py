"""Project persistence.

Public API
----------
Project                 - a named, persisted layout
ProjectStorage          - SQLite persistence
ProjectService          - validated CRUD
ProjectValidationError  - invalid payload (no write happened)
ProjectNotFoundError    - unknown project id
"""

from dashsync.projects.models import Project, ProjectNotFoundError, ProjectValidationError
from dashsync.projects.service import ProjectService
from dashsync.projects.storage import ProjectStorage

__all__ = [
    "Project",
    "ProjectNotFoundError",
    "ProjectService",
    "ProjectStorage",
    "ProjectValidationError",
]
