"""ProjectStorage — persists named layout projects to SQLite.

The layout is stored as its JSON wire shape in a TEXT column; the database
never looks inside it.  ``INTEGER PRIMARY KEY`` (no AUTOINCREMENT) aliases
the rowid, so ids are assigned by SQLite.
"""

from __future__ import annotations

import json
import sqlite3

_DDL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous  = NORMAL;

CREATE TABLE IF NOT EXISTS projects (
    id            INTEGER PRIMARY KEY,
    name          TEXT    NOT NULL,
    description   TEXT,
    layout_config TEXT    NOT NULL,
    created_at    TEXT    NOT NULL
                  DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_UPDATABLE = ("name", "description", "layout_config")


class ProjectStorage:
    """Stores and retrieves project rows.

    Rows are returned as plain dicts with ``layout_config`` still JSON-encoded;
    :meth:`Project.from_row <dashsync.projects.models.Project.from_row>`
    decodes them.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Pass ``":memory:"`` for in-process testing.
    """

    def __init__(self, db_path: str = "projects.db") -> None:
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        for stmt in _DDL.strip().split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_projects(self) -> list[dict]:
        """Return all projects, newest first."""
        rows = self._conn.execute(
            "SELECT * FROM projects ORDER BY created_at DESC, id DESC"
        ).fetchall()
        return [dict(r) for r in rows]

    def get_project(self, project_id: int) -> dict | None:
        """Return a single project row, or None if not found."""
        row = self._conn.execute(
            "SELECT * FROM projects WHERE id = ?", (project_id,)
        ).fetchone()
        return dict(row) if row else None

    def create_project(
        self, name: str, description: str | None, layout_config: dict
    ) -> dict:
        """Insert a project and return the stored row."""
        cursor = self._conn.execute(
            "INSERT INTO projects (name, description, layout_config) VALUES (?, ?, ?)",
            (name, description, json.dumps(layout_config)),
        )
        self._conn.commit()
        return self.get_project(cursor.lastrowid)  # type: ignore[return-value]

    def update_project(self, project_id: int, **fields) -> dict | None:
        """Update the given columns and return the row, or None if not found.

        Accepted keys: ``name``, ``description``, ``layout_config`` (a dict).
        """
        unknown = set(fields) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")
        if "layout_config" in fields:
            fields["layout_config"] = json.dumps(fields["layout_config"])
        if fields:
            assignments = ", ".join(f"{col} = ?" for col in fields)
            cursor = self._conn.execute(
                f"UPDATE projects SET {assignments} WHERE id = ?",
                (*fields.values(), project_id),
            )
            self._conn.commit()
            if cursor.rowcount == 0:
                return None
        return self.get_project(project_id)

    def delete_project(self, project_id: int) -> bool:
        """Delete a project; return True if a row was removed."""
        cursor = self._conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        self._conn.commit()
        return cursor.rowcount > 0

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0]

    def close(self) -> None:
        self._conn.close()
