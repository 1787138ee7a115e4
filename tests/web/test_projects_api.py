"""/api/projects CRUD endpoints."""

from __future__ import annotations

import json

import pytest

from tests.web.conftest import layout_payload


def _create(client, name="Trip", **extra):
    body = {"name": name, "layoutConfig": layout_payload(), **extra}
    resp = client.post("/api/projects", json=body)
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# Seeding and listing
# ---------------------------------------------------------------------------


def test_default_project_seeded_on_startup(client):
    projects = client.get("/api/projects").json()
    assert [p["name"] for p in projects] == ["Default Configuration"]
    assert projects[0]["layoutConfig"]["syncOffsets"] == {
        "front": 0.0, "back": 0.0, "left": 0.0, "right": 0.0,
    }


def test_list_newest_first(client):
    created = _create(client, "Newer")
    projects = client.get("/api/projects").json()
    assert projects[0]["id"] == created["id"]
    assert len(projects) == 2


# ---------------------------------------------------------------------------
# Create / get
# ---------------------------------------------------------------------------


def test_create_returns_full_record(client):
    body = {
        "name": "Commute",
        "description": "morning",
        "layoutConfig": layout_payload(back=1.25),
    }
    data = client.post("/api/projects", json=body).json()
    assert data["id"] > 0
    assert data["description"] == "morning"
    assert data["createdAt"]
    assert data["layoutConfig"]["syncOffsets"]["back"] == 1.25


def test_get_round_trips_layout(client):
    created = _create(client)
    fetched = client.get(f"/api/projects/{created['id']}").json()
    assert fetched == created


def test_get_missing_is_404(client):
    resp = client.get("/api/projects/9999")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Project not found"}


def test_create_blank_name_is_400(client):
    resp = client.post("/api/projects", json={"name": "  ", "layoutConfig": layout_payload()})
    assert resp.status_code == 400
    assert resp.json()["field"] == "name"
    assert len(client.get("/api/projects").json()) == 1


def test_create_missing_layout_is_400(client):
    resp = client.post("/api/projects", json={"name": "x"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "layoutConfig"


def test_create_layout_missing_pose_is_400(client):
    layout = layout_payload()
    del layout["right"]
    resp = client.post("/api/projects", json={"name": "x", "layoutConfig": layout})
    assert resp.status_code == 400
    assert resp.json()["field"].startswith("layoutConfig")


def _send_raw(client, path, body, method="post"):
    # json.dumps writes NaN/Infinity literals, which the parser accepts
    return client.request(
        method.upper(), path, content=json.dumps(body),
        headers={"Content-Type": "application/json"},
    )


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_create_non_finite_scale_is_400(client, bad):
    layout = layout_payload()
    layout["front"]["scale"] = bad
    resp = _send_raw(client, "/api/projects", {"name": "x", "layoutConfig": layout})
    assert resp.status_code == 400
    assert resp.json()["field"] == "layoutConfig.front.scale"
    assert len(client.get("/api/projects").json()) == 1


def test_create_non_finite_offset_is_400(client):
    layout = layout_payload(back=float("nan"))
    resp = _send_raw(client, "/api/projects", {"name": "x", "layoutConfig": layout})
    assert resp.status_code == 400
    assert resp.json()["field"] == "layoutConfig.syncOffsets.back"


def test_update_non_finite_offset_is_400_and_keeps_record(client):
    created = _create(client)
    layout = layout_payload(front=float("-inf"))
    resp = _send_raw(
        client, f"/api/projects/{created['id']}", {"layoutConfig": layout}, method="put"
    )
    assert resp.status_code == 400
    fetched = client.get(f"/api/projects/{created['id']}").json()
    assert fetched["layoutConfig"] == created["layoutConfig"]


def test_saved_layout_can_be_saved_again(client):
    created = _create(client)
    resp = client.put(
        f"/api/projects/{created['id']}", json={"layoutConfig": created["layoutConfig"]}
    )
    assert resp.status_code == 200
    assert resp.json()["layoutConfig"] == created["layoutConfig"]


def test_create_without_offsets_defaults_to_zero(client):
    layout = layout_payload()
    del layout["syncOffsets"]
    resp = client.post("/api/projects", json={"name": "old", "layoutConfig": layout})
    assert resp.status_code == 201
    assert resp.json()["layoutConfig"]["syncOffsets"]["left"] == 0.0


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------


def test_update_partial(client):
    created = _create(client, description="keep me")
    resp = client.put(f"/api/projects/{created['id']}", json={"name": "Renamed"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Renamed"
    assert data["description"] == "keep me"
    assert data["layoutConfig"] == created["layoutConfig"]


def test_update_layout_offsets(client):
    created = _create(client)
    resp = client.put(
        f"/api/projects/{created['id']}",
        json={"layoutConfig": layout_payload(front=-0.5)},
    )
    assert resp.json()["layoutConfig"]["syncOffsets"]["front"] == -0.5


def test_update_missing_is_404(client):
    resp = client.put("/api/projects/9999", json={"name": "x"})
    assert resp.status_code == 404


def test_update_null_name_is_400(client):
    created = _create(client)
    resp = client.put(f"/api/projects/{created['id']}", json={"name": None})
    assert resp.status_code == 400
    assert resp.json()["field"] == "name"


def test_delete_then_get_404(client):
    created = _create(client)
    assert client.delete(f"/api/projects/{created['id']}").status_code == 204
    assert client.get(f"/api/projects/{created['id']}").status_code == 404


def test_delete_unknown_is_204(client):
    assert client.delete("/api/projects/9999").status_code == 204
