import pytest
from fastapi.testclient import TestClient

from integration_map import config
from integration_map.main import app
from integration_map.session.registry import SessionRegistry, get_session_registry


HOSPITAL = {
    "systems": [{"id": "ehr", "name": "EHR"}, {"id": "lab", "name": "Lab"}],
    "connections": [
        {
            "source": "ehr",
            "target": "lab",
            "direction": "one-way",
            "quality": "automated",
            "volume": 100,
        }
    ],
    "title": "Hospital",
    "showExportLabels": True,
}


@pytest.fixture
def registry():
    registry = SessionRegistry()
    app.dependency_overrides[get_session_registry] = lambda: registry
    yield registry
    app.dependency_overrides.clear()


@pytest.fixture
def client(registry):
    return TestClient(app)


def create_session(client) -> dict:
    response = client.post("/api/sessions", json=HOSPITAL)
    assert response.status_code == 200
    return response.json()


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_projection_uses_renderer_field_names(client):
    body = client.post("/api/projection", json=HOSPITAL).json()

    assert body["status"] == "success"
    node = body["nodes"][0]
    assert node["id"] == "ehr"
    assert node["visualWidth"] == 150
    assert node["position"]["x"] == pytest.approx(200)
    assert node["color"] == "#4f46e5"

    edge = body["edges"][0]
    assert edge["id"] == "e0"
    assert edge["strokeWidth"] == 5
    assert edge["protocolLabel"] == "HL7 FHIR"
    assert edge["label"] == "HL7 FHIR"
    assert edge["metadata"] == {"direction": "one-way", "quality": "automated", "volume": 100}


def test_duplicate_system_ids_are_rejected(client):
    payload = {"systems": [{"id": "a", "name": "A"}, {"id": "a", "name": "B"}]}

    response = client.post("/api/sessions", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["issues"][0]["objectId"] == "a"


def test_dangling_references_pass_unless_strict(client, monkeypatch):
    payload = {
        "systems": [{"id": "ehr", "name": "EHR"}],
        "connections": [{"source": "ehr", "target": "pacs", "quality": "manual"}],
    }

    lenient = client.post("/api/projection", json=payload)
    assert lenient.status_code == 200
    assert lenient.json()["checks"]["warning_count"] == 1

    monkeypatch.setattr(config, "STRICT_REFERENCES", True)
    strict = client.post("/api/projection", json=payload)
    assert strict.status_code == 422
    assert strict.json()["issues"][0]["code"] == "DANGLING_TARGET"


def test_session_lifecycle(client, registry):
    created = create_session(client)
    session_id = created["session_id"]
    assert session_id in registry
    assert len(created["edges"]) == 1

    fetched = client.get(f"/api/sessions/{session_id}").json()
    assert fetched["nodes"] == created["nodes"]

    assert client.delete(f"/api/sessions/{session_id}").status_code == 200
    assert client.get(f"/api/sessions/{session_id}").status_code == 404
    assert client.delete(f"/api/sessions/{session_id}").status_code == 404


def test_sessions_are_held_until_deleted(client, registry):
    first = create_session(client)["session_id"]
    second = create_session(client)["session_id"]
    assert len(registry) == 2

    client.get(f"/api/sessions/{first}")
    assert len(registry) == 2

    client.delete(f"/api/sessions/{first}")
    assert len(registry) == 1
    assert first not in registry
    assert second in registry


def test_numeric_quality_falls_back_to_unknown_style(client):
    body = {
        "systems": HOSPITAL["systems"],
        "connections": [{"source": "ehr", "target": "lab", "quality": 3}],
    }

    response = client.post("/api/projection", json=body)

    assert response.status_code == 200
    edge = response.json()["edges"][0]
    assert edge["color"] == "#888888"
    assert edge["protocolLabel"] == "Unknown"
    assert edge["metadata"]["quality"] == "3"


def test_node_and_edge_changes(client):
    session_id = create_session(client)["session_id"]

    body = client.post(
        f"/api/sessions/{session_id}/nodes/changes",
        json={"changes": [{"type": "position", "id": "lab", "position": {"x": 5, "y": 6}}]},
    ).json()
    lab = next(n for n in body["nodes"] if n["id"] == "lab")
    assert lab["position"] == {"x": 5, "y": 6}

    body = client.post(
        f"/api/sessions/{session_id}/edges/changes",
        json={"changes": [{"type": "select", "id": "e0", "selected": True}]},
    ).json()
    assert body["edges"][0]["selected"] is True


def test_connect_appends_edge(client):
    session_id = create_session(client)["session_id"]

    body = client.post(
        f"/api/sessions/{session_id}/connect",
        json={"source": "lab", "target": "ehr"},
    ).json()

    assert body["status"] == "success"
    assert len(body["edges"]) == 2
    assert body["edge"]["color"] == "#888888"
    assert body["edge"]["protocolLabel"] == "Unknown"

    again = client.post(
        f"/api/sessions/{session_id}/connect",
        json={"source": "lab", "target": "ehr"},
    ).json()
    assert again["status"] == "unchanged"
    assert again["edge"] is None
    assert len(again["edges"]) == 2


def test_unknown_session_is_404(client):
    response = client.post("/api/sessions/nope/connect", json={"source": "a", "target": "b"})
    assert response.status_code == 404


def test_svg_export(client):
    session_id = create_session(client)["session_id"]

    response = client.get(f"/api/sessions/{session_id}/svg")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert "Hospital" in response.text
    assert "2 Systems and 1 Connections" in response.text
