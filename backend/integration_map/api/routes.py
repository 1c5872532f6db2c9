import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from integration_map import config
from integration_map.api.serializers import serialize_projection, serialize_record
from integration_map.renderer.svg_renderer import render_svg
from integration_map.schemas import DiagramRequest, EdgeChangesRequest, NodeChangesRequest
from integration_map.session.changes import ConnectParams
from integration_map.session.registry import (
    SessionNotFoundError,
    SessionRegistry,
    get_session_registry,
)
from integration_map.session.session import InteractiveSession
from integration_map.topology.model import Topology, build_topology
from integration_map.topology.validation import TopologyCheckResult, check_topology
from integration_map.visual.projection import project_topology

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["integration-map"])


def _error(message: str, issues: list, status_code: int = 422) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, "issues": issues},
    )


def _load_topology(
    request: DiagramRequest,
) -> Tuple[Optional[Topology], Optional[TopologyCheckResult], Optional[JSONResponse]]:
    result = build_topology(request.systems, request.connections)
    if not result.is_valid:
        logger.warning("Rejected topology: %d issue(s)", len(result.issues))
        return None, None, _error(
            "Invalid topology",
            [serialize_record(issue) for issue in result.issues],
        )

    checks = check_topology(result.topology, strict=config.STRICT_REFERENCES)
    if not checks.is_valid:
        logger.warning("Topology failed checks: %s", checks.get_summary())
        return None, checks, _error(
            "Topology references unknown systems",
            [issue.to_dict() for issue in checks.issues],
        )

    return result.topology, checks, None


def _session(registry: SessionRegistry, session_id: str) -> InteractiveSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _session_payload(session_id: str, session: InteractiveSession) -> dict:
    return {
        "status": "success",
        "session_id": session_id,
        **serialize_projection(session.snapshot()),
    }


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/projection")
def project(request: DiagramRequest):
    topology, checks, error = _load_topology(request)
    if error is not None:
        return error

    projection = project_topology(topology, request.presentation_options())
    return {
        "status": "success",
        **serialize_projection(projection),
        "checks": checks.to_dict(),
    }


# ============================================================
# SESSIONS - one per mounted diagram view
# ============================================================

@router.post("/sessions")
def create_session(
    request: DiagramRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    topology, checks, error = _load_topology(request)
    if error is not None:
        return error

    session_id = registry.create(topology, request.presentation_options())
    payload = _session_payload(session_id, registry.get(session_id))
    payload["checks"] = checks.to_dict()
    return payload


@router.get("/sessions/{session_id}")
def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    return _session_payload(session_id, _session(registry, session_id))


@router.delete("/sessions/{session_id}")
def discard_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    try:
        registry.discard(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "success", "session_id": session_id}


@router.post("/sessions/{session_id}/nodes/changes")
def nodes_changed(
    session_id: str,
    request: NodeChangesRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _session(registry, session_id)
    session.on_nodes_changed(request.changes)
    return _session_payload(session_id, session)


@router.post("/sessions/{session_id}/edges/changes")
def edges_changed(
    session_id: str,
    request: EdgeChangesRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _session(registry, session_id)
    session.on_edges_changed(request.changes)
    return _session_payload(session_id, session)


@router.post("/sessions/{session_id}/connect")
def connect(
    session_id: str,
    params: ConnectParams,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _session(registry, session_id)
    edge = session.on_connect(params)

    payload = _session_payload(session_id, session)
    payload["status"] = "success" if edge is not None else "unchanged"
    payload["edge"] = serialize_record(edge)
    return payload


@router.get("/sessions/{session_id}/svg")
def export_svg(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _session(registry, session_id)
    svg = render_svg(session.snapshot(), session.options)
    return Response(svg, media_type="image/svg+xml")
