import logging
import uuid
from typing import Dict, Optional

from integration_map.session.session import InteractiveSession
from integration_map.topology.model import Topology
from integration_map.visual.visual_schema import PresentationOptions

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(session_id)

    def __str__(self) -> str:
        return f"Session '{self.session_id}' not found"


class SessionRegistry:
    """
    In-process map of session id -> InteractiveSession, one per diagram view.

    A session lives until `discard` is called (DELETE /api/sessions/{id}).
    There is no expiry: views that never delete their session keep it in
    memory for the life of the process, so the map only shrinks through
    `discard`.
    """

    def __init__(self):
        self._sessions: Dict[str, InteractiveSession] = {}

    def create(
        self,
        topology: Topology,
        options: Optional[PresentationOptions] = None,
    ) -> str:
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = InteractiveSession.from_topology(topology, options)
        logger.info(
            "Created session %s (%d systems, %d connections)",
            session_id, len(topology.systems), len(topology.connections),
        )
        return session_id

    def get(self, session_id: str) -> InteractiveSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def discard(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info("Discarded session %s", session_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions


_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry
