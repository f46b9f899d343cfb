import logging
import uuid

from fastapi import APIRouter, Depends

from billsplit.api.deps import get_sessions, translate_errors, version_conflict
from billsplit.schemas.assignment import (
    AssignAllRequest, ModeUpdateRequest, PortionUpdateRequest, ToggleAssignmentRequest,
)
from billsplit.schemas.session import SessionResponse
from billsplit.services import session_service
from billsplit.services.session_service import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assignments"])


@router.post("/api/sessions/{session_id}/assignments/toggle", response_model=SessionResponse)
async def toggle_assignment(
    session_id: uuid.UUID,
    body: ToggleAssignmentRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    """One-tap toggle. Saturated portioned items ignore the tap."""
    logger.debug(f"toggle assignment session_id={session_id}, item_id={body.item_id}, participant_id={body.participant_id}, expected_version={body.version}")
    with translate_errors():
        session = session_service.toggle_assignment(
            sessions, session_id, body.item_id, body.participant_id, body.version
        )
    if session is None:
        raise version_conflict()
    return SessionResponse.from_session(session)


@router.post("/api/sessions/{session_id}/assignments/portion", response_model=SessionResponse)
async def update_portion(
    session_id: uuid.UUID,
    body: PortionUpdateRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    with translate_errors():
        session = session_service.update_portion(
            sessions, session_id, body.item_id, body.participant_id, body.delta, body.version
        )
    if session is None:
        raise version_conflict()
    return SessionResponse.from_session(session)


@router.put("/api/sessions/{session_id}/assignments/{item_id}/mode", response_model=SessionResponse)
async def set_assignment_mode(
    session_id: uuid.UUID,
    item_id: str,
    body: ModeUpdateRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    with translate_errors():
        session = session_service.set_assignment_mode(
            sessions, session_id, item_id, body.mode, body.version
        )
    if session is None:
        raise version_conflict()
    return SessionResponse.from_session(session)


@router.post("/api/sessions/{session_id}/assignments/assign-all", response_model=SessionResponse)
async def assign_all_items(
    session_id: uuid.UUID,
    body: AssignAllRequest,
    sessions: SessionStore = Depends(get_sessions),
):
    """Split every item equally among everyone. Version is optional for this override."""
    with translate_errors():
        session = session_service.assign_all_to_all(sessions, session_id, body.version)
    if session is None:
        raise version_conflict()
    return SessionResponse.from_session(session)
