import uuid

from fastapi import APIRouter, Depends

from billsplit.api.deps import get_sessions, translate_errors, version_conflict
from billsplit.schemas.participant import ParticipantCreate, ParticipantResponse
from billsplit.schemas.session import ParticipantAddedResponse, SessionResponse
from billsplit.services import session_service
from billsplit.services.session_service import SessionStore

router = APIRouter(tags=["participants"])


@router.post("/api/sessions/{session_id}/participants", response_model=ParticipantAddedResponse, status_code=201)
async def add_participant(
    session_id: uuid.UUID,
    body: ParticipantCreate,
    sessions: SessionStore = Depends(get_sessions),
):
    with translate_errors():
        result = session_service.add_participant(sessions, session_id, body.name, body.version)
    if result is None:
        raise version_conflict()
    session, participant = result
    return ParticipantAddedResponse.from_session(
        session, participant=ParticipantResponse.model_validate(participant)
    )


@router.delete("/api/sessions/{session_id}/participants/{participant_id}", response_model=SessionResponse)
async def remove_participant(
    session_id: uuid.UUID,
    participant_id: str,
    version: int | None = None,
    sessions: SessionStore = Depends(get_sessions),
):
    """Remove a participant. Their portions are dropped from every item."""
    with translate_errors():
        session = session_service.remove_participant(sessions, session_id, participant_id, version)
    if session is None:
        raise version_conflict()
    return SessionResponse.from_session(session)
