import uuid

from fastapi import APIRouter, Depends, HTTPException

from billsplit.api.deps import get_sessions
from billsplit.core.config import settings
from billsplit.schemas.summary import CompletenessResponse, SplitSummaryResponse
from billsplit.services.calculation_service import calculate_split
from billsplit.services.completeness_service import completeness_report
from billsplit.services.session_service import SessionStore

router = APIRouter(tags=["summary"])


def _load(sessions: SessionStore, session_id: uuid.UUID):
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Split session not found")
    return session


@router.get("/api/sessions/{session_id}/summary", response_model=SplitSummaryResponse)
async def get_summary(
    session_id: uuid.UUID,
    sessions: SessionStore = Depends(get_sessions),
):
    session = _load(sessions, session_id)
    summary = calculate_split(session.receipt, session.assignments, session.roster)
    return SplitSummaryResponse.from_summary(summary, settings.currency, seed=str(session.id))


@router.get("/api/sessions/{session_id}/completeness", response_model=CompletenessResponse)
async def get_completeness(
    session_id: uuid.UUID,
    sessions: SessionStore = Depends(get_sessions),
):
    session = _load(sessions, session_id)
    summary = calculate_split(session.receipt, session.assignments, session.roster)
    report = completeness_report(session.receipt, session.assignments, summary.accounted_total)
    return CompletenessResponse.from_report(report)
