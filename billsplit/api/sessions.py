import uuid

from fastapi import APIRouter, Depends, HTTPException

from billsplit.api.deps import get_sessions, translate_errors
from billsplit.schemas.receipt import ExtractionCreate, ManualReceiptCreate
from billsplit.schemas.session import SessionResponse
from billsplit.services.receipt_service import build_manual_receipt, build_receipt
from billsplit.services.session_service import SessionStore

router = APIRouter(tags=["sessions"])


@router.post("/api/sessions", response_model=SessionResponse, status_code=201)
async def create_session(
    body: ExtractionCreate,
    sessions: SessionStore = Depends(get_sessions),
):
    """Accept an extracted receipt and start splitting it."""
    with translate_errors():
        receipt = build_receipt(body.model_dump())
    return SessionResponse.from_session(sessions.create(receipt))


@router.post("/api/sessions/manual", response_model=SessionResponse, status_code=201)
async def create_manual_session(
    body: ManualReceiptCreate,
    sessions: SessionStore = Depends(get_sessions),
):
    with translate_errors():
        receipt = build_manual_receipt(
            [item.model_dump() for item in body.items],
            tax=body.tax,
            service_charge=body.service_charge,
            total=body.total,
        )
    return SessionResponse.from_session(sessions.create(receipt))


@router.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: uuid.UUID,
    sessions: SessionStore = Depends(get_sessions),
):
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Split session not found")
    return SessionResponse.from_session(session)


@router.delete("/api/sessions/{session_id}", status_code=204)
async def discard_session(
    session_id: uuid.UUID,
    sessions: SessionStore = Depends(get_sessions),
):
    if not sessions.discard(session_id):
        raise HTTPException(status_code=404, detail="Split session not found")
