import uuid
from datetime import datetime

from pydantic import BaseModel

from billsplit.models.session import SplitSession
from billsplit.schemas.assignment import AssignmentResponse
from billsplit.schemas.participant import ParticipantResponse
from billsplit.schemas.receipt import LineItemResponse, ReceiptResponse


class SessionResponse(BaseModel):
    id: uuid.UUID
    version: int
    created_at: datetime
    receipt: ReceiptResponse
    participants: list[ParticipantResponse]
    assignments: list[AssignmentResponse]

    @classmethod
    def from_session(cls, session: SplitSession, **extra) -> "SessionResponse":
        receipt = session.receipt
        return cls(
            id=session.id,
            version=session.version,
            created_at=session.created_at,
            receipt=ReceiptResponse(
                items=[LineItemResponse.model_validate(item) for item in receipt.items],
                subtotal=receipt.subtotal,
                tax=receipt.tax,
                service_charge=receipt.service_charge,
                total=receipt.total,
            ),
            participants=[ParticipantResponse.model_validate(p) for p in session.roster.participants],
            assignments=[
                AssignmentResponse.from_assignment(a) for a in session.assignments.assignments.values()
            ],
            **extra,
        )


class ParticipantAddedResponse(SessionResponse):
    participant: ParticipantResponse
