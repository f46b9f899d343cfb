from contextlib import contextmanager

from fastapi import HTTPException, Request

from billsplit.core.exceptions import (
    AssignmentModeError, NotFoundError, ParticipantValidationError, ReceiptValidationError,
)
from billsplit.services.session_service import SessionStore


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


@contextmanager
def translate_errors():
    """Map engine errors onto HTTP status codes."""
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (ParticipantValidationError, ReceiptValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except AssignmentModeError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


def version_conflict() -> HTTPException:
    return HTTPException(status_code=409, detail="Version conflict, please refresh")
