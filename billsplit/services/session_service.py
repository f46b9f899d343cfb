import logging
import uuid
from collections import OrderedDict
from typing import Callable

from billsplit.core.config import settings
from billsplit.core.exceptions import UnknownSessionError
from billsplit.models.assignment import AssignmentMode, AssignmentStore
from billsplit.models.receipt import Receipt
from billsplit.models.roster import Participant, Roster
from billsplit.models.session import SplitSession
from billsplit.services import assignment_service, roster_service

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory split sessions for the lifetime of the process.
    Each change swaps in a new immutable snapshot and bumps its version.
    """

    def __init__(self, max_sessions: int | None = None):
        self.max_sessions = settings.max_sessions if max_sessions is None else max_sessions
        self._sessions: OrderedDict[uuid.UUID, SplitSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, receipt: Receipt, roster: Roster | None = None) -> SplitSession:
        session = SplitSession(
            receipt=receipt,
            roster=roster or Roster(),
            assignments=AssignmentStore.for_receipt(receipt),
        )
        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted split session {evicted}")
        logger.info(f"Created split session {session.id} with {len(receipt.items)} line item(s)")
        return session

    def get(self, session_id: uuid.UUID) -> SplitSession | None:
        return self._sessions.get(session_id)

    def discard(self, session_id: uuid.UUID) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def apply(
        self,
        session_id: uuid.UUID,
        expected_version: int | None,
        change: Callable[[SplitSession], dict],
    ) -> SplitSession | None:
        """
        Apply change() with optimistic locking.
        change returns the fields to replace. Returns None on version conflict.
        A change that leaves every field as it was returns the session untouched.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(session_id)
        if expected_version is not None and session.version != expected_version:
            logger.warning(
                f"Version conflict on session {session_id}: expected {expected_version}, at {session.version}"
            )
            return None

        updates = change(session)
        if all(getattr(session, field) == value for field, value in updates.items()):
            logger.debug(f"No-op change on session {session_id}, version stays {session.version}")
            return session
        updated = session.model_copy(update={**updates, "version": session.version + 1})
        self._sessions[session_id] = updated
        return updated


def add_participant(
    sessions: SessionStore,
    session_id: uuid.UUID,
    name: str,
    expected_version: int | None = None,
) -> tuple[SplitSession, Participant] | None:
    added = {}

    def change(session: SplitSession) -> dict:
        roster, participant = roster_service.add_participant(session.roster, name)
        added["participant"] = participant
        return {"roster": roster}

    result = sessions.apply(session_id, expected_version, change)
    if result is None:
        return None
    return result, added["participant"]


def remove_participant(
    sessions: SessionStore,
    session_id: uuid.UUID,
    participant_id: str,
    expected_version: int | None = None,
) -> SplitSession | None:
    def change(session: SplitSession) -> dict:
        roster, store = roster_service.remove_participant(
            session.roster, session.assignments, participant_id
        )
        return {"roster": roster, "assignments": store}

    return sessions.apply(session_id, expected_version, change)


def toggle_assignment(
    sessions: SessionStore,
    session_id: uuid.UUID,
    item_id: str,
    participant_id: str,
    expected_version: int | None = None,
) -> SplitSession | None:
    def change(session: SplitSession) -> dict:
        return {"assignments": assignment_service.toggle_assignment(
            session.assignments, session.receipt, session.roster, item_id, participant_id
        )}

    return sessions.apply(session_id, expected_version, change)


def update_portion(
    sessions: SessionStore,
    session_id: uuid.UUID,
    item_id: str,
    participant_id: str,
    delta: int,
    expected_version: int | None = None,
) -> SplitSession | None:
    def change(session: SplitSession) -> dict:
        return {"assignments": assignment_service.update_portion(
            session.assignments, session.receipt, session.roster, item_id, participant_id, delta
        )}

    return sessions.apply(session_id, expected_version, change)


def set_assignment_mode(
    sessions: SessionStore,
    session_id: uuid.UUID,
    item_id: str,
    mode: AssignmentMode,
    expected_version: int | None = None,
) -> SplitSession | None:
    def change(session: SplitSession) -> dict:
        return {"assignments": assignment_service.set_assignment_mode(
            session.assignments, session.receipt, item_id, mode
        )}

    return sessions.apply(session_id, expected_version, change)


def assign_all_to_all(
    sessions: SessionStore,
    session_id: uuid.UUID,
    expected_version: int | None = None,
) -> SplitSession | None:
    def change(session: SplitSession) -> dict:
        return {"assignments": assignment_service.assign_all_to_all(
            session.assignments, session.receipt, session.roster
        )}

    return sessions.apply(session_id, expected_version, change)
