class SplitError(Exception):
    """Base class for errors raised by the split engine."""


class NotFoundError(SplitError, KeyError):
    """A referenced receipt item, participant or session does not exist."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class UnknownItemError(NotFoundError):
    def __init__(self, item_id: str):
        super().__init__(f"Line item {item_id} not found")
        self.item_id = item_id


class UnknownParticipantError(NotFoundError):
    def __init__(self, participant_id: str):
        super().__init__(f"Participant {participant_id} not found")
        self.participant_id = participant_id


class UnknownSessionError(NotFoundError):
    def __init__(self, session_id):
        super().__init__(f"Split session {session_id} not found")
        self.session_id = session_id


class ParticipantValidationError(SplitError, ValueError):
    pass


class DuplicateParticipantError(ParticipantValidationError):
    pass


class ReceiptValidationError(SplitError, ValueError):
    """Raised when extracted or manually entered receipt data is unusable."""


class AssignmentModeError(SplitError, ValueError):
    """An allocator was applied to an item in the other assignment mode."""
