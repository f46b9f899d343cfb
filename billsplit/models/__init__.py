from billsplit.models.receipt import LineItem, Receipt
from billsplit.models.roster import Participant, Roster
from billsplit.models.assignment import (
    Assignment, AssignmentMode, AssignmentStore, FreeSplitAssignment, PortionedAssignment,
)
from billsplit.models.summary import ItemShare, PersonTotal, SplitSummary
from billsplit.models.session import SplitSession

__all__ = [
    "LineItem", "Receipt",
    "Participant", "Roster",
    "Assignment", "AssignmentMode", "AssignmentStore", "FreeSplitAssignment", "PortionedAssignment",
    "ItemShare", "PersonTotal", "SplitSummary",
    "SplitSession",
]
