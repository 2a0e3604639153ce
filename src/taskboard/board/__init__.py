"""Project store, subscription plumbing, and status transitions."""

from __future__ import annotations

from taskboard.board.state import SnapshotSubscriber, State, Subscription
from taskboard.board.store import DuplicateProjectIdError, ProjectStore
from taskboard.board.transitions import (
    VALID_TRANSITIONS,
    TransitionOutcome,
    validate_transition,
)

__all__ = [
    "DuplicateProjectIdError",
    "ProjectStore",
    "SnapshotSubscriber",
    "State",
    "Subscription",
    "TransitionOutcome",
    "VALID_TRANSITIONS",
    "validate_transition",
]
