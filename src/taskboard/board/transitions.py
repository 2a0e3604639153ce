"""Status transition rules for projects on the board.

Projects move between the active and finished lists by drag-and-drop. A
project can be dropped onto either list; dropping it onto the list it is
already in is not a transition.
"""

from __future__ import annotations

import enum

from taskboard.models import ProjectStatus

# Authoritative transition table
VALID_TRANSITIONS: dict[ProjectStatus, set[ProjectStatus]] = {
    ProjectStatus.active: {ProjectStatus.finished},
    ProjectStatus.finished: {ProjectStatus.active},
}


def validate_transition(current: ProjectStatus, target: ProjectStatus) -> bool:
    """Validate if a status transition is allowed.

    Args:
        current: Current project status.
        target: Requested project status.

    Returns:
        True if the transition is listed in VALID_TRANSITIONS.
    """
    return target in VALID_TRANSITIONS.get(current, set())


class TransitionOutcome(str, enum.Enum):
    """Result of a move request.

    Values:
        moved: Status changed and subscribers were notified.
        unchanged: Project already had the requested status.
        not_found: No project with the given id.
        deferred: Requested during a fan-out; applied once it completes.
    """

    moved = "moved"
    unchanged = "unchanged"
    not_found = "not_found"
    deferred = "deferred"

    @property
    def changed(self) -> bool:
        return self is TransitionOutcome.moved
