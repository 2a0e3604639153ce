"""Project store: the single source of truth for the board.

The store owns the ordered list of projects. Every mutation is followed by a
full fan-out to all subscribers before the mutating call returns. Views get
copies; only ``add`` and ``move`` change what the store holds.

Mutations requested from inside a subscriber callback are not applied in the
middle of a fan-out. They are queued and applied, in request order, once the
current fan-out has finished, each followed by its own fan-out. Subscribers
therefore observe every mutation in the order it was applied, and each
snapshot reflects the state right after that mutation.
"""

from __future__ import annotations

import uuid
from collections import deque
from typing import Callable

from taskboard.board.state import State
from taskboard.board.transitions import TransitionOutcome, validate_transition
from taskboard.models import Project, ProjectStatus


class DuplicateProjectIdError(Exception):
    """Raised when the id factory returns an id that was already issued.

    Attributes:
        project_id: The repeated identifier.
    """

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project id {project_id} was already issued by this store")


def _uuid_id() -> str:
    return str(uuid.uuid4())


class ProjectStore(State[Project]):
    """Authoritative, observable collection of projects.

    Construct one per board and pass it to every view that needs it.

    Args:
        id_factory: Callable returning a new opaque id for each project.
            Defaults to random UUID4 strings.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        super().__init__()
        self._projects: list[Project] = []
        self._id_factory = id_factory or _uuid_id
        self._issued_ids: set[str] = set()
        self._notifying = False
        self._pending: deque[Callable[[], None]] = deque()

    def __len__(self) -> int:
        return len(self._projects)

    @property
    def projects(self) -> list[Project]:
        """Fresh snapshot of all projects in creation order."""
        return self._snapshot()

    def get(self, project_id: str) -> Project | None:
        """Return the project with ``project_id`` or None if unknown."""
        index = self._index_of(project_id)
        return None if index is None else self._projects[index]

    def add(self, title: str, description: str, people: int) -> Project:
        """Create an active project and notify subscribers.

        No field validation happens here; callers validate input first.

        Args:
            title: Project title.
            description: Project description.
            people: Number of people assigned.

        Returns:
            The created project. When called during a fan-out the project is
            appended after that fan-out completes.

        Raises:
            DuplicateProjectIdError: If the id factory repeats an id.
        """
        project = Project(
            id=self._issue_id(),
            title=title,
            description=description,
            people=people,
            status=ProjectStatus.active,
        )

        def apply() -> None:
            self._projects.append(project)
            self.logger.info(
                "project_added",
                project_id=project.id,
                title=project.title,
                people=project.people,
                total_projects=len(self._projects),
            )
            self._notify()

        self._run_mutation(apply, operation="add", project_id=project.id)
        return project

    def move(self, project_id: str, new_status: ProjectStatus) -> TransitionOutcome:
        """Change a project's status and notify subscribers.

        Unknown ids and requests for the status a project already has are
        silent no-ops: nothing changes and nobody is notified.

        Args:
            project_id: Id of the project to move.
            new_status: Target status.

        Returns:
            What happened, or ``TransitionOutcome.deferred`` when called
            during a fan-out.

        Raises:
            ValueError: If ``new_status`` does not name a ProjectStatus.
        """
        new_status = ProjectStatus(new_status)
        outcome: list[TransitionOutcome] = []

        def apply() -> None:
            outcome.append(self._apply_move(project_id, new_status))

        self._run_mutation(apply, operation="move", project_id=project_id)
        return outcome[0] if outcome else TransitionOutcome.deferred

    def _apply_move(self, project_id: str, new_status: ProjectStatus) -> TransitionOutcome:
        index = self._index_of(project_id)
        if index is None:
            self.logger.debug("move_ignored", project_id=project_id, reason="not_found")
            return TransitionOutcome.not_found

        current = self._projects[index]
        if not validate_transition(current.status, new_status):
            self.logger.debug(
                "move_ignored",
                project_id=project_id,
                reason="unchanged",
                status=current.status.value,
            )
            return TransitionOutcome.unchanged

        self._projects[index] = current.model_copy(update={"status": new_status})
        self.logger.info(
            "project_moved",
            project_id=project_id,
            from_status=current.status.value,
            to_status=new_status.value,
        )
        self._notify()
        return TransitionOutcome.moved

    def _run_mutation(self, apply: Callable[[], None], operation: str, project_id: str) -> None:
        if self._notifying:
            self._pending.append(apply)
            self.logger.debug(
                "mutation_deferred",
                operation=operation,
                project_id=project_id,
                queued=len(self._pending),
            )
            return

        self._notifying = True
        try:
            apply()
            while self._pending:
                self._pending.popleft()()
        finally:
            self._notifying = False
            self._pending.clear()

    def _issue_id(self) -> str:
        project_id = self._id_factory()
        if project_id in self._issued_ids:
            raise DuplicateProjectIdError(project_id)
        self._issued_ids.add(project_id)
        return project_id

    def _index_of(self, project_id: str) -> int | None:
        for index, project in enumerate(self._projects):
            if project.id == project_id:
                return index
        return None

    def _snapshot(self) -> list[Project]:
        return list(self._projects)
