"""Project list view: one column of the board.

A ProjectList has a fixed status affinity. It subscribes to the store once,
at construction, and on every snapshot keeps only the projects with its
status and rebuilds its items from scratch. Dropping a dragged project onto
the list asks the store to move it; the list never edits projects itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from taskboard.board.store import ProjectStore
from taskboard.board.transitions import TransitionOutcome
from taskboard.logging import get_logger
from taskboard.models import Project, ProjectStatus, Snapshot, partition_by_status

logger = get_logger(__name__)

DRAG_MIME_TYPE = "text/plain"


@dataclass(frozen=True)
class DragData:
    """Payload carried by a drag gesture."""

    mime_type: str
    data: str


@dataclass(frozen=True)
class ProjectItem:
    """One rendered entry of a project list."""

    project: Project

    @property
    def label(self) -> str:
        return self.project.title

    def drag_start(self) -> DragData:
        """Begin dragging this item; the payload carries the project id."""
        return DragData(mime_type=DRAG_MIME_TYPE, data=self.project.id)


class ProjectList:
    """Board column showing the projects with one status.

    Attributes:
        status: Status affinity fixed at construction.
        assigned_projects: Projects from the latest snapshot with that status.
        items: Rendered entries, rebuilt on every snapshot.
        render_count: Number of times the items were rebuilt.
        droppable: True while a compatible drag hovers over the list.
    """

    def __init__(self, store: ProjectStore, status: ProjectStatus) -> None:
        self.store = store
        self.status = ProjectStatus(status)
        self.assigned_projects: list[Project] = []
        self.items: list[ProjectItem] = []
        self.render_count = 0
        self.droppable = False
        self.logger = logger.bind(component="ProjectList", status=self.status.value)

        self.element_id = f"{self.status.value}-projects"
        self.list_id = f"{self.status.value}-projects-list"
        self.heading = ""

        self.subscription = store.subscribe(self)
        self.render_content()

    def render_content(self) -> None:
        self.heading = f"{self.status.value.upper()} PROJECTS"

    def receive_snapshot(self, snapshot: Snapshot) -> None:
        self.assigned_projects = partition_by_status(snapshot)[self.status]
        self.render_projects()

    def render_projects(self) -> None:
        # full replace, never an incremental diff
        self.items = [ProjectItem(project) for project in self.assigned_projects]
        self.render_count += 1

    def drag_over(self, drag_data: DragData) -> bool:
        """Accept the hover only for project payloads."""
        self.droppable = drag_data.mime_type == DRAG_MIME_TYPE
        return self.droppable

    def drag_leave(self) -> None:
        self.droppable = False

    def drop(self, drag_data: DragData) -> TransitionOutcome:
        """Move the dragged project into this list.

        Args:
            drag_data: Payload produced by ``ProjectItem.drag_start``.

        Returns:
            Outcome reported by the store.
        """
        self.droppable = False
        outcome = self.store.move(drag_data.data, self.status)
        self.logger.debug("project_dropped", project_id=drag_data.data, outcome=outcome.value)
        return outcome
