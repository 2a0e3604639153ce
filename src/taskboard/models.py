"""Project model for Taskboard.

Defines the Project value type and the ProjectStatus enum. Projects are
frozen: the store replaces a record when its status changes, so every value
handed out to a view stays valid and unchanged for as long as the view keeps it.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class ProjectStatus(str, enum.Enum):
    """Board column a project belongs to.

    States:
        active: Proposed or in progress.
        finished: Dragged to the finished list.
    """

    active = "active"
    finished = "finished"


class Project(BaseModel):
    """A project proposal tracked by the board.

    Attributes:
        id: Opaque identifier assigned by the store at creation.
        title: Short project title.
        description: Free-form description.
        people: Number of people assigned.
        status: Current board column.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique identifier")
    title: str
    description: str
    people: int
    status: ProjectStatus = ProjectStatus.active


Snapshot = list[Project]


def partition_by_status(snapshot: Snapshot) -> dict[ProjectStatus, list[Project]]:
    """Split a snapshot into one bucket per status, keeping snapshot order.

    Every status gets a key, even when its bucket is empty.
    """
    buckets: dict[ProjectStatus, list[Project]] = {status: [] for status in ProjectStatus}
    for project in snapshot:
        buckets[project.status].append(project)
    return buckets
