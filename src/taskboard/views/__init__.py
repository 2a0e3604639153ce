"""Headless board views that subscribe to the project store."""

from __future__ import annotations

from taskboard.views.project_input import INVALID_INPUT_MESSAGE, ProjectInput
from taskboard.views.project_list import DragData, ProjectItem, ProjectList

__all__ = [
    "DragData",
    "INVALID_INPUT_MESSAGE",
    "ProjectInput",
    "ProjectItem",
    "ProjectList",
]
