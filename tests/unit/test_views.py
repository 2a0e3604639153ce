"""Unit tests for the board views.

Tests cover:
- ProjectList filtering, full re-render, and static content
- Drag-and-drop between lists
- ProjectInput validation, notices, and submission
"""

from __future__ import annotations

import itertools

import pytest

from taskboard.board.store import ProjectStore
from taskboard.board.transitions import TransitionOutcome
from taskboard.config import InputRulesConfig
from taskboard.models import ProjectStatus, partition_by_status
from taskboard.views.project_input import INVALID_INPUT_MESSAGE, ProjectInput
from taskboard.views.project_list import DragData, ProjectList


@pytest.fixture
def store() -> ProjectStore:
    counter = itertools.count(1)
    return ProjectStore(id_factory=lambda: f"id{next(counter)}")


@pytest.fixture
def active_list(store: ProjectStore) -> ProjectList:
    return ProjectList(store, ProjectStatus.active)


@pytest.fixture
def finished_list(store: ProjectStore) -> ProjectList:
    return ProjectList(store, ProjectStatus.finished)


class TestProjectList:
    """Test list rendering driven by store snapshots."""

    def test_static_content(self, active_list, finished_list):
        assert active_list.heading == "ACTIVE PROJECTS"
        assert active_list.element_id == "active-projects"
        assert active_list.list_id == "active-projects-list"
        assert finished_list.heading == "FINISHED PROJECTS"
        assert finished_list.list_id == "finished-projects-list"

    def test_subscribes_once_at_construction(self, store, active_list, finished_list):
        assert store.subscriber_count == 2
        assert active_list.subscription.active is True

    def test_add_grows_active_list_only(self, store, active_list, finished_list):
        store.add("Build API", "Create REST API", 3)

        assert [item.label for item in active_list.items] == ["Build API"]
        assert finished_list.items == []
        assert finished_list.render_count == 1

    def test_move_shifts_project_between_lists(self, store, active_list, finished_list):
        project = store.add("X", "desc text", 2)
        assert project.id == "id1"

        store.move("id1", ProjectStatus.finished)

        assert active_list.items == []
        assert [item.project.id for item in finished_list.items] == ["id1"]
        assert store.notification_count == 2

    def test_render_replaces_items(self, store, active_list):
        store.add("A", "desc text", 1)
        first_items = active_list.items
        store.add("B", "desc text", 1)

        assert active_list.items is not first_items
        assert [item.label for item in active_list.items] == ["A", "B"]
        assert active_list.render_count == 2

    def test_lists_cover_snapshot_without_overlap(self, store, active_list, finished_list):
        for title in ("A", "B", "C", "D"):
            store.add(title, "desc text", 1)
        store.move("id2", ProjectStatus.finished)
        store.move("id4", ProjectStatus.finished)

        active_ids = {p.id for p in active_list.assigned_projects}
        finished_ids = {p.id for p in finished_list.assigned_projects}
        assert active_ids | finished_ids == {p.id for p in store.projects}
        assert active_ids & finished_ids == set()

    def test_lists_match_status_partition(self, store, active_list, finished_list):
        for title in ("A", "B", "C"):
            store.add(title, "desc text", 1)
        store.move("id2", ProjectStatus.finished)

        buckets = partition_by_status(store.projects)
        assert active_list.assigned_projects == buckets[ProjectStatus.active]
        assert finished_list.assigned_projects == buckets[ProjectStatus.finished]
        assert [p.title for p in active_list.assigned_projects] == ["A", "C"]


class TestDragAndDrop:
    """Drag a project item from one list and drop it onto another."""

    def test_drag_start_carries_project_id(self, store, active_list):
        store.add("X", "desc text", 2)
        data = active_list.items[0].drag_start()
        assert data == DragData(mime_type="text/plain", data="id1")

    def test_drag_over_accepts_plain_text_only(self, finished_list):
        assert finished_list.drag_over(DragData("text/plain", "id1")) is True
        assert finished_list.droppable is True
        assert finished_list.drag_over(DragData("image/png", "id1")) is False
        assert finished_list.droppable is False

    def test_drag_leave_resets_droppable(self, finished_list):
        finished_list.drag_over(DragData("text/plain", "id1"))
        finished_list.drag_leave()
        assert finished_list.droppable is False

    def test_drop_moves_project(self, store, active_list, finished_list):
        store.add("X", "desc text", 2)
        data = active_list.items[0].drag_start()
        finished_list.drag_over(data)

        outcome = finished_list.drop(data)

        assert outcome is TransitionOutcome.moved
        assert finished_list.droppable is False
        assert [item.label for item in finished_list.items] == ["X"]
        assert active_list.items == []

    def test_drop_on_same_list_does_not_rerender(self, store, active_list):
        store.add("X", "desc text", 2)
        data = active_list.items[0].drag_start()

        outcome = active_list.drop(data)

        assert outcome is TransitionOutcome.unchanged
        assert active_list.render_count == 1

    def test_drop_unknown_id_is_ignored(self, store, active_list, finished_list):
        outcome = finished_list.drop(DragData("text/plain", "nonexistent-id"))

        assert outcome is TransitionOutcome.not_found
        assert store.notification_count == 0
        assert finished_list.render_count == 0


class TestProjectInput:
    """Test input collection, validation, and submission."""

    @pytest.fixture
    def notices(self) -> list[str]:
        return []

    @pytest.fixture
    def form(self, store, notices) -> ProjectInput:
        return ProjectInput(store, notifier=notices.append)

    def _fill(self, form: ProjectInput, title: str, description: str, people: str) -> None:
        form.title = title
        form.description = description
        form.people = people

    def test_valid_submission_adds_and_clears(self, store, form, notices, active_list):
        self._fill(form, "Build API", "Create REST API", "3")

        project = form.submit()

        assert project is not None
        assert project.people == 3
        assert [item.label for item in active_list.items] == ["Build API"]
        assert (form.title, form.description, form.people) == ("", "", "")
        assert notices == []

    @pytest.mark.parametrize(
        "title,description,people",
        [
            ("", "Create REST API", "3"),
            ("   ", "Create REST API", "3"),
            ("Build API", "", "3"),
            ("Build API", "API", "3"),
            ("Build API", "Create REST API", "0"),
            ("Build API", "Create REST API", "6"),
            ("Build API", "Create REST API", ""),
            ("Build API", "Create REST API", "three"),
            ("Build API", "Create REST API", "2.5"),
        ],
    )
    def test_invalid_input_is_rejected(self, store, form, notices, title, description, people):
        self._fill(form, title, description, people)

        assert form.submit() is None
        assert notices == [INVALID_INPUT_MESSAGE]
        assert form.last_notice == INVALID_INPUT_MESSAGE
        assert len(store) == 0
        assert store.notification_count == 0
        # Rejected input stays in the form
        assert form.title == title

    def test_gather_returns_typed_values(self, form):
        self._fill(form, "Build API", "Create REST API", " 5 ")
        assert form.gather_user_input() == ("Build API", "Create REST API", 5)

    def test_custom_rules(self, store, notices):
        rules = InputRulesConfig(description_min_length=0, people_min=2, people_max=10)
        form = ProjectInput(store, rules=rules, notifier=notices.append)
        self._fill(form, "Crew", "", "8")

        assert form.submit() is None  # description is still required

        self._fill(form, "Crew", "d", "8")
        assert form.submit() is not None

        self._fill(form, "Solo", "d", "1")
        assert form.submit() is None
        assert len(store) == 1

    def test_default_notifier_does_not_raise(self, store):
        form = ProjectInput(store)
        form.title = ""
        assert form.submit() is None
        assert form.last_notice == INVALID_INPUT_MESSAGE
