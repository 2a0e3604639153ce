"""Project input flow: collect, validate, and submit a proposal.

The form fields hold raw text as typed by the user. Submitting validates the
text against the configured rules; invalid input produces a blocking notice
and leaves the store untouched.
"""

from __future__ import annotations

from typing import Callable

from taskboard.board.store import ProjectStore
from taskboard.config import InputRulesConfig
from taskboard.logging import get_logger
from taskboard.models import Project
from taskboard.validation import Validatable, validate

logger = get_logger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input, please try again!"

Notifier = Callable[[str], None]


def _log_notice(message: str) -> None:
    logger.warning("invalid_input", notice=message)


class ProjectInput:
    """Headless proposal form bound to a store.

    Args:
        store: Store receiving accepted proposals.
        rules: Field constraints; defaults to InputRulesConfig().
        notifier: Called with the notice text when input is rejected.
    """

    def __init__(
        self,
        store: ProjectStore,
        rules: InputRulesConfig | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.store = store
        self.rules = rules if rules is not None else InputRulesConfig()
        self.notifier = notifier or _log_notice
        self.last_notice: str | None = None
        self.title = ""
        self.description = ""
        self.people = ""

    def gather_user_input(self) -> tuple[str, str, int] | None:
        """Validate the fields and return them typed, or None if rejected."""
        try:
            people: int | None = int(self.people.strip())
        except ValueError:
            people = None

        title_ok = validate(Validatable(value=self.title, required=self.rules.title_required))
        description_ok = validate(
            Validatable(
                value=self.description,
                required=True,
                min_length=self.rules.description_min_length,
            )
        )
        people_ok = people is not None and validate(
            Validatable(
                value=people,
                required=True,
                min=self.rules.people_min,
                max=self.rules.people_max,
            )
        )

        if not (title_ok and description_ok and people_ok):
            self.last_notice = INVALID_INPUT_MESSAGE
            self.notifier(INVALID_INPUT_MESSAGE)
            return None

        return self.title, self.description, people

    def clear_inputs(self) -> None:
        self.title = ""
        self.description = ""
        self.people = ""

    def submit(self) -> Project | None:
        """Add the entered project to the store if the input is valid.

        Returns:
            The created project, or None when the input was rejected.
        """
        user_input = self.gather_user_input()
        if user_input is None:
            return None

        title, description, people = user_input
        project = self.store.add(title, description, people)
        self.clear_inputs()
        return project
