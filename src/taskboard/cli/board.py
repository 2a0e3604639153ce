"""Board session CLI commands.

Runs an interactive board in the terminal: proposals are entered through the
input flow, both lists subscribe to one store, and moves go through the
lists' drop handling exactly as a drag-and-drop would.
"""

from __future__ import annotations

import shlex
import sys
import uuid
from typing import Callable, TextIO

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskboard.board.store import ProjectStore
from taskboard.board.transitions import TransitionOutcome
from taskboard.config import InputRulesConfig
from taskboard.logging import bind_board_context, get_logger, set_correlation_id
from taskboard.models import ProjectStatus
from taskboard.views.project_input import ProjectInput
from taskboard.views.project_list import DRAG_MIME_TYPE, DragData, ProjectList

app = typer.Typer(help="Interactive board commands")
console = Console()
logger = get_logger(__name__)

SHORT_ID_LENGTH = 8

HELP_TEXT = """Commands:
  add <title> <description> <people>   propose a project (quote multi-word values)
  move <id> <active|finished>          drag a project onto a list (id prefix allowed)
  show                                 render both lists
  help                                 show this help
  quit                                 leave the session"""

OUTCOME_MESSAGES = {
    TransitionOutcome.moved: "[green]moved[/green]",
    TransitionOutcome.unchanged: "[yellow]unchanged[/yellow]",
    TransitionOutcome.not_found: "[yellow]not found[/yellow]",
    TransitionOutcome.deferred: "[dim]deferred[/dim]",
}


class BoardSession:
    """One terminal board: a store, its input form, and both lists.

    Args:
        console: Rich console used for all output.
        rules: Input constraints for the proposal form.
        store: Store to drive; a fresh one is created when omitted.
    """

    def __init__(
        self,
        console: Console,
        rules: InputRulesConfig | None = None,
        store: ProjectStore | None = None,
    ) -> None:
        self.console = console
        self.store = store if store is not None else ProjectStore()
        self.project_input = ProjectInput(self.store, rules=rules, notifier=self._print_notice)
        self.lists = {
            status: ProjectList(self.store, status) for status in ProjectStatus
        }

    def _print_notice(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")

    def handle(self, line: str) -> bool:
        """Execute one command line.

        Returns:
            False when the session should end, True otherwise.
        """
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Could not parse command:[/red] {escape(str(e))}")
            return True

        if not tokens:
            return True

        command, args = tokens[0].lower(), tokens[1:]
        if command in ("quit", "exit"):
            return False
        if command == "help":
            self.console.print(HELP_TEXT, markup=False)
        elif command == "show":
            self.render()
        elif command == "add":
            self._traced(self._add, args)
        elif command == "move":
            self._traced(self._move, args)
        else:
            self.console.print(
                f"[red]Unknown command:[/red] {escape(command)}. Type 'help' for commands."
            )
        return True

    def _traced(self, command: Callable[[list[str]], None], args: list[str]) -> None:
        """Run one board command with a fresh correlation id on its log lines."""
        set_correlation_id(uuid.uuid4().hex)
        try:
            command(args)
        finally:
            set_correlation_id(None)

    def _add(self, args: list[str]) -> None:
        if len(args) != 3:
            self.console.print("[red]Usage:[/red] add <title> <description> <people>")
            return

        self.project_input.title, self.project_input.description, self.project_input.people = args
        project = self.project_input.submit()
        if project is None:
            return

        self.console.print(
            f"[green]Added[/green] {escape(project.title)} [dim]({project.id[:SHORT_ID_LENGTH]})[/dim]"
        )
        self.render()

    def _move(self, args: list[str]) -> None:
        if len(args) != 2:
            self.console.print("[red]Usage:[/red] move <id> <active|finished>")
            return

        raw_id, raw_status = args
        if not raw_id.strip():
            self.console.print("[red]Project id must not be empty[/red]")
            return

        try:
            status = ProjectStatus(raw_status.lower())
        except ValueError:
            valid = ", ".join(s.value for s in ProjectStatus)
            self.console.print(f"[red]Invalid status:[/red] {escape(raw_status)}. Valid values: {valid}")
            return

        project_id = self.resolve_id(raw_id)
        if project_id is None:
            self.console.print(f"[red]Ambiguous id prefix:[/red] {escape(raw_id)}")
            return

        outcome = self.lists[status].drop(DragData(mime_type=DRAG_MIME_TYPE, data=project_id))
        self.console.print(OUTCOME_MESSAGES[outcome])
        if outcome.changed:
            self.render()

    def resolve_id(self, raw_id: str) -> str | None:
        """Expand an id prefix to a full project id.

        Returns the full id for an exact or unique prefix match, the input
        unchanged when nothing matches, and None when the prefix is ambiguous.
        An empty id is returned unchanged rather than matching every project.
        """
        if not raw_id:
            return raw_id
        ids = [p.id for p in self.store.projects]
        if raw_id in ids:
            return raw_id
        matches = [project_id for project_id in ids if project_id.startswith(raw_id)]
        if len(matches) > 1:
            return None
        return matches[0] if matches else raw_id

    def render(self) -> None:
        for project_list in self.lists.values():
            table = Table(title=project_list.heading)
            table.add_column("ID", style="cyan", no_wrap=True)
            table.add_column("Title", style="bold")
            table.add_column("People", justify="right")
            table.add_column("Description", style="dim")

            for item in project_list.items:
                project = item.project
                table.add_row(
                    project.id[:SHORT_ID_LENGTH],
                    escape(item.label),
                    str(project.people),
                    escape(project.description),
                )

            if not project_list.items:
                table.caption = "empty"
            self.console.print(table)

    def run(self, stream: TextIO) -> None:
        """Read and execute commands until ``quit`` or end of input."""
        for line in stream:
            if not self.handle(line):
                break


@app.command()
def session() -> None:
    """Start an interactive board session reading commands from stdin."""
    from taskboard.main import get_app_context

    ctx = get_app_context()
    bind_board_context(board_id="terminal")

    board = BoardSession(console, rules=ctx.config.rules)
    console.print("[bold cyan]Taskboard session[/bold cyan] [dim](type 'help' for commands)[/dim]")
    logger.info("board_session_started")

    board.run(sys.stdin)

    logger.info(
        "board_session_ended",
        projects=len(board.store),
        notifications=board.store.notification_count,
    )
