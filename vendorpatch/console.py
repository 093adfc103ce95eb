#!/usr/bin/env python3

from typing import Protocol

from rich.console import Console as RichConsole
from rich.prompt import Prompt

from vendorpatch.errors import UserAbort


class Console:
    """Simple console wrapper focused on output."""

    def __init__(self, rich_console: RichConsole | None = None):
        self._rich = rich_console or RichConsole(highlight=False)

    @property
    def rich(self) -> RichConsole:
        return self._rich

    def print(self, *args, **kwargs):
        """Print using Rich console."""
        return self._rich.print(*args, **kwargs)

    def done(self):
        self._rich.print("[green]✔ Done![/green]")


class Prompter(Protocol):
    """Questions asked while a patch is being created."""

    def confirm_changes(self) -> bool: ...

    def ask(self, question: str) -> str: ...


class ConsolePrompter:
    """Prompter reading answers from the terminal."""

    def __init__(self, console: Console, confirm_answer: str = "y"):
        self.console = console
        self.confirm_answer = confirm_answer

    def confirm_changes(self) -> bool:
        self.console.print(
            "Once you have finished making the changes:\n"
            f"- Press [bold]{self.confirm_answer}[/bold] to continue.\n"
            "- Press [bold]a[/bold] or any other key to abort."
        )
        try:
            answer = Prompt.ask("Your choice", console=self.console.rich, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip() == self.confirm_answer

    def ask(self, question: str) -> str:
        try:
            return Prompt.ask(question, console=self.console.rich, default="", show_default=False).strip()
        except EOFError:
            return ""
        except KeyboardInterrupt as e:
            raise UserAbort("Patch creation aborted.") from e


class NonInteractivePrompter(ConsolePrompter):
    """Confirms interactively but never asks for optional values."""

    def ask(self, question: str) -> str:
        return ""
