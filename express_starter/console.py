"""
console.py

Responsibility: Everything the user sees or types.

The orchestrator only talks to a presenter, so tests can swap in a recording
one and the control flow never touches the terminal directly.
"""

from __future__ import annotations

from typing import IO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt


class Presenter:
    def __init__(self, console: Console | None = None, *, stream: IO[str] | None = None) -> None:
        self.console = console or Console()
        # Prompts read from `stream` instead of stdin when given.
        self._stream = stream

    def intro(self) -> None:
        self.console.print("Create an Express.js project from this CLI TOOL! :rocket:")

    def ask_text(self, message: str, default: str) -> str:
        return Prompt.ask(message, console=self.console, default=default, stream=self._stream)

    def ask_confirm(self, message: str, default: bool) -> bool:
        return Confirm.ask(message, console=self.console, default=default, stream=self._stream)

    def success(self, project_name: str) -> None:
        name = escape(project_name)
        self.console.print()
        self.console.print(f"[black on white]:tada: Project '{name}' created successfully! :tada:[/]")
        self.console.print()
        self.console.print("[yellow italic]Next Steps:[/]")
        self.console.print(f"[bold]-> cd {name}[/]")
        self.console.print("[bold]-> npm install[/]")
        self.console.print()
        self.console.print("[bright_green italic]Start your server:[/]")
        self.console.print("[bold]1-> npm run dev[/] :rocket:")
        self.console.print()

    def failure(self, error: BaseException) -> None:
        self.console.print(f"[red]Error: {escape(str(error))}[/]")
