"""Interactive template menu and project-name prompt."""

from __future__ import annotations

from typing import Callable

import readchar
from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from create_x402.domain.template import TemplateCatalog

UP, DOWN, ENTER, CANCEL = "up", "down", "enter", "cancel"


class SelectionCancelled(Exception):
    """Raised when the user aborts the interactive prompts."""


def read_key() -> str:
    key = readchar.readkey()
    if key in (readchar.key.UP, "k"):
        return UP
    if key in (readchar.key.DOWN, "j"):
        return DOWN
    if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
        return ENTER
    if key in (readchar.key.ESC, readchar.key.CTRL_C, readchar.key.CTRL_D):
        return CANCEL
    return key


class InteractivePrompter:
    def __init__(
        self,
        console: Console,
        *,
        key_reader: Callable[[], str] = read_key,
        ask: Callable[..., str] = Prompt.ask,
    ) -> None:
        self._console = console
        self._read_key = key_reader
        self._ask = ask

    def select_template(self, catalog: TemplateCatalog, initial: int = 0) -> str:
        templates = list(catalog)
        if not templates:
            raise ValueError("template catalog is empty")
        index = initial % len(templates)

        def render() -> Group:
            table = Table.grid(padding=(0, 1))
            table.add_column(width=1)
            table.add_column()
            for position, template in enumerate(templates):
                pointer = "[cyan]❯[/cyan]" if position == index else " "
                title = escape(template.title)
                if position == index:
                    title = f"[bold cyan]{title}[/bold cyan]"
                line = f"{title} [dim]{escape(template.identifier)}[/dim]"
                if template.description:
                    line = f"{line}\n  [bright_black]{escape(template.description)}[/bright_black]"
                table.add_row(pointer, line)
            hint = Text("↑/↓ to move, enter to select, esc to cancel", style="dim")
            return Group(Text("Select a template", style="bold"), table, hint)

        try:
            with Live(render(), console=self._console, transient=True, auto_refresh=False) as live:
                while True:
                    key = self._read_key()
                    if key == UP:
                        index = (index - 1) % len(templates)
                    elif key == DOWN:
                        index = (index + 1) % len(templates)
                    elif key == ENTER:
                        break
                    elif key == CANCEL:
                        raise SelectionCancelled()
                    else:
                        continue
                    live.update(render(), refresh=True)
        except KeyboardInterrupt as exc:
            raise SelectionCancelled() from exc

        chosen = templates[index]
        self._console.print(f"[green]✔[/green] Template [cyan]{escape(chosen.identifier)}[/cyan]")
        return chosen.identifier

    def name_project(self, default: str) -> str:
        try:
            answer = self._ask("Project name", default=default, console=self._console)
        except (KeyboardInterrupt, EOFError) as exc:
            raise SelectionCancelled() from exc
        name = (answer or "").strip()
        return name or default
