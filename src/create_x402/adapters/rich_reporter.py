"""Spinner-based status reporter rendered with rich."""

from __future__ import annotations

import threading
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from create_x402.ports.reporter import StatusHandle, StatusReporter

SUCCESS_SYMBOL = "[green]✔[/green]"
FAILURE_SYMBOL = "[red]✖[/red]"


class RichStatusHandle(StatusHandle):
    def __init__(self, console: Console, text: str, progress_items: Sequence[str], interval: float) -> None:
        self._console = console
        self._text = text
        self._finished = False
        self._stop_event = threading.Event()
        self._status = console.status(escape(text), spinner="dots")
        self._status.start()
        self._ticker: threading.Thread | None = None
        if progress_items:
            self._ticker = threading.Thread(
                target=self._rotate,
                args=(tuple(progress_items), interval),
                name="create-x402-status",
                daemon=True,
            )
            self._ticker.start()

    def _rotate(self, items: tuple[str, ...], interval: float) -> None:
        index = 0
        while not self._stop_event.wait(interval):
            label = items[index % len(items)]
            self._status.update(f"{escape(self._text)} [dim]{escape(label)}[/dim]")
            index += 1

    def succeed(self, text: str) -> None:
        self._finish()
        self._console.print(f"{SUCCESS_SYMBOL} {escape(text)}")

    def fail(self, text: str) -> None:
        self._finish()
        self._console.print(f"{FAILURE_SYMBOL} {escape(text)}")

    def stop(self) -> None:
        self._finish()

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        self._stop_event.set()
        if self._ticker is not None:
            self._ticker.join()
        self._status.stop()


class RichStatusReporter(StatusReporter):
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def start(
        self,
        text: str,
        *,
        progress_items: Sequence[str] = (),
        interval: float = 0.35,
    ) -> StatusHandle:
        return RichStatusHandle(self._console, text, progress_items, interval)
