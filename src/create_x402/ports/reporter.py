"""Port for transient step status display."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class StatusHandle(ABC):
    @abstractmethod
    def succeed(self, text: str) -> None:
        """Finish in the success state."""

    @abstractmethod
    def fail(self, text: str) -> None:
        """Finish in the failure state."""

    @abstractmethod
    def stop(self) -> None:
        """Finish without a final message."""


class StatusReporter(ABC):
    @abstractmethod
    def start(
        self,
        text: str,
        *,
        progress_items: Sequence[str] = (),
        interval: float = 0.35,
    ) -> StatusHandle:
        """Show a running indicator, optionally cycling ``progress_items``."""
