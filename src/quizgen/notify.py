"""User-facing notifications rendered on the Rich console."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from rich.console import Console
from rich.panel import Panel

Severity = Literal["info", "destructive"]

__all__ = [
    "Severity",
    "Notification",
    "Notifier",
    "ConsoleNotifier",
]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: Severity = "info"


class Notifier(Protocol):
    def __call__(self, notification: Notification) -> None: ...


class ConsoleNotifier:
    """Show notifications as Rich panels and mirror them to the log."""

    def __init__(
        self, console: Console, logger: Optional[logging.Logger] = None
    ) -> None:
        self.console = console
        self.logger = logger

    def __call__(self, notification: Notification) -> None:
        destructive = notification.severity == "destructive"
        self.console.print(
            Panel(
                notification.description,
                title=notification.title,
                border_style="red" if destructive else "green",
            )
        )
        if self.logger is not None:
            self.logger.log(
                logging.WARNING if destructive else logging.INFO,
                "Notification shown",
                extra={
                    "title": notification.title,
                    "severity": notification.severity,
                },
            )
