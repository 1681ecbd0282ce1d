from __future__ import annotations

import logging

from rich.console import Console

from quizgen.notify import ConsoleNotifier, Notification


class _Capture(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _logger() -> tuple[logging.Logger, _Capture]:
    logger = logging.getLogger("quizgen.tests.notify")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    capture = _Capture()
    logger.addHandler(capture)
    return logger, capture


def test_console_notifier_renders_panel_and_logs():
    console = Console(record=True, width=80)
    logger, capture = _logger()
    notify = ConsoleNotifier(console, logger)

    notify(Notification("Download Complete", "Text file saved."))
    notify(Notification("Download Error", "Failed to download file.", "destructive"))

    output = console.export_text()
    assert "Download Complete" in output
    assert "Failed to download file." in output
    levels = [record.levelno for record in capture.records]
    assert levels == [logging.INFO, logging.WARNING]
    assert capture.records[1].title == "Download Error"
    assert capture.records[1].severity == "destructive"


def test_console_notifier_without_logger():
    console = Console(record=True, width=80)

    ConsoleNotifier(console)(Notification("Quiz ready", "Good luck."))

    assert "Good luck." in console.export_text()
