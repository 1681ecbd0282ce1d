"""Turn marked-up content into timestamped export files."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping

from ..errors import ExportEncodingFailure
from .pdf import render_pdf
from .plain import render_text
from .word import render_docx

DEFAULT_PREFIX = "quiz-results"


class ExportFormat(Enum):
    """Supported export targets, valued by file extension."""

    TXT = "txt"
    DOCX = "docx"
    PDF = "pdf"

    @classmethod
    def from_value(cls, value: "str | ExportFormat") -> "ExportFormat":
        if isinstance(value, ExportFormat):
            return value
        normalized = value.strip().lower().lstrip(".")
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise ValueError(
            f"Unknown export format '{value}'. Expected one of: {expected}."
        )


ENCODERS: Mapping[ExportFormat, Callable[[str], bytes]] = {
    ExportFormat.TXT: render_text,
    ExportFormat.DOCX: render_docx,
    ExportFormat.PDF: render_pdf,
}


def build_filename(
    prefix: str,
    fmt: ExportFormat,
    when: datetime | None = None,
) -> str:
    """``<prefix>-<UTC timestamp>.<ext>`` with ``:`` and ``.`` made safe."""

    moment = (when or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    stamp = stamp.replace(":", "-").replace(".", "-")
    return f"{prefix}-{stamp}.{fmt.value}"


def export_content(
    content: str,
    fmt: "str | ExportFormat",
    out_dir: Path,
    *,
    prefix: str = DEFAULT_PREFIX,
    when: datetime | None = None,
) -> Path | None:
    """Encode ``content`` and write it under ``out_dir``.

    Returns ``None`` without touching the filesystem when there is nothing
    to export. Encoding happens before any file is created and the bytes are
    written to a temporary sibling that is renamed into place, so a failure
    raises :class:`ExportEncodingFailure` and leaves no partial artifact.
    An existing file with the same name gets a numbered sibling instead of
    being replaced.
    """

    if not content or not content.strip():
        return None
    target_format = ExportFormat.from_value(fmt)
    try:
        payload = ENCODERS[target_format](content)
    except Exception as exc:
        raise ExportEncodingFailure(
            f"Failed to encode {target_format.value} export: {exc}"
        ) from exc

    target = _unused_path(
        Path(out_dir) / build_filename(prefix, target_format, when)
    )
    try:
        _write_atomic(target, payload)
    except OSError as exc:
        raise ExportEncodingFailure(f"Failed to write {target}: {exc}") from exc
    return target


def _unused_path(target: Path) -> Path:
    """``target`` or the first ``<stem>-N<suffix>`` sibling that is free."""

    candidate = target
    counter = 1
    while candidate.exists():
        candidate = target.with_name(f"{target.stem}-{counter}{target.suffix}")
        counter += 1
    return candidate


def _write_atomic(target: Path, payload: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    handle, temp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".part"
    )
    try:
        with os.fdopen(handle, "wb") as stream:
            stream.write(payload)
        os.replace(temp_name, target)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
