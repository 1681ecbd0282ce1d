"""Plain-text export target."""

from __future__ import annotations

from .markup import strip_formatting


def render_text(content: str) -> bytes:
    """UTF-8 bytes of ``content`` with all markup removed."""
    return strip_formatting(content).encode("utf-8")
