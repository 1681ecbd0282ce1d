"""Lightweight markup used in quiz text and results.

Supported dialect, one line at a time:

- ``# ``, ``## ``, ``### `` at the start of a line: heading levels 1-3
- ``- `` at the start of a line: bullet, rendered with the ``•`` glyph
- ``***x***`` and ``**x**``: bold
- ``*x*`` where neither marker belongs to a double or triple run: italic

Bold markers are matched before the single-asterisk rule so ``**x**`` is
never read as two italic markers. Italic spans inside a bold span become
bold-italic runs. Nested or adjacent mixes such as ``*a**b**c*`` are not
part of the dialect and tokenize however the scan happens to fall.

The tokenizer produces a block sequence that every export target renders
independently; :func:`format_markup` is the tag-annotated form of that
sequence and :func:`strip_tags` its inverse.
"""

from __future__ import annotations

import re
from html import escape, unescape
from dataclasses import dataclass
from typing import Iterable, Union

__all__ = [
    "BULLET",
    "Run",
    "Heading",
    "Paragraph",
    "Block",
    "parse_markup",
    "paragraphs",
    "format_markup",
    "strip_tags",
    "strip_formatting",
]

BULLET = "• "

_HEADING_RE = re.compile(r"^(#{1,3}) (.*)$")
_BULLET_PREFIX = "- "
_INLINE_RE = re.compile(
    r"\*\*\*(?P<strong>.*?)\*\*\*"
    r"|\*\*(?P<bold>.*?)\*\*"
    r"|(?<!\*)\*(?!\*)(?P<italic>.*?)(?<!\*)\*(?!\*)"
)
_ITALIC_RE = re.compile(r"(?<!\*)\*(?!\*)(.*?)(?<!\*)\*(?!\*)")
_TAG_RE = re.compile(r"</?(?:b|i|h[1-3])>")
_LINE_BREAK = "<br/>"


@dataclass(frozen=True)
class Run:
    """A span of text sharing one style."""

    text: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    """A body line; bullets carry the glyph as their first run."""

    runs: tuple[Run, ...] = ()
    bullet: bool = False

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


Block = Union[Heading, Paragraph]


def parse_markup(text: str) -> list[Block]:
    """Tokenize ``text`` into one block per line, blank lines included."""

    return [_parse_line(line) for line in (text or "").split("\n")]


def _parse_line(line: str) -> Block:
    heading = _HEADING_RE.match(line)
    if heading:
        runs = _inline_runs(heading.group(2))
        return Heading(
            level=len(heading.group(1)),
            text="".join(run.text for run in runs),
        )
    if line.startswith(_BULLET_PREFIX):
        body = _inline_runs(line[len(_BULLET_PREFIX):])
        return Paragraph(runs=(Run(BULLET), *body), bullet=True)
    return Paragraph(runs=tuple(_inline_runs(line)))


def _inline_runs(text: str, *, bold: bool = False) -> list[Run]:
    pattern = _ITALIC_RE if bold else _INLINE_RE
    runs: list[Run] = []
    cursor = 0
    for match in pattern.finditer(text):
        if match.start() > cursor:
            runs.append(Run(text[cursor:match.start()], bold=bold))
        if bold:
            runs.append(Run(match.group(1), bold=True, italic=True))
        else:
            strong = match.group("strong")
            if strong is None:
                strong = match.group("bold")
            if strong is not None:
                runs.extend(_inline_runs(strong, bold=True))
            else:
                runs.append(Run(match.group("italic"), italic=True))
        cursor = match.end()
    if cursor < len(text):
        runs.append(Run(text[cursor:], bold=bold))
    return [run for run in runs if run.text]


def paragraphs(blocks: Iterable[Block]) -> list[Block]:
    """Drop blank lines, leaving one entry per logical paragraph."""

    return [block for block in blocks if block.text.strip()]


def format_markup(text: str) -> str:
    """Render ``text`` as the tag-annotated intermediate form.

    Bold and italic become ``<b>``/``<i>``, headings ``<h1>``-``<h3>``,
    bullets the ``•`` glyph and line ends ``<br/>``. Text is HTML-escaped so
    a literal ``<b>`` in the source survives :func:`strip_tags`.
    """

    return _LINE_BREAK.join(_tag_block(block) for block in parse_markup(text))


def _tag_block(block: Block) -> str:
    if isinstance(block, Heading):
        text = escape(block.text, quote=False)
        return f"<h{block.level}>{text}</h{block.level}>"
    return "".join(_tag_run(run) for run in block.runs)


def _tag_run(run: Run) -> str:
    text = escape(run.text, quote=False)
    if run.italic:
        text = f"<i>{text}</i>"
    if run.bold:
        text = f"<b>{text}</b>"
    return text


def strip_tags(formatted: str) -> str:
    """Undo :func:`format_markup`: drop tags, restore newlines and text."""

    plain = _TAG_RE.sub("", (formatted or "").replace(_LINE_BREAK, "\n"))
    return unescape(plain)


def strip_formatting(text: str) -> str:
    """Plain text of raw markup with every marker removed."""

    return "\n".join(block.text for block in parse_markup(text))
