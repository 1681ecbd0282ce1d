"""Paginated PDF export target drawn with reportlab.

Layout works in millimetres measured from the top edge of an A4 page, the
same way a person would measure a printed sheet. :func:`layout_pages` only
decides where each wrapped line lands; :func:`render_pdf` draws the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from typing import Callable, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .markup import Block, Heading, parse_markup, paragraphs

PAGE_WIDTH_MM = A4[0] / mm
PAGE_HEIGHT_MM = A4[1] / mm
TOP_MM = 20.0
BOTTOM_LIMIT_MM = 280.0
MARGIN_MM = 10.0
BODY_LINE_MM = 7.0
HEADING_LINE_MM = 12.0
HEADING_SPACING = 1.5

BODY_FONT = ("Helvetica", 12)
HEADING_FONTS = {
    1: ("Helvetica-Bold", 18),
    2: ("Helvetica-Bold", 16),
    3: ("Helvetica-Bold", 14),
}

Wrapper = Callable[[str, str, float, float], list[str]]


@dataclass(frozen=True)
class PlacedLine:
    text: str
    y: float
    font: str
    size: float


@dataclass
class Page:
    lines: list[PlacedLine] = field(default_factory=list)


def wrap_text(text: str, font: str, size: float, width_mm: float) -> list[str]:
    """Split ``text`` into lines no wider than ``width_mm``.

    Words are kept whole where they fit; a word wider than the line is
    broken between characters.
    """
    limit = width_mm * mm
    lines: list[str] = []
    for line in simpleSplit(text, font, size, limit):
        if stringWidth(line, font, size) <= limit:
            lines.append(line)
        else:
            lines.extend(_break_line(line, font, size, limit))
    return lines or [""]


def _break_line(line: str, font: str, size: float, limit: float) -> list[str]:
    pieces: list[str] = []
    current = ""
    for char in line:
        if current and stringWidth(current + char, font, size) > limit:
            pieces.append(current)
            current = char.lstrip()
        else:
            current += char
    if current:
        pieces.append(current)
    return pieces


def layout_pages(
    blocks: Sequence[Block],
    *,
    wrap: Wrapper = wrap_text,
    page_width: float = PAGE_WIDTH_MM,
) -> list[Page]:
    """Place every non-blank block on pages without crossing the limit.

    A page break happens before a heading line that would cross the bottom
    limit, before a paragraph that would not fit as a whole (unless the page
    is still empty) and after any body line that leaves the cursor past the
    limit while content remains.
    """

    width = page_width - 2 * MARGIN_MM
    pages = [Page()]
    cursor = TOP_MM
    items = paragraphs(blocks)

    def new_page() -> None:
        nonlocal cursor
        pages.append(Page())
        cursor = TOP_MM

    for index, block in enumerate(items):
        more_blocks = index < len(items) - 1
        if isinstance(block, Heading):
            font, size = HEADING_FONTS[block.level]
            for line in wrap(block.text, font, size, width):
                if cursor + HEADING_LINE_MM > BOTTOM_LIMIT_MM:
                    new_page()
                pages[-1].lines.append(PlacedLine(line, cursor, font, size))
                cursor += HEADING_LINE_MM * HEADING_SPACING
            continue

        font, size = BODY_FONT
        lines = wrap(block.text, font, size, width)
        if (
            pages[-1].lines
            and cursor + len(lines) * BODY_LINE_MM > BOTTOM_LIMIT_MM
        ):
            new_page()
        for position, line in enumerate(lines):
            pages[-1].lines.append(PlacedLine(line, cursor, font, size))
            cursor += BODY_LINE_MM
            more_lines = position < len(lines) - 1
            if cursor > BOTTOM_LIMIT_MM and (more_lines or more_blocks):
                new_page()
    return pages


def render_pdf(content: str) -> bytes:
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle("Quiz Results")
    pdf.setSubject("Quiz Results")
    pdf.setAuthor("quizgen")
    pdf.setCreator("quizgen")

    for page in layout_pages(parse_markup(content)):
        for line in page.lines:
            pdf.setFont(line.font, line.size)
            pdf.drawString(
                MARGIN_MM * mm, (PAGE_HEIGHT_MM - line.y) * mm, line.text
            )
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()
