"""Word (``.docx``) export target built with python-docx."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from docx import Document
from docx.shared import Pt

from .markup import Block, Heading, parse_markup, paragraphs

BODY_SIZE = Pt(12)


def build_document(blocks: Sequence[Block]):
    """Return a python-docx document with one paragraph per block.

    Headings keep their level; body paragraphs become styled runs in source
    order so surrounding plain text stays between bold and italic spans.
    """

    document = Document()
    properties = document.core_properties
    properties.title = "Quiz Results"
    properties.subject = "Quiz Results"
    properties.author = "quizgen"

    for block in paragraphs(blocks):
        if isinstance(block, Heading):
            document.add_heading(block.text, level=block.level)
            continue
        paragraph = document.add_paragraph()
        for run in block.runs:
            styled = paragraph.add_run(run.text)
            styled.bold = run.bold
            styled.italic = run.italic
            styled.font.size = BODY_SIZE
    return document


def render_docx(content: str) -> bytes:
    buffer = BytesIO()
    build_document(parse_markup(content)).save(buffer)
    return buffer.getvalue()
