"""Export quiz text and results to plain text, Word and PDF."""

from .markup import (
    Block,
    Heading,
    Paragraph,
    Run,
    format_markup,
    paragraphs,
    parse_markup,
    strip_formatting,
    strip_tags,
)
from .pdf import layout_pages, render_pdf
from .plain import render_text
from .word import build_document, render_docx
from .writer import ExportFormat, build_filename, export_content

__all__ = [
    "Block",
    "Heading",
    "Paragraph",
    "Run",
    "format_markup",
    "paragraphs",
    "parse_markup",
    "strip_formatting",
    "strip_tags",
    "layout_pages",
    "render_pdf",
    "render_text",
    "build_document",
    "render_docx",
    "ExportFormat",
    "build_filename",
    "export_content",
]
