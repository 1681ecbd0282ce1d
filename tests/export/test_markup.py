from __future__ import annotations

import pytest

from quizgen.export.markup import (
    BULLET,
    Heading,
    Paragraph,
    Run,
    format_markup,
    paragraphs,
    parse_markup,
    strip_formatting,
    strip_tags,
)


def test_bold_and_italic_runs_keep_source_order():
    blocks = parse_markup("**Bold** and *italic*")

    assert blocks == [
        Paragraph(
            runs=(
                Run("Bold", bold=True),
                Run(" and "),
                Run("italic", italic=True),
            )
        )
    ]
    assert strip_formatting("**Bold** and *italic*") == "Bold and italic"


def test_triple_asterisks_are_bold():
    assert parse_markup("***x***") == [Paragraph(runs=(Run("x", bold=True),))]


def test_italic_inside_bold_becomes_bold_italic():
    (block,) = parse_markup("**a *b* c**")

    assert block.runs == (
        Run("a ", bold=True),
        Run("b", bold=True, italic=True),
        Run(" c", bold=True),
    )


@pytest.mark.parametrize("level", [1, 2, 3])
def test_headings_by_level(level):
    hashes = "#" * level

    assert parse_markup(f"{hashes} Results **now**") == [
        Heading(level=level, text="Results now")
    ]


def test_four_hashes_and_missing_space_are_not_headings():
    blocks = parse_markup("#### deep\n#tag")

    assert all(isinstance(block, Paragraph) for block in blocks)
    assert [block.text for block in blocks] == ["#### deep", "#tag"]


def test_bullets_get_the_glyph():
    (block,) = parse_markup("- A. **Paris**")

    assert block.bullet
    assert block.runs == (Run(BULLET), Run("A. "), Run("Paris", bold=True))
    assert block.text == "• A. Paris"


def test_unmatched_markers_stay_literal():
    assert strip_formatting("2 * 3 = 6 and **open") == "2 * 3 = 6 and **open"


def test_blank_lines_are_kept_then_filtered():
    blocks = parse_markup("one\n\n   \ntwo")

    assert len(blocks) == 4
    assert [block.text for block in paragraphs(blocks)] == ["one", "two"]


def test_format_markup_tags_every_construct():
    formatted = format_markup("# Title\n**b** *i* ***s***\n- item")

    assert formatted == (
        "<h1>Title</h1><br/><b>b</b> <i>i</i> <b>s</b><br/>• item"
    )


def test_bold_italic_tags_nest_italic_inside_bold():
    assert format_markup("**a *b* c**") == (
        "<b>a </b><b><i>b</i></b><b> c</b>"
    )


@pytest.mark.parametrize(
    "text",
    [
        "plain text\nwith two lines",
        "# Quiz Results: Geo\n**Score:** 100%\n\n- A. Paris",
        "",
    ],
)
def test_strip_tags_inverts_format_markup(text):
    assert strip_tags(format_markup(text)) == strip_formatting(text)


def test_text_without_markers_round_trips_unchanged():
    text = "Capital of France?\nParis is the capital."

    assert strip_tags(format_markup(text)) == text


@pytest.mark.parametrize(
    "text",
    [
        "HTML uses <b> for bold",
        "# Use <br/> &amp; <h1>\n- a < b & c > d",
        "**<i>** and *&lt;*",
    ],
)
def test_literal_tags_and_entities_survive_round_trip(text):
    formatted = format_markup(text)

    assert strip_tags(formatted) == strip_formatting(text)


def test_format_markup_escapes_literal_angle_brackets():
    assert format_markup("HTML uses <b> for **bold**") == (
        "HTML uses &lt;b&gt; for <b>bold</b>"
    )
