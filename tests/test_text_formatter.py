"""Tests for description text formatting."""

import pytest

from gqldoc.exceptions import MarkupConversionError
from gqldoc.text_formatter import format_description, indent, to_inline, wrap

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat."
)


class TestWrap:
    """Test line wrapping."""

    def test_short_text_unchanged(self) -> None:
        """Text within the width is returned as is."""
        assert wrap("short text", 69) == "short text"

    def test_breaks_at_whitespace(self) -> None:
        """Breaks keep the whitespace at the end of the broken line."""
        assert wrap("the quick brown fox", 10) == "the quick \nbrown fox"

    @pytest.mark.parametrize("width", [15, 25, 40, 69])
    def test_lines_within_width(self, width: int) -> None:
        """No output line is longer than the width."""
        for line in wrap(LOREM, width).split("\n"):
            assert len(line) <= width

    @pytest.mark.parametrize("width", [15, 25, 40, 69])
    def test_removing_breaks_restores_text(self, width: int) -> None:
        """Deleting the inserted newlines reproduces the input exactly."""
        assert wrap(LOREM, width).replace("\n", "") == LOREM

    def test_long_word_passes_through(self) -> None:
        """A word longer than the width stays intact on its own line."""
        url = "https://example.com/a/very/long/path/that/cannot/be/broken"
        result = wrap(f"see {url} for details", 20)

        assert f"{url} " in result.split("\n")
        assert result.replace("\n", "") == f"see {url} for details"

    def test_existing_newlines_preserved(self) -> None:
        """Each existing line is wrapped on its own."""
        result = wrap("first line\nsecond line is longer", 12)
        assert result == "first line\nsecond line \nis longer"

    def test_multiple_spaces_preserved(self) -> None:
        """Runs of whitespace are kept byte for byte."""
        text = "alpha  beta   gamma    delta"
        assert wrap(text, 12).replace("\n", "") == text

    def test_long_blank_run_is_split(self) -> None:
        """A run of blanks wider than the line is spread over two lines."""
        text = "a" + " " * 30 + "b"
        result = wrap(text, 20)

        assert result.replace("\n", "") == text
        assert [len(line) for line in result.split("\n")] == [20, 12]

    def test_blank_only_line_is_split(self) -> None:
        result = wrap(" " * 30, 20)
        assert result.replace("\n", "") == " " * 30
        assert all(len(line) <= 20 for line in result.split("\n"))

    def test_word_filling_the_line_before_long_word(self) -> None:
        """No line starts with a blank or holds only blanks."""
        text = "abcd abcd abcd abcde " + "x" * 25
        result = wrap(text, 20)

        assert result == "abcd abcd abcd \nabcde \n" + "x" * 25
        for line in result.split("\n"):
            assert line.strip()
            assert not line[0].isspace()

    @pytest.mark.parametrize("width", [20, 33, 50])
    def test_irregular_blanks_and_markup(self, width: int) -> None:
        """Width and lossless join hold for tabs, blank runs and Markdown."""
        text = (
            "Returns  the **first**\tmatching `node`,   or null. See "
            "https://example.com/docs/nodes#lookup  for   the rules - and > caveats."
        )
        result = wrap(text, width)

        assert result.replace("\n", "") == text
        for line in result.split("\n"):
            assert line.strip()
            assert len(line) <= width or " " not in line.strip()

    @pytest.mark.parametrize(
        "marker", ["#", "##", ">", "-", "*", "+", "1.", "2)", "```", "===", "---", "<div>"]
    )
    def test_no_break_before_block_marker(self, marker: str) -> None:
        """A word that would open a block never starts a wrapped line."""
        text = "abcd " * 12 + f"abcde {marker} count of rows"
        result = wrap(text, 65)

        assert result.replace("\n", "") == text
        assert len(result.split("\n")) > 1
        for line in result.split("\n")[1:]:
            assert not line.startswith(marker)

    def test_invalid_width(self) -> None:
        """Width must be positive."""
        with pytest.raises(ValueError, match="positive"):
            wrap("text", 0)


class TestToInline:
    """Test Markdown to inline HTML conversion."""

    def test_single_paragraph_unwrapped(self) -> None:
        """A single paragraph loses its <p> wrapper."""
        assert to_inline("Hello world") == "Hello world"

    def test_inline_markup(self) -> None:
        """Emphasis, strong and code are converted."""
        result = to_inline("This is **bold**, *italic* and `code`")
        assert result == "This is <strong>bold</strong>, <em>italic</em> and <code>code</code>"

    def test_link(self) -> None:
        """Links become anchors."""
        result = to_inline("See [docs](https://example.com)")
        assert result == 'See <a href="https://example.com">docs</a>'

    def test_multiple_paragraphs_kept(self) -> None:
        """Several paragraphs stay as blocks."""
        result = to_inline("First paragraph\n\nSecond paragraph")
        assert result == "<p>First paragraph</p>\n<p>Second paragraph</p>"

    def test_list_kept_as_block(self) -> None:
        """Non-paragraph blocks are not unwrapped."""
        result = to_inline("- one\n- two")
        assert result.startswith("<ul>")
        assert "<li>one</li>" in result

    def test_raw_html_escaped(self) -> None:
        """Raw HTML in descriptions cannot break the surrounding layout."""
        result = to_inline("A <table> in a description")
        assert "<table>" not in result
        assert "&lt;table&gt;" in result

    def test_empty(self) -> None:
        """Empty descriptions convert to empty strings."""
        assert to_inline("") == ""
        assert to_inline("   \n") == ""

    def test_non_text_raises(self) -> None:
        """Malformed input fails instead of producing partial output."""
        with pytest.raises(MarkupConversionError):
            to_inline(b"bytes are not markup")  # type: ignore[arg-type]
        with pytest.raises(MarkupConversionError):
            to_inline(None)  # type: ignore[arg-type]


def test_format_description_wraps_then_converts():
    """Long descriptions are wrapped before conversion."""
    result = format_description(LOREM, 40)

    assert "<p>" not in result
    assert len(result.split("\n")) > 1
    for line in result.split("\n"):
        assert len(line) <= 40
    assert " ".join(result.split()) == LOREM


@pytest.mark.parametrize(
    "tail",
    [
        "abcde # count of rows",
        "abcde > quoted",
        "abcde - not a list",
        "abcde 1. not a list either",
        "abcde https://example.com/" + "p" * 60,
    ],
)
def test_format_description_single_paragraph_stays_inline(tail: str):
    """Where a one-paragraph description breaks never turns it into blocks."""
    result = format_description("abcd " * 12 + tail, 65)

    assert "<p>" not in result
    for tag in ("<h1>", "<blockquote>", "<ul>", "<ol>"):
        assert tag not in result


def test_format_description_adds_no_hard_breaks():
    """Blank runs inside a line never end up before a break."""
    text = "alpha  beta   gamma    delta  " * 6 + "end"

    result = format_description(text, 25)

    assert "<br" not in result
    assert "<p>" not in result
    assert " ".join(result.split()) == " ".join(text.split())


def test_format_description_keeps_code_blocks():
    """Fenced and indented code is neither wrapped nor collapsed."""
    code = "value  =  compute(first_argument, second_argument, third_argument)"
    result = format_description(f"Example:\n\n```\n{code}\n```", 20)

    assert "<pre><code>" in result
    assert code in result


def test_format_description_rejects_non_text():
    """Non-text descriptions raise MarkupConversionError."""
    with pytest.raises(MarkupConversionError):
        format_description(42, 40)  # type: ignore[arg-type]


def test_indent():
    """Every line after the first is prefixed with tabs."""
    assert indent(2, "a\nb\nc") == "a\n\t\tb\n\t\tc"
    assert indent(3, "single") == "single"
