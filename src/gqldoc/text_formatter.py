"""Text formatting utilities for description cells and prose."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from functools import lru_cache

import mistune

from .exceptions import MarkupConversionError

_PARAGRAPH_OPEN = "<p>"
_PARAGRAPH_CLOSE = "</p>"

# A word followed by the blanks after it. Only spaces and tabs are break
# points; no-break spaces stay inside words.
_WORD = re.compile(r"([^ \t]+)([ \t]*)")

# Words that could open a block (heading, quote, list item, fence, thematic
# break, setext underline, HTML block) if a line started with them.
_BLOCK_MARKER = re.compile(r"[#>*+\-=_`~<]|\d{1,9}[.)]$")

_FENCE = re.compile(r" {0,3}(`{3,}|~{3,})")
_INNER_BLANKS = re.compile(r"(?<=[^ \t])[ \t]{2,}(?=[^ \t])")
_CODE_INDENT = ("    ", "\t")


@lru_cache(maxsize=1)
def _markdown() -> mistune.Markdown:
    """HTML converter for descriptions; raw HTML in descriptions is escaped."""
    return mistune.create_markdown(escape=True, plugins=["strikethrough", "url"])


def _units(line: str) -> list[tuple[str, str]]:
    """Split a line into (text, trailing blanks) pairs that may start a line.

    A word that looks like a block marker is joined to the unit before it, so
    no break is ever placed in front of it.
    """
    units: list[list[str]] = []
    for word, blanks in _WORD.findall(line):
        if units and _BLOCK_MARKER.match(word):
            units[-1][0] += units[-1][1] + word
            units[-1][1] = blanks
        else:
            units.append([word, blanks])
    if units:
        units[0][0] = line[: len(line) - len(line.lstrip(" \t"))] + units[0][0]
    return [(text, blanks) for text, blanks in units]


def _wrap_line(line: str, width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    units = _units(line)
    for index, (text, blanks) in enumerate(units):
        last = index == len(units) - 1
        needed = len(text) + (0 if last else min(len(blanks), 1))
        if current.strip() and len(current) + needed > width:
            lines.append(current)
            current = ""
        current += text
        room = width - len(current)
        if last or room <= 0 or len(blanks) <= room:
            current += blanks
        else:
            # Blank run too long for this line: fill it, carry the rest over.
            lines.append(current + blanks[:room])
            current = blanks[room:]
    lines.append(current)
    return lines


def wrap(text: str, width: int) -> str:
    """Insert line breaks so that no line is longer than ``width``.

    Breaks happen only inside runs of spaces or tabs, and the blanks stay at
    the end of the line they follow, so removing the inserted newlines
    reproduces the input exactly and no new blank line appears. A word too
    long to share a line is left on its own line with the blanks after it. A
    blank run that does not fit after a shorter word is split: the line is
    filled to ``width`` and the rest starts the next line. No break is placed
    before a word that could open a Markdown block (``#``, ``>``, list
    markers, fences).
    Existing newlines are kept and each line is wrapped on its own.

    Args:
        text: Text to wrap
        width: Maximum line width in columns

    Returns:
        Wrapped text
    """
    if width < 1:
        raise ValueError(f"Wrap width must be positive, got {width}")

    lines: list[str] = []
    for line in text.split("\n"):
        if len(line) <= width:
            lines.append(line)
        elif not line.strip(" \t"):
            lines.extend(line[i : i + width] for i in range(0, len(line), width))
        else:
            lines.extend(_wrap_line(line, width))
    return "\n".join(lines)


def to_inline(markup: str) -> str:
    """Convert a Markdown description to inline HTML.

    When the whole result is a single paragraph its ``<p>`` wrapper is
    removed, so short descriptions sit inline next to labels and inside table
    cells. Multi-block results are returned as blocks.

    Raises:
        MarkupConversionError: If the input is not text or cannot be converted
    """
    if not isinstance(markup, str):
        raise MarkupConversionError(
            f"Description must be text, got {type(markup).__name__}"
        )
    if not markup.strip():
        return ""

    try:
        result = _markdown()(markup)
    except Exception as e:  # noqa: BLE001 - mistune has no exception hierarchy of its own
        raise MarkupConversionError(f"Unable to convert description: {e}") from e
    if not isinstance(result, str):
        raise MarkupConversionError("Markdown converter did not produce text")

    html = result.rstrip("\n")
    if (
        html.startswith(_PARAGRAPH_OPEN)
        and html.endswith(_PARAGRAPH_CLOSE)
        and html.count(_PARAGRAPH_OPEN) == 1
    ):
        html = html[len(_PARAGRAPH_OPEN) : -len(_PARAGRAPH_CLOSE)]
    return html


def indent(tabs: int, text: str) -> str:
    """Prefix every line after the first with ``tabs`` tab characters."""
    prefix = "\t" * tabs
    first, *rest = text.split("\n")
    return "\n".join([first, *(prefix + line for line in rest)])


def _wrap_prose(lines: Iterable[str], width: int) -> Iterator[str]:
    """Wrap prose lines; code block lines pass through untouched."""
    fence: str | None = None
    for line in lines:
        marker = _FENCE.match(line)
        if fence is not None:
            if marker and marker.group(1)[0] == fence:
                fence = None
            yield line
        elif marker:
            fence = marker.group(1)[0]
            yield line
        elif line.startswith(_CODE_INDENT):
            yield line
        else:
            # Two blanks left at a break would become a hard line break.
            yield wrap(_INNER_BLANKS.sub(" ", line), width)


def format_description(description: str, width: int) -> str:
    """Wrap a description to ``width`` columns and convert it to inline HTML.

    Wrapping never changes how the Markdown parses: a one-paragraph
    description stays one paragraph.
    """
    if isinstance(description, str):
        description = "\n".join(_wrap_prose(description.strip().split("\n"), width))
    return to_inline(description)
