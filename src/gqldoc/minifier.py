"""Compaction of HTML sub-fragments embedded in the Markdown document."""

from __future__ import annotations

from collections.abc import Callable

import minify_html

Minifier = Callable[[str], str]
"""Type for minifier functions: (html_fragment) -> compact_html_fragment"""


def minify_fragment(fragment: str) -> str:
    """Compact an HTML fragment without changing what it renders.

    Closing tags are kept so the fragment stays well-formed when it is
    embedded in Markdown.
    """
    return minify_html.minify(fragment, keep_closing_tags=True)


def passthrough(fragment: str) -> str:
    """Minifier that leaves the fragment untouched."""
    return fragment
