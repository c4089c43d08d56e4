"""Frontmatter entries rendered as raw-HTML table events"""

import html
from typing import Iterable

from markdown_it.token import Token

from mdfront.core.events import HTML_BLOCK_CLOSE, HTML_BLOCK_OPEN, HTML_FRAGMENT
from mdfront.core.frontmatter import FrontmatterEntry
from mdfront.core.linkify import linkify_text


def _fragment(content: str) -> Token:
    return Token(HTML_FRAGMENT, "", 0, content=content, block=True)


def render_row(key: str, value: str) -> str:
    # key cell opens with <th> and closes with </td>
    return f"<tr><th>{key}</td><td>{value}</td></tr>\n"


def render_table(
    entries: Iterable[FrontmatterEntry],
    *,
    table_class: str = "preamble",
    link_keys: Iterable[str] = ("author",),
    escape: bool = False,
    ) -> list[Token]:
    """Return raw-block events for a metadata table, one row per entry.

    Values of keys in link_keys are linkified. Keys and values are inserted
    verbatim unless escape is set, so frontmatter text becomes live HTML.
    """
    link_keys = set(link_keys)
    events = [
        Token(HTML_BLOCK_OPEN, "", 1, block=True),
        _fragment(f'<table class="{table_class}">\n'),
    ]
    for entry in entries:
        key, value = entry.key, entry.value
        if escape:
            key, value = html.escape(key), html.escape(value)
        if entry.key in link_keys:
            value = linkify_text(value)
        events.append(_fragment(render_row(key, value)))
    events.append(_fragment("</table>\n"))
    events.append(Token(HTML_BLOCK_CLOSE, "", -1, block=True))
    return events
