"""Unit tests for core/table.py"""

from mdfront.core.events import HTML_BLOCK_CLOSE, HTML_BLOCK_OPEN, HTML_FRAGMENT
from mdfront.core.frontmatter import FrontmatterEntry
from mdfront.core.table import render_row, render_table


def _fragments(events) -> list[str]:
    return [e.content for e in events if e.type == HTML_FRAGMENT]


def test_event_shape():
    """Start marker, table open, one row per entry, table close, end marker."""
    events = render_table([FrontmatterEntry("a", "1"), FrontmatterEntry("b", "2")])
    assert [e.type for e in events] == [
        HTML_BLOCK_OPEN, HTML_FRAGMENT, HTML_FRAGMENT, HTML_FRAGMENT, HTML_FRAGMENT, HTML_BLOCK_CLOSE,
    ]
    assert _fragments(events) == [
        '<table class="preamble">\n',
        "<tr><th>a</td><td>1</td></tr>\n",
        "<tr><th>b</td><td>2</td></tr>\n",
        "</table>\n",
    ]


def test_row_keeps_th_td_pairing():
    assert render_row("k", "v") == "<tr><th>k</td><td>v</td></tr>\n"


def test_author_linkified():
    """Only the author value passes through the linkifier."""
    events = render_table([
        FrontmatterEntry("author", "Jane (@jane)"),
        FrontmatterEntry("editor", "Joe (@joe)"),
    ])
    rows = _fragments(events)[1:-1]
    assert rows[0] == '<tr><th>author</td><td>Jane (<a href="https://github.com/jane">@jane</a>)</td></tr>\n'
    assert rows[1] == "<tr><th>editor</td><td>Joe (@joe)</td></tr>\n"


def test_custom_link_keys_and_class():
    events = render_table(
        [FrontmatterEntry("maintainer", "(@joe)")],
        table_class="meta",
        link_keys=["maintainer"],
    )
    frags = _fragments(events)
    assert frags[0] == '<table class="meta">\n'
    assert 'href="https://github.com/joe"' in frags[1]


def test_values_verbatim_by_default():
    """Without escaping, markup in values is emitted as-is."""
    events = render_table([FrontmatterEntry("title", "<b>Bold</b> & co")])
    assert _fragments(events)[1] == "<tr><th>title</td><td><b>Bold</b> & co</td></tr>\n"


def test_escape_option():
    events = render_table([FrontmatterEntry("title", "<b>Bold</b> & co")], escape=True)
    assert _fragments(events)[1] == "<tr><th>title</td><td>&lt;b&gt;Bold&lt;/b&gt; &amp; co</td></tr>\n"


def test_escape_keeps_safe_input_identical():
    entries = [FrontmatterEntry("author", "Jane (@jane) (jane@example.com)")]
    assert _fragments(render_table(entries, escape=True)) == _fragments(render_table(entries))


def test_empty_entries_still_render_table():
    assert _fragments(render_table([])) == ['<table class="preamble">\n', "</table>\n"]
