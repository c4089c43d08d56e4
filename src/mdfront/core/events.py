"""markdown-it token stream adapter: parse, flatten, rebuild, and serialize

The scanner works on a flat event sequence where each ``inline`` token is
replaced by its children. ``rebuild`` turns such a sequence back into the
nested token list that mdformat's renderer expects.
"""

from typing import Any, Iterable, MutableMapping

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer


HTML_BLOCK_OPEN = "html_block_open"
HTML_BLOCK_CLOSE = "html_block_close"
HTML_FRAGMENT = "html_fragment"

BREAK_TYPES = {"softbreak", "hardbreak"}
INLINE_CONTAINERS = {"paragraph", "heading", "th", "td"}


def make_parser(preset: str = "commonmark") -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name.

    Line breaks must surface as softbreak events so each frontmatter line is
    its own text event; the zero preset gets its newline rule back.
    """
    md = MarkdownIt(preset)
    if preset == "zero":
        md.enable("newline")
    return md


def parse(text: str, preset: str = "commonmark") -> tuple[list[Token], dict[str, Any]]:
    """Return (tokens, env) for text; env carries reference definitions."""
    env: dict[str, Any] = {}
    tokens = make_parser(preset).parse(text, env)
    return tokens, env


def flatten(tokens: Iterable[Token]) -> list[Token]:
    """Replace every inline token with its children, keeping document order."""
    events: list[Token] = []
    for tok in tokens:
        if tok.type == "inline":
            events.extend(tok.children or [])
        else:
            events.append(tok)
    return events


def _kind(tok: Token) -> str:
    """Container name of an _open/_close token (e.g. 'paragraph')."""
    return tok.type.rsplit("_", 1)[0]


def _closer_for(opener: Token) -> Token:
    return Token(
        f"{_kind(opener)}_close", opener.tag, -1,
        markup=opener.markup, level=opener.level, block=True, hidden=opener.hidden,
    )


def _reopen(opener: Token) -> Token:
    return Token(
        opener.type, opener.tag, 1,
        markup=opener.markup, level=opener.level, block=True, hidden=opener.hidden,
    )


def _inline(children: list[Token], level: int) -> Token:
    return Token(
        "inline", "", 0,
        children=children, content="".join(c.content for c in children),
        level=level, block=True,
    )


def rebuild(events: Iterable[Token]) -> list[Token]:
    """Regroup a flat event sequence into a well-nested markdown-it token list.

    - consecutive inline events become one ``inline`` token; leading and
      trailing breaks are trimmed and empty runs dropped
    - ``html_block_open``, fragments, ``html_block_close`` collapse into one
      ``html_block``; inside a paragraph the paragraph is split around it,
      inside a heading or table cell it becomes an ``html_inline``
    - empty paragraphs are dropped
    - closers without an opener are dropped, and openers still pending at
      the end are closed
    """
    out: list[Token] = []
    stack: list[Token] = []
    run: list[Token] = []
    raw: list[str] | None = None

    def in_inline_container() -> bool:
        return bool(stack) and _kind(stack[-1]) in INLINE_CONTAINERS

    def flush_run() -> None:
        while run and run[0].type in BREAK_TYPES:
            run.pop(0)
        while run and run[-1].type in BREAK_TYPES:
            run.pop()
        if not run:
            return
        level = stack[-1].level + 1 if stack else 0
        if in_inline_container():
            out.append(_inline(list(run), level))
        else:
            # inline events orphaned by a dropped opener get their own paragraph
            opener = Token("paragraph_open", "p", 1, level=level, block=True)
            out.extend([opener, _inline(list(run), level + 1), _closer_for(opener)])
        run.clear()

    def close_top(closer: Token | None = None) -> None:
        opener = stack.pop()
        if opener.type == "paragraph_open" and out and out[-1] is opener:
            out.pop()
            return
        if closer is None or _kind(closer) != _kind(opener):
            closer = _closer_for(opener)
        out.append(closer)

    def close(closer: Token) -> None:
        flush_run()
        kind = _kind(closer)
        if kind in INLINE_CONTAINERS and in_inline_container():
            close_top(closer)
            return
        for idx in range(len(stack) - 1, -1, -1):
            if _kind(stack[idx]) == kind:
                while len(stack) > idx + 1:
                    close_top()
                close_top(closer)
                return

    def emit_html(content: str) -> None:
        if stack and stack[-1].type != "paragraph_open" and in_inline_container():
            run.append(Token("html_inline", "", 0, content=content.replace("\n", "")))
            return
        flush_run()
        if stack and stack[-1].type == "paragraph_open":
            opener = stack[-1]
            close_top()
            out.append(Token("html_block", "", 0, content=content, level=opener.level, block=True))
            reopened = _reopen(opener)
            stack.append(reopened)
            out.append(reopened)
            return
        level = stack[-1].level + 1 if stack else 0
        out.append(Token("html_block", "", 0, content=content, level=level, block=True))

    for tok in events:
        if tok.type == HTML_BLOCK_OPEN:
            if raw is not None:
                emit_html("".join(raw))
            raw = []
            continue
        if tok.type == HTML_FRAGMENT:
            if raw is None:
                emit_html(tok.content)
            else:
                raw.append(tok.content)
            continue
        if raw is not None:
            emit_html("".join(raw))
            raw = None
        if tok.type == HTML_BLOCK_CLOSE:
            continue

        if not tok.block:
            run.append(tok)
        elif tok.nesting == 1:
            flush_run()
            stack.append(tok)
            out.append(tok)
        elif tok.nesting == -1:
            close(tok)
        else:
            flush_run()
            out.append(tok)

    if raw is not None:
        emit_html("".join(raw))
    flush_run()
    while stack:
        close_top()
    return out


def serialize(tokens: list[Token], env: MutableMapping[str, Any] | None = None) -> str:
    """Render a token list back to markdown. Raises ValueError on malformed nesting."""
    options = {"parser_extension": [], "mdformat": {"number": False, "wrap": "keep", "end_of_line": "lf"}}
    return MDRenderer().render(tokens, options, env if env is not None else {})
