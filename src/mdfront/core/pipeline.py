"""Pipeline step functions: per-chapter transform and whole-book orchestration"""

import logging
from functools import partial
from typing import Any, Iterator

from mdfront.config import Settings
from mdfront.core.events import flatten, parse, rebuild, serialize
from mdfront.core.scanner import scan_events
from mdfront.core.table import render_table


logger = logging.getLogger(__name__)


def transform(text: str, settings: Settings | None = None) -> str:
    """Parse markdown, replace its frontmatter block with a table, serialize it back.

    Text without a delimiter comes back as a parse/serialize round trip;
    formatting may be normalized. Serializer errors propagate unchanged.
    """
    settings = settings or Settings()
    tokens, env = parse(text, settings.parser_config)
    render = partial(
        render_table,
        table_class=settings.table_class,
        link_keys=settings.link_keys,
        escape=settings.escape_html,
    )
    result = scan_events(flatten(tokens), delimiter=settings.delimiter, render=render)
    return serialize(rebuild(result.events), env)


def iter_chapters(items: list) -> Iterator[dict[str, Any]]:
    """Yield every Chapter dict in book order, depth-first through sub_items."""
    for item in items:
        if isinstance(item, dict) and "Chapter" in item:
            chapter = item["Chapter"]
            yield chapter
            yield from iter_chapters(chapter.get("sub_items") or [])


def run_book(book: dict[str, Any], settings: Settings | None = None) -> dict[str, Any]:
    """Transform the content of every chapter in an mdbook book, in place.

    Separators, part titles and all other fields are left as received.
    Returns the same book dict.
    """
    settings = settings or Settings()
    count = 0
    for chapter in iter_chapters(book.get("sections") or book.get("items") or []):
        content = chapter.get("content")
        if not content:
            continue
        name = chapter.get("name", "")
        try:
            chapter["content"] = transform(content, settings)
        except Exception as e:
            raise RuntimeError(f"Failed to transform chapter {name!r}: {e}") from e
        logger.debug("Transformed chapter %r", name)
        count += 1
    logger.info("Processed %d chapter(s)", count)
    return book
