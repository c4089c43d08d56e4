"""Delimiter scanning over a flat event stream: capture, render, splice"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from markdown_it.token import Token

from mdfront.core.frontmatter import FrontmatterEntry, parse_frontmatter
from mdfront.core.table import render_table


logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "+++"
CODE_BLOCK_TYPES = {"fence", "code_block"}


class ScanState(str, Enum):
    """Scanner state: passing events through, or buffering frontmatter lines"""
    idle = "idle"
    capturing = "capturing"


@dataclass
class ScanResult:
    events: list[Token]
    state:  ScanState
    blocks: int = 0             # frontmatter blocks rendered

    @property
    def unterminated(self) -> bool:
        return self.state == ScanState.capturing


def is_delimiter(event: Token, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """True for a text event whose whole content is the delimiter."""
    return event.type == "text" and event.content == delimiter


def scan_events(
    events: Iterable[Token],
    *,
    delimiter: str = DEFAULT_DELIMITER,
    render: Callable[[list[FrontmatterEntry]], list[Token]] = render_table,
    ) -> ScanResult:
    """Replace each delimiter-bounded region with its rendered table.

    Events outside a region pass through unchanged and in order. Inside a
    region text events are buffered as lines, code blocks contribute each
    line of their content, and all other events (soft breaks, emphasis,
    links) are dropped. The delimiters are never emitted.

    A region left open at the end of the stream discards its buffered lines
    and every event after the opening delimiter; the result then reports
    ``unterminated``.
    """
    state = ScanState.idle
    lines: list[str] = []
    output: list[Token] = []
    blocks = 0

    for event in events:
        if is_delimiter(event, delimiter):
            if state == ScanState.capturing:
                output.extend(render(parse_frontmatter(lines)))
                lines.clear()
                blocks += 1
                state = ScanState.idle
            else:
                state = ScanState.capturing
        elif state == ScanState.idle:
            output.append(event)
        elif event.type == "text":
            lines.append(event.content)
        elif event.type in CODE_BLOCK_TYPES:
            lines.extend(event.content.splitlines())
        # capturing: other non-text events are dropped

    if state == ScanState.capturing:
        logger.warning(
            "Unterminated %r frontmatter block: %d captured line(s) and the rest of the content dropped",
            delimiter, len(lines),
        )
    return ScanResult(events=output, state=state, blocks=blocks)
