"""Key/value extraction from captured frontmatter lines"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class FrontmatterEntry:
    key:   str
    value: str


def parse_frontmatter(lines: Iterable[str]) -> list[FrontmatterEntry]:
    """Split each line at its first colon into a trimmed (key, value) entry.

    Lines without a colon are skipped. Order is preserved and duplicate keys
    are kept, so the result may hold the same key more than once.
    """
    entries = []
    for line in lines:
        parts = line.split(":", 1)
        if len(parts) == 2:
            entries.append(FrontmatterEntry(key=parts[0].strip(), value=parts[1].strip()))
    return entries
