"""Anchor tags for GitHub handles and email addresses in frontmatter values"""

import re


GITHUB_RE = re.compile(r"\(@([a-zA-Z0-9_]+)\)")
EMAIL_RE = re.compile(r"\(([a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+)\)")


def linkify_github(text: str) -> str:
    """Replace each '(@handle)' with a link to the handle's GitHub profile."""
    return GITHUB_RE.sub(r'(<a href="https://github.com/\1">@\1</a>)', text)


def linkify_email(text: str) -> str:
    """Replace each '(user@host.tld)' with a mailto link."""
    return EMAIL_RE.sub(r'(<a href="mailto:\1">\1</a>)', text)


def linkify_text(text: str) -> str:
    """Apply the GitHub pass, then the email pass over its result."""
    return linkify_email(linkify_github(text))
