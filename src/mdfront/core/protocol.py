"""mdbook preprocessor protocol: stdin payload, version check, renderer support"""

import json
import logging
from typing import Any, Iterable

import semver
from pydantic import BaseModel, ConfigDict, Field, ValidationError


logger = logging.getLogger(__name__)

PREPROCESSOR_NAME = "frontmatter-preprocessor"
CONFIG_TABLE = "frontmatter"
MDBOOK_VERSION = "0.4.40"

# keys mdbook itself reads from a [preprocessor.*] table
MDBOOK_KEYS = {"command", "renderers", "before", "after", "optional"}


class PreprocessorContext(BaseModel):
    """The first element of the [context, book] array mdbook sends on stdin."""
    model_config = ConfigDict(extra="allow")

    root:           str = ""
    config:         dict[str, Any] = Field(default_factory=dict)
    renderer:       str = ""
    mdbook_version: str


def read_input(text: str) -> tuple[PreprocessorContext, dict[str, Any]]:
    """Parse mdbook's stdin payload. Raises ValueError if it is malformed."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid preprocessor input: {e}") from e
    if not isinstance(payload, list) or len(payload) != 2:
        raise ValueError("Invalid preprocessor input: expected a [context, book] array")

    raw_ctx, book = payload
    if not isinstance(book, dict):
        raise ValueError(f"Invalid preprocessor input: book must be an object, got {type(book).__name__}")
    try:
        ctx = PreprocessorContext.model_validate(raw_ctx)
    except ValidationError as e:
        raise ValueError(f"Invalid preprocessor context: {e}") from e
    return ctx, book


def write_output(book: dict[str, Any]) -> str:
    return json.dumps(book, ensure_ascii=False)


def _parse_version(value: str) -> semver.Version:
    try:
        return semver.Version.parse(value)
    except ValueError as e:
        raise ValueError(f"Invalid mdbook version {value!r}") from e


def version_matches(running: str, built: str = MDBOOK_VERSION) -> bool:
    """Cargo caret compatibility of the running mdbook with the version built against.

    ^0.4.40 accepts >=0.4.40,<0.5.0; ^1.2.3 accepts >=1.2.3,<2.0.0;
    ^0.0.3 accepts only 0.0.3. A prerelease only matches when the built
    version is a prerelease of the same major.minor.patch.
    """
    req, ver = _parse_version(built), _parse_version(running)
    if ver.prerelease and not (req.prerelease and ver.finalize_version() == req.finalize_version()):
        return False
    if ver < req:
        return False
    if req.major > 0:
        return ver.major == req.major
    if req.minor > 0:
        return ver.major == 0 and ver.minor == req.minor
    return (ver.major, ver.minor, ver.patch) == (req.major, req.minor, req.patch)


def check_version(ctx: PreprocessorContext) -> bool:
    """Warn (and return False) when mdbook's version is outside the supported range."""
    if version_matches(ctx.mdbook_version):
        return True
    logger.warning(
        "The %s plugin was built against version %s of mdbook, "
        "but we're being called from version %s",
        PREPROCESSOR_NAME, MDBOOK_VERSION, ctx.mdbook_version,
    )
    return False


def supports_renderer(renderer: str, supported: Iterable[str] = ("html",)) -> bool:
    return renderer in set(supported)


def preprocessor_config(ctx: PreprocessorContext, table: str = CONFIG_TABLE) -> dict[str, Any]:
    """Return the [preprocessor.<table>] settings from book.toml without mdbook's own keys."""
    section = ctx.config.get("preprocessor", {}).get(table) or {}
    return {k.replace("-", "_"): v for k, v in section.items() if k not in MDBOOK_KEYS}
