"""CLI command implementations"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdfront.config import Settings, load_config
from mdfront.core.pipeline import run_book, transform
from mdfront.core.protocol import (
    check_version,
    preprocessor_config,
    read_input,
    supports_renderer,
    write_output,
)


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)


def _setup_logging(level: str) -> None:
    """Send package logs to stderr; stdout is reserved for the book JSON."""
    logger = logging.getLogger("mdfront")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())


def preprocess_cmd(ctx: typer.Context):
    """Read [context, book] JSON from stdin and write the processed book to stdout."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        context, book = read_input(typer.get_text_stream("stdin").read())
    except ValueError as e:
        _fail("Could not read book from stdin", e)

    settings = _settings(overrides=preprocessor_config(context))
    _setup_logging(settings.log_level)

    try:
        check_version(context)
    except ValueError as e:
        _fail("Version check failed", e)

    try:
        run_book(book, settings)
    except RuntimeError as e:
        _fail("Error processing frontmatter", e)

    typer.echo(write_output(book))


def supports_cmd(
    renderer: Annotated[str, typer.Argument(help="Renderer name mdbook is asking about")],
    ):
    """Exit 0 if the renderer is supported, 1 otherwise."""
    settings = _settings()
    if not supports_renderer(renderer, settings.renderers):
        raise typer.Exit(1)


def transform_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to transform")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write result here instead of stdout")] = None,
    delimiter: Annotated[Optional[str], typer.Option("--delimiter", help="Frontmatter delimiter")] = None,
    ):
    """Render the frontmatter table of a single markdown file."""
    settings = _settings(overrides={"delimiter": delimiter})
    _setup_logging(settings.log_level)

    try:
        result = transform(path.read_text(encoding="utf-8"), settings)
    except ValueError as e:
        _fail(f"Failed to transform {path}", e)

    if out is None:
        typer.echo(result, nl=False)
    else:
        out.write_text(result, encoding="utf-8")
        typer.echo(f"  {path} -> {out}", err=True)
