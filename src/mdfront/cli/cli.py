"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdfront.cli.commands import preprocess_cmd, supports_cmd, transform_cmd


app = typer.Typer(
    name="mdfront",
    add_completion=False,
    help="mdbook preprocessor rendering +++ frontmatter as a metadata table",
)

app.callback(invoke_without_command=True)(preprocess_cmd)
app.command(name="supports")(supports_cmd)
app.command(name="transform")(transform_cmd)
