"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblog.cli.commands import build_cmd, list_cmd, render_cmd


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Markdown posts to a static HTML blog")

app.command(name="build")(build_cmd)
app.command(name="render")(render_cmd)
app.command(name="list")(list_cmd)
