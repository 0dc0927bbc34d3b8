"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpage.cli.commands import build_cmd, convert_cmd, tokens_cmd


app = typer.Typer(name="mdpage", no_args_is_help=True, help="Markdown to page document structuring")

app.command(name="tokens")(tokens_cmd)
app.command(name="convert")(convert_cmd)
app.command(name="build")(build_cmd)
