"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpage.config import Settings, load_config
from mdpage.core.pipeline import build_document, run_build, tokenize_file


Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]
IndentWidth = Annotated[Optional[int], typer.Option("--indent-width", help="Spaces per list nesting level")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return settings


def _source_file(path: str) -> Path:
    p = Path(path)
    if not p.is_file():
        _fail(f"Input file not found: {path}")
    return p


def tokens_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to tokenize")],
    indent: IndentWidth = None,
    verbose: Verbose = False,
    ):
    """Print the flat token stream as JSON."""
    settings = _settings(overrides={"indent_width": indent}, verbose=verbose)
    src = _source_file(path)
    try:
        stream = tokenize_file(src, settings)
    except ValueError as e:
        _fail(f"Failed to read {src}", e)
    typer.echo(stream.model_dump_json(indent=2))


def convert_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to convert")],
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write document JSON here instead of stdout")] = None,
    indent: IndentWidth = None,
    verbose: Verbose = False,
    ):
    """Convert one file into the document JSON consumed by the renderer."""
    settings = _settings(overrides={"indent_width": indent}, verbose=verbose)
    src = _source_file(path)
    try:
        doc = build_document(src, settings)
    except ValueError as e:
        _fail(f"Failed to read {src}", e)

    payload = doc.model_dump_json(indent=2)
    if out is None:
        typer.echo(payload)
        return
    Path(out).parent.mkdir(parents=True, exist_ok=True)
    Path(out).write_text(payload, encoding="utf-8")
    typer.echo(f"  {src} -> {out} ({len(doc.elements)} elements, title: {doc.metadata.title})")


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to process")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    indent: IndentWidth = None,
    verbose: Verbose = False,
    ):
    """Convert every markdown file under path into document JSON files."""
    settings = _settings(overrides={"output_dir": out, "indent_width": indent}, verbose=verbose)
    output_dir = Path(settings.output_dir)
    try:
        results = run_build(path, settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No markdown files found at: {path}")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Built {len(results)} document(s) to {output_dir}/")
