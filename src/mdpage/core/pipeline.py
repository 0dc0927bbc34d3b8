"""Pipeline step functions: markdown -> tokens -> document, and the build orchestration"""

import logging
from pathlib import Path
from typing import Any, Optional

from mdpage.config import Settings
from mdpage.core.assemble import convert
from mdpage.core.blocks.classify import parse
from mdpage.core.models import Document, TokenStream
from mdpage.core.source import discover_files, load_source
from mdpage.core.utils.slug import slugify


logger = logging.getLogger(__name__)


def markdown_to_document(
    markdown: Optional[str],
    settings: Settings,
    base_dir: Optional[str] = None,
    frontmatter: Optional[dict[str, Any]] = None,
    ) -> Document:
    """Parse and assemble an in-memory markdown string."""
    tokens = parse(markdown, indent_width=settings.indent_width)
    return convert(tokens, base_dir=base_dir, default_title=settings.default_title, frontmatter=frontmatter)


def tokenize_file(path: Path, settings: Settings) -> TokenStream:
    """Return the raw token stream for a single file."""
    source = load_source(path, frontmatter=settings.strip_frontmatter)
    return TokenStream(tokens=parse(source.markdown, indent_width=settings.indent_width))


def build_document(path: Path, settings: Settings) -> Document:
    """Load a single file and convert it into a Document."""
    source = load_source(path, frontmatter=settings.strip_frontmatter)
    return markdown_to_document(source.markdown, settings, source.base_dir, source.frontmatter)


def run_build(path: str, settings: Settings, output_dir: Path) -> list[tuple[Path, Path]]:
    """Convert every markdown file under path into <output_dir>/<slug>.json.

    Returns (source_path, json_path) pairs. Two sources mapping to the same
    output name raise RuntimeError instead of overwriting.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    written: set[Path] = set()
    for p in discover_files(Path(path)):
        out_file = output_dir / f"{slugify(p.stem) or 'document'}.json"
        if out_file in written:
            raise RuntimeError(f"Failed to build {p}: output {out_file} already written")
        try:
            doc = build_document(p, settings)
            out_file.write_text(doc.model_dump_json(indent=2), encoding='utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to build {p}: {e}") from e
        logger.info("Built %s -> %s (%d elements)", p, out_file, len(doc.elements))
        written.add(out_file)
        results.append((p, out_file))
    return results
