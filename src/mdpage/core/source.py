"""File discovery, frontmatter extraction, and source loading"""

import re
from pathlib import Path
from typing import Any

import yaml

from mdpage.core.models import SourceDoc


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.markdown'}


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in MD_EXTENSIONS)


def load_source(path: Path, frontmatter: bool = True) -> SourceDoc:
    """Read a markdown file; base_dir is its resolved parent, used for relative images."""
    raw = path.read_text(encoding='utf-8')
    fm, body = strip_frontmatter(raw) if frontmatter else ({}, raw)
    return SourceDoc(
        path=str(path),
        markdown=body,
        frontmatter=fm,
        base_dir=str(path.resolve().parent),
    )
