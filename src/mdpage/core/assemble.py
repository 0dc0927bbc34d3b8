"""Document assembly: group the flat token stream into renderer-ready elements"""

import logging
from typing import Any, Optional

from mdpage.core.models import (
    BlockquoteElement,
    BlockquoteToken,
    CodeBlockElement,
    CodeBlockToken,
    Document,
    HeadingElement,
    HeadingToken,
    HorizontalRuleElement,
    HorizontalRuleToken,
    ImageElement,
    ImageToken,
    ListElement,
    ListItem,
    ListItemToken,
    Metadata,
    ParagraphElement,
    ParagraphToken,
    TableElement,
    TableRowToken,
)
from mdpage.core.utils.slug import slugify


logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Document"


def _collect_list(tokens: list, start: int) -> tuple[ListElement, int]:
    """Group the run of list items sharing the first item's ordered flag."""
    ordered = tokens[start].ordered
    items = []
    i = start
    while i < len(tokens) and isinstance(tokens[i], ListItemToken) and tokens[i].ordered == ordered:
        tok = tokens[i]
        items.append(ListItem(text=tok.text, level=tok.level, formatting=tok.formatting))
        i += 1
    return ListElement(ordered=ordered, items=items), i


def _collect_table(tokens: list, start: int) -> tuple[TableElement, int]:
    """Group a run of table rows; the first header row supplies headers and alignment."""
    rows: list[TableRowToken] = []
    i = start
    while i < len(tokens) and isinstance(tokens[i], TableRowToken):
        rows.append(tokens[i])
        i += 1
    header = next((r for r in rows if r.is_header), None)
    return TableElement(
        headers=header.cells if header else [],
        rows=[r.cells for r in rows if not r.is_header],
        alignment=header.alignment if header else None,
    ), i


def _convert_single(token, base_dir: Optional[str]):
    """Map a non-grouping token to its element, or None for unknown input."""
    if isinstance(token, HeadingToken):
        return HeadingElement(
            level=token.level, text=token.text, id=slugify(token.text), formatting=token.formatting,
        )
    if isinstance(token, ParagraphToken):
        return ParagraphElement(text=token.text, formatting=token.formatting)
    if isinstance(token, CodeBlockToken):
        return CodeBlockElement(language=token.language, code=token.code)
    if isinstance(token, ImageToken):
        return ImageElement(alt=token.alt, url=token.url, base_dir=base_dir)
    if isinstance(token, BlockquoteToken):
        return BlockquoteElement(text=token.text, formatting=token.formatting)
    if isinstance(token, HorizontalRuleToken):
        return HorizontalRuleElement()
    return None


def _metadata(elements: list, default_title: str, frontmatter: Optional[dict[str, Any]]) -> Metadata:
    """Title from the first heading; author and subject from frontmatter strings."""
    heading = next((e for e in elements if isinstance(e, HeadingElement)), None)
    fm = frontmatter or {}
    extras = {k: str(fm[k]) for k in ('author', 'subject') if fm.get(k) is not None}
    return Metadata(title=heading.text if heading and heading.text else default_title, **extras)


def convert(
    tokens: Optional[list],
    base_dir: Optional[str] = None,
    default_title: str = DEFAULT_TITLE,
    frontmatter: Optional[dict[str, Any]] = None,
    ) -> Document:
    """Convert a token stream into a Document in a single forward pass.

    Consecutive list items with the same ordered flag become one list, and
    consecutive table rows become one table. base_dir is attached to image
    elements unchanged.
    """
    tokens = tokens or []
    elements = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if isinstance(token, ListItemToken):
            element, i = _collect_list(tokens, i)
        elif isinstance(token, TableRowToken):
            element, i = _collect_table(tokens, i)
        else:
            element = _convert_single(token, base_dir)
            i += 1
            if element is None:
                logger.warning("Unknown token type: %s", type(token).__name__)
                continue
        elements.append(element)

    logger.debug("Converted %d tokens to %d elements", len(tokens), len(elements))
    return Document(elements=elements, metadata=_metadata(elements, default_title, frontmatter))
