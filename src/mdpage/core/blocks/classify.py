"""Line classifier: single-pass dispatch of markdown lines to block handlers"""

import logging
from typing import Optional

from mdpage.core.blocks.handlers import (
    handle_blank,
    handle_blockquote,
    handle_fence,
    handle_fenced_line,
    handle_heading,
    handle_horizontal_rule,
    handle_image,
    handle_ordered_item,
    handle_paragraph_line,
    handle_table,
    handle_unordered_item,
)
from mdpage.core.blocks.state import ParserState


logger = logging.getLogger(__name__)

# First match wins. The fence handlers run first so fenced content is never classified.
HANDLERS = (
    handle_fence,
    handle_fenced_line,
    handle_blank,
    handle_horizontal_rule,
    handle_heading,
    handle_blockquote,
    handle_unordered_item,
    handle_ordered_item,
    handle_image,
    handle_table,
    handle_paragraph_line,
)


def split_lines(markdown: str) -> list[str]:
    return markdown.replace('\r\n', '\n').split('\n')


def parse(markdown: Optional[str], indent_width: int = 2) -> list:
    """Tokenize markdown into a flat list of block tokens.

    Never raises for any text input; None, empty, and whitespace-only input
    yield an empty list.
    """
    if not markdown or not markdown.strip():
        logger.debug("Empty markdown input received")
        return []

    state = ParserState(lines=split_lines(markdown), indent_width=indent_width)
    while not state.done:
        line = state.lines[state.index]
        for handler in HANDLERS:
            if handler(state, line):
                break

    tokens = state.finish()
    logger.debug("Parsed %d tokens from %d lines", len(tokens), len(state.lines))
    return tokens
