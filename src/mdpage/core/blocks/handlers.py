"""Block handlers: recognize one construct, consume its lines, emit tokens.

Every handler takes (state, line) and returns True when it consumed the
line (advancing the cursor itself), False to let the next handler try.
"""

import re

from mdpage.core.blocks.state import ParserState
from mdpage.core.inline.resolve import resolve_inline
from mdpage.core.models import (
    Alignment,
    BlockquoteToken,
    HeadingToken,
    HorizontalRuleToken,
    ImageToken,
    ListItemToken,
    TableRowToken,
)


FENCE = '```'
HR_RE = re.compile(r'^(?:-{3,}|\*{3,}|_{3,})$')
HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
UNORDERED_RE = re.compile(r'^([*\-+])\s+(.+)$')
ORDERED_RE = re.compile(r'^(\d+)\.\s+(.+)$')
IMAGE_RE = re.compile(r'^!\[([^\]]*)\]\(([^)]+)\)$')
TABLE_SEPARATOR_RE = re.compile(r'^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)+\|?$')


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def is_table_separator(line: str) -> bool:
    return bool(line) and bool(TABLE_SEPARATOR_RE.match(line))


def split_row(line: str) -> list[str]:
    """Split a pipe row into trimmed cells, dropping one outer pipe on each side."""
    cleaned = line.strip()
    if cleaned.startswith('|'):
        cleaned = cleaned[1:]
    if cleaned.endswith('|'):
        cleaned = cleaned[:-1]
    return [cell.strip() for cell in cleaned.split('|')]


def parse_alignment(separator: str) -> list[Alignment]:
    """Column alignment from a separator row: :-: center, -: right, else left."""
    result = []
    for cell in split_row(separator):
        if cell.startswith(':') and cell.endswith(':'):
            result.append(Alignment.center)
        elif cell.endswith(':'):
            result.append(Alignment.right)
        else:
            result.append(Alignment.left)
    return result


def _starts_block(stripped: str) -> bool:
    """True if a trimmed line opens a construct that ends a list continuation."""
    return (
        stripped.startswith(FENCE)
        or stripped.startswith('>')
        or bool(HR_RE.match(stripped))
        or bool(HEADING_RE.match(stripped))
        or bool(UNORDERED_RE.match(stripped))
        or bool(ORDERED_RE.match(stripped))
    )


# --- fences and blank lines ---

def handle_fence(state: ParserState, line: str) -> bool:
    stripped = line.strip()
    if not stripped.startswith(FENCE):
        return False
    state.begin_block()
    if state.in_fence:
        state.flush_fence()
    else:
        state.in_fence = True
        state.fence_language = stripped[len(FENCE):].strip() or None
        state.fence_lines = []
        state.fence_start = state.index
    state.advance()
    return True


def handle_fenced_line(state: ParserState, line: str) -> bool:
    """Inside a fence every line is kept verbatim."""
    if not state.in_fence:
        return False
    state.fence_lines.append(line)
    state.advance()
    return True


def handle_blank(state: ParserState, line: str) -> bool:
    if line.strip():
        return False
    state.begin_block()
    state.advance()
    return True


# --- single-line blocks ---

def handle_horizontal_rule(state: ParserState, line: str) -> bool:
    if not HR_RE.match(line.strip()):
        return False
    state.begin_block()
    state.emit(HorizontalRuleToken(line=state.index))
    state.advance()
    return True


def handle_heading(state: ParserState, line: str) -> bool:
    m = HEADING_RE.match(line.strip())
    if not m:
        return False
    state.begin_block()
    text = m.group(2).strip()
    state.emit(HeadingToken(
        level=len(m.group(1)), text=text, formatting=resolve_inline(text), line=state.index,
    ))
    state.advance()
    return True


def handle_blockquote(state: ParserState, line: str) -> bool:
    stripped = line.strip()
    if not stripped.startswith('>'):
        return False
    state.begin_block()
    text = stripped[1:].strip()
    state.emit(BlockquoteToken(text=text, formatting=resolve_inline(text), line=state.index))
    state.advance()
    return True


def handle_image(state: ParserState, line: str) -> bool:
    m = IMAGE_RE.match(line.strip())
    if not m:
        return False
    state.begin_block()
    state.emit(ImageToken(alt=m.group(1), url=m.group(2), line=state.index))
    state.advance()
    return True


# --- list items ---

def _list_item(state: ParserState, line: str, pattern: re.Pattern, ordered: bool) -> bool:
    m = pattern.match(line.strip())
    if not m:
        return False
    state.begin_block()
    level = indent_of(line) // state.indent_width
    parts = [m.group(2).strip()]

    # Continuation lines must be indented past the item's own nesting level.
    min_indent = (level + 1) * state.indent_width
    offset = 1
    while state.index + offset < len(state.lines):
        nxt = state.peek(offset)
        stripped = nxt.strip()
        if not stripped or _starts_block(stripped) or indent_of(nxt) < min_indent:
            break
        parts.append(stripped)
        offset += 1

    text = ' '.join(parts)
    state.emit(ListItemToken(
        ordered=ordered, level=level, text=text,
        formatting=resolve_inline(text), line=state.index,
    ))
    state.advance(offset)
    return True


def handle_unordered_item(state: ParserState, line: str) -> bool:
    return _list_item(state, line, UNORDERED_RE, ordered=False)


def handle_ordered_item(state: ParserState, line: str) -> bool:
    return _list_item(state, line, ORDERED_RE, ordered=True)


# --- tables ---

def handle_table(state: ParserState, line: str) -> bool:
    """Header row when the next line is a separator; data rows while in a table."""
    stripped = line.strip()
    if '|' not in stripped:
        return False

    if state.in_table:
        if not is_table_separator(stripped):
            state.emit(TableRowToken(
                cells=split_row(stripped), is_header=False,
                alignment=state.table_alignment, line=state.index,
            ))
        state.advance()
        return True

    separator = state.peek().strip()
    if not is_table_separator(separator):
        return False
    state.flush_paragraph()
    state.table_alignment = parse_alignment(separator)
    state.emit(TableRowToken(
        cells=split_row(stripped), is_header=True,
        alignment=state.table_alignment, line=state.index,
    ))
    state.in_table = True
    state.advance(2)
    return True


# --- fallback ---

def handle_paragraph_line(state: ParserState, line: str) -> bool:
    """Accumulate a raw line into the open paragraph; always consumes."""
    state.in_table = False
    if not state.paragraph:
        state.paragraph_start = state.index
    state.paragraph.append(line)
    state.advance()
    return True
