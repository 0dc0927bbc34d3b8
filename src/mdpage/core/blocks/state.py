"""Explicit parser state shared by the block handlers"""

from dataclasses import dataclass, field
from typing import Optional

from mdpage.core.inline.resolve import resolve_inline
from mdpage.core.models import Alignment, CodeBlockToken, ParagraphToken


@dataclass
class ParserState:
    """Cursor, accumulation buffers, and emitted tokens for one parse pass."""
    lines:        list[str]
    indent_width: int = 2
    index:        int = 0
    tokens:       list = field(default_factory=list)

    paragraph:       list[str] = field(default_factory=list)
    paragraph_start: int = 0

    in_fence:       bool = False
    fence_lines:    list[str] = field(default_factory=list)
    fence_language: Optional[str] = None
    fence_start:    int = 0

    in_table:        bool = False
    table_alignment: Optional[list[Alignment]] = None

    @property
    def done(self) -> bool:
        return self.index >= len(self.lines)

    def peek(self, offset: int = 1) -> str:
        """Return the line at index + offset, or '' past the end."""
        i = self.index + offset
        return self.lines[i] if i < len(self.lines) else ''

    def advance(self, count: int = 1) -> None:
        self.index += count

    def emit(self, token) -> None:
        self.tokens.append(token)

    def begin_block(self) -> None:
        """Close any open paragraph and table before a new block starts."""
        self.flush_paragraph()
        self.in_table = False

    def flush_paragraph(self) -> None:
        if not self.paragraph:
            return
        text = '\n'.join(self.paragraph).strip()
        if text:
            self.emit(ParagraphToken(
                text=text, formatting=resolve_inline(text), line=self.paragraph_start,
            ))
        self.paragraph = []

    def flush_fence(self) -> None:
        """Emit buffered fence content as a code block and reset fence state."""
        self.emit(CodeBlockToken(
            language=self.fence_language,
            code='\n'.join(self.fence_lines),
            line=self.fence_start,
        ))
        self.in_fence = False
        self.fence_lines = []
        self.fence_language = None

    def finish(self) -> list:
        """Flush end-of-input state and return the token stream."""
        if self.in_fence and self.fence_lines:
            self.flush_fence()
        self.flush_paragraph()
        return self.tokens
