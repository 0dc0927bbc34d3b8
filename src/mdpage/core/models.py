"""Token, inline format, element, and document models for the conversion pipeline"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


class TokenType(str, Enum):
    """Block constructs recognized by the line classifier"""
    heading = "heading"
    paragraph = "paragraph"
    list_item = "list_item"
    code_block = "code_block"
    table_row = "table_row"
    image = "image"
    blockquote = "blockquote"
    horizontal_rule = "horizontal_rule"


class InlineKind(str, Enum):
    """Kinds of inline formatting spans"""
    bold = "bold"
    italic = "italic"
    bold_italic = "bold-italic"
    code = "code"
    link = "link"


class Alignment(str, Enum):
    left = "left"
    center = "center"
    right = "right"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class InlineFormat(_Frozen):
    """A resolved formatting span over [start, end) of its owning text.

    hidden holds the delimiter ranges inside the span (markers, link
    brackets, the "(url)" tail) that a renderer drops from display.
    """
    kind: InlineKind
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    url: Optional[str] = None
    hidden: list[tuple[int, int]] = Field(default_factory=list)


# --- tokens ---

class HeadingToken(_Frozen):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    text: str
    formatting: list[InlineFormat] = Field(default_factory=list)
    line: Optional[int] = None


class ParagraphToken(_Frozen):
    type: Literal["paragraph"] = "paragraph"
    text: str
    formatting: list[InlineFormat] = Field(default_factory=list)
    line: Optional[int] = None


class ListItemToken(_Frozen):
    type: Literal["list_item"] = "list_item"
    ordered: bool
    level: int = Field(default=0, ge=0)     # indent units, not spaces
    text: str
    formatting: list[InlineFormat] = Field(default_factory=list)
    line: Optional[int] = None


class CodeBlockToken(_Frozen):
    type: Literal["code_block"] = "code_block"
    language: Optional[str] = None
    code: str
    line: Optional[int] = None


class TableRowToken(_Frozen):
    type: Literal["table_row"] = "table_row"
    cells: list[str]
    is_header: bool = False
    alignment: Optional[list[Alignment]] = None
    line: Optional[int] = None


class ImageToken(_Frozen):
    type: Literal["image"] = "image"
    alt: str
    url: str
    line: Optional[int] = None


class BlockquoteToken(_Frozen):
    type: Literal["blockquote"] = "blockquote"
    text: str
    formatting: list[InlineFormat] = Field(default_factory=list)
    line: Optional[int] = None


class HorizontalRuleToken(_Frozen):
    type: Literal["horizontal_rule"] = "horizontal_rule"
    line: Optional[int] = None


Token = Annotated[
    Union[
        HeadingToken, ParagraphToken, ListItemToken, CodeBlockToken,
        TableRowToken, ImageToken, BlockquoteToken, HorizontalRuleToken,
    ],
    Field(discriminator="type"),
]


class TokenStream(_Frozen):
    """Serializable wrapper around a parse result."""
    tokens: list[Token] = Field(default_factory=list)


# --- elements ---

class HeadingElement(_Frozen):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    text: str
    id: str
    formatting: list[InlineFormat] = Field(default_factory=list)


class ParagraphElement(_Frozen):
    type: Literal["paragraph"] = "paragraph"
    text: str
    formatting: list[InlineFormat] = Field(default_factory=list)


class ListItem(_Frozen):
    text: str
    level: int = 0
    formatting: list[InlineFormat] = Field(default_factory=list)


class ListElement(_Frozen):
    type: Literal["list"] = "list"
    ordered: bool
    items: list[ListItem]


class CodeBlockElement(_Frozen):
    type: Literal["code-block"] = "code-block"
    language: Optional[str] = None
    code: str


class TableElement(_Frozen):
    type: Literal["table"] = "table"
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    alignment: Optional[list[Alignment]] = None


class ImageElement(_Frozen):
    type: Literal["image"] = "image"
    alt: str
    url: str
    base_dir: Optional[str] = None      # resolution hint for relative paths; never read here

    @computed_field
    @property
    def is_remote(self) -> bool:
        return self.url.startswith(("http://", "https://"))


class BlockquoteElement(_Frozen):
    type: Literal["blockquote"] = "blockquote"
    text: str
    formatting: list[InlineFormat] = Field(default_factory=list)


class HorizontalRuleElement(_Frozen):
    type: Literal["horizontal-rule"] = "horizontal-rule"


Element = Annotated[
    Union[
        HeadingElement, ParagraphElement, ListElement, CodeBlockElement,
        TableElement, ImageElement, BlockquoteElement, HorizontalRuleElement,
    ],
    Field(discriminator="type"),
]


class Metadata(_Frozen):
    title: str
    author: Optional[str] = None
    subject: Optional[str] = None


class Document(_Frozen):
    """Terminal artifact handed to the rendering collaborator."""
    elements: list[Element] = Field(default_factory=list)
    metadata: Metadata


class SourceDoc(_Frozen):
    """A markdown file read from disk with its frontmatter split off."""
    path: str
    markdown: str
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    base_dir: Optional[str] = None
