"""Unit tests for core/assemble.py"""

import json

import pytest

from mdpage.core.assemble import DEFAULT_TITLE, convert
from mdpage.core.blocks.classify import parse
from mdpage.core.models import (
    Alignment,
    BlockquoteElement,
    CodeBlockElement,
    CodeBlockToken,
    HeadingElement,
    HeadingToken,
    HorizontalRuleElement,
    HorizontalRuleToken,
    ImageElement,
    ImageToken,
    ListElement,
    ListItemToken,
    ParagraphElement,
    ParagraphToken,
    TableElement,
    TableRowToken,
)


def test_empty_token_stream():
    doc = convert([])
    assert doc.elements == []
    assert doc.metadata.title == DEFAULT_TITLE


def test_none_tokens_treated_as_empty():
    assert convert(None).elements == []


def test_heading_element_with_id():
    doc = convert([HeadingToken(level=1, text="Test Heading")])
    el = doc.elements[0]
    assert isinstance(el, HeadingElement)
    assert (el.level, el.text, el.id) == (1, "Test Heading", "test-heading")


@pytest.mark.parametrize("text,expected", [
    ("Hello World Test", "hello-world-test"),
    ("Test & Example #1", "test-example-1"),
])
def test_heading_id_derivation(text, expected):
    assert convert([HeadingToken(level=2, text=text)]).elements[0].id == expected


def test_duplicate_heading_ids_not_disambiguated():
    doc = convert([HeadingToken(level=2, text="Setup"), HeadingToken(level=2, text="Setup")])
    assert [e.id for e in doc.elements] == ["setup", "setup"]


def test_one_to_one_elements():
    tokens = [
        ParagraphToken(text="Test paragraph"),
        CodeBlockToken(language="javascript", code="const x = 1;"),
        HorizontalRuleToken(),
    ]
    doc = convert(tokens)
    assert [type(e) for e in doc.elements] == [ParagraphElement, CodeBlockElement, HorizontalRuleElement]
    assert doc.elements[1].language == "javascript"
    assert doc.elements[1].code == "const x = 1;"


def test_three_list_items_group_into_one_list():
    tokens = [ListItemToken(ordered=False, level=0, text=f"Item {n}") for n in (1, 2, 3)]
    doc = convert(tokens)
    assert len(doc.elements) == 1
    lst = doc.elements[0]
    assert isinstance(lst, ListElement)
    assert lst.ordered is False
    assert [i.text for i in lst.items] == ["Item 1", "Item 2", "Item 3"]


def test_ordered_flag_change_splits_lists():
    tokens = [
        ListItemToken(ordered=False, text="a"),
        ListItemToken(ordered=True, text="b"),
        ListItemToken(ordered=True, text="c"),
    ]
    doc = convert(tokens)
    assert [(e.ordered, len(e.items)) for e in doc.elements] == [(False, 1), (True, 2)]


def test_other_token_splits_lists():
    tokens = [
        ListItemToken(ordered=False, text="a"),
        ParagraphToken(text="between"),
        ListItemToken(ordered=False, text="b"),
    ]
    assert [type(e) for e in convert(tokens).elements] == [ListElement, ParagraphElement, ListElement]


def test_list_items_keep_level_and_formatting():
    tokens = parse("- **top**\n  - nested")
    items = convert(tokens).elements[0].items
    assert [i.level for i in items] == [0, 1]
    assert items[0].formatting


def test_table_rows_group_into_table():
    align = [Alignment.left, Alignment.right]
    tokens = [
        TableRowToken(cells=["Header 1", "Header 2"], is_header=True, alignment=align),
        TableRowToken(cells=["Cell 1", "Cell 2"], alignment=align),
        TableRowToken(cells=["Cell 3", "Cell 4"], alignment=align),
    ]
    doc = convert(tokens)
    assert len(doc.elements) == 1
    table = doc.elements[0]
    assert isinstance(table, TableElement)
    assert table.headers == ["Header 1", "Header 2"]
    assert table.rows == [["Cell 1", "Cell 2"], ["Cell 3", "Cell 4"]]
    assert table.alignment == align


def test_table_without_header_row():
    doc = convert([TableRowToken(cells=["a", "b"])])
    assert doc.elements[0].headers == []
    assert doc.elements[0].alignment is None


def test_image_carries_base_dir_unchanged():
    doc = convert([ImageToken(alt="Logo", url="img/logo.png")], base_dir="/docs")
    img = doc.elements[0]
    assert isinstance(img, ImageElement)
    assert img.base_dir == "/docs"
    assert not img.is_remote


def test_remote_image_detected_by_scheme():
    doc = convert([ImageToken(alt="", url="https://example.com/a.png")])
    assert doc.elements[0].is_remote


def test_is_remote_included_in_json_dump():
    """The renderer reads is_remote from the exported document."""
    doc = convert([ImageToken(alt="", url="https://example.com/a.png"), ImageToken(alt="", url="a.png")])
    dumped = json.loads(doc.model_dump_json())
    assert [e["is_remote"] for e in dumped["elements"]] == [True, False]


def test_blockquote_element():
    doc = convert(parse("> This is a quote"))
    assert isinstance(doc.elements[0], BlockquoteElement)
    assert doc.elements[0].text == "This is a quote"


def test_title_from_first_heading():
    tokens = [
        ParagraphToken(text="preamble"),
        HeadingToken(level=2, text="Document Title"),
        HeadingToken(level=1, text="Later"),
    ]
    assert convert(tokens).metadata.title == "Document Title"


def test_custom_default_title():
    assert convert([ParagraphToken(text="x")], default_title="Untitled").metadata.title == "Untitled"


def test_frontmatter_author_and_subject():
    doc = convert([], frontmatter={"author": "A. Writer", "subject": "Testing", "other": 1})
    assert doc.metadata.author == "A. Writer"
    assert doc.metadata.subject == "Testing"


def test_unknown_token_is_skipped(caplog):
    doc = convert([object(), ParagraphToken(text="kept")])
    assert [type(e) for e in doc.elements] == [ParagraphElement]
    assert "Unknown token type" in caplog.text


def test_sample_document_grouping(sample_tokens):
    doc = convert(sample_tokens)
    types = [e.type for e in doc.elements]
    assert types == [
        "heading", "paragraph", "heading", "list", "code-block",
        "table", "blockquote", "image", "horizontal-rule", "paragraph",
    ]
    assert doc.metadata.title == "Heading 1"


def test_document_round_trips_through_json(sample_tokens):
    doc = convert(sample_tokens, base_dir="/tmp")
    restored = type(doc).model_validate_json(doc.model_dump_json())
    assert restored == doc
