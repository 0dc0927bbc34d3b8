"""Unit tests for core/inline/matchers.py"""

from mdpage.core.inline.matchers import (
    match_code,
    match_double,
    match_link,
    match_single,
    match_triple,
)
from mdpage.core.models import InlineKind


def test_match_single_skips_double_markers():
    """The single-marker matcher never reads the inner * of **bold**."""
    assert match_single("**bold**") == []
    assert match_single("__bold__") == []


def test_match_double_reads_inside_triple():
    """Matchers are independent; exclusion is applied by the resolver."""
    found = match_double("***x***")
    assert found and all(c.kind == InlineKind.bold for c in found)


def test_match_triple_emits_two_kinds():
    found = match_triple("***x***")
    assert [c.kind for c in found] == [InlineKind.bold, InlineKind.italic]


def test_match_code_range():
    found = match_code("a `b` c")
    assert [(c.start, c.end) for c in found] == [(2, 5)]


def test_match_link_captures_url():
    found = match_link("see [here](./page.md) and [there](http://t.co)")
    assert [c.url for c in found] == ["./page.md", "http://t.co"]


def test_candidate_overlap():
    c = match_code("`x`")[0]
    assert c.overlaps(1, 2)
    assert not c.overlaps(3, 5)
