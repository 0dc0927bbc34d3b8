"""Inline format resolution: priority exclusion, deduplication, and display text"""

from typing import Iterable

from mdpage.core.inline.matchers import EMPHASIS_MATCHERS, OPEN_MATCHERS, Candidate, Matcher
from mdpage.core.models import InlineFormat, InlineKind


def _exclusive_passes(text: str, matchers: Iterable[Matcher]) -> list[Candidate]:
    """Run matchers in order; drop candidates overlapping ranges claimed by earlier passes.

    Candidates accepted in the same pass do not exclude each other, so the
    bold and italic halves of a triple marker both survive.
    """
    claimed: list[tuple[int, int]] = []
    accepted: list[Candidate] = []
    for matcher in matchers:
        passed = [c for c in matcher(text) if not any(c.overlaps(s, e) for s, e in claimed)]
        claimed.extend((c.start, c.end) for c in passed)
        accepted.extend(passed)
    return accepted


def _deduplicate(candidates: list[Candidate]) -> list[Candidate]:
    """Sort by start, then longest first; keep the first of each (start, end, kind)."""
    ordered = sorted(candidates, key=lambda c: (c.start, -c.length))
    seen: set[tuple[int, int, str]] = set()
    result = []
    for c in ordered:
        key = (c.start, c.end, c.kind.value)
        if key not in seen:
            seen.add(key)
            result.append(c)
    return result


def resolve_inline(text: str) -> list[InlineFormat]:
    """Return the ordered, duplicate-free formatting spans found in text.

    Unterminated or unmatched markers are left as plain text.
    """
    if not text:
        return []
    candidates = _exclusive_passes(text, EMPHASIS_MATCHERS)
    for matcher in OPEN_MATCHERS:
        candidates.extend(matcher(text))
    return [
        InlineFormat(kind=c.kind, start=c.start, end=c.end, url=c.url, hidden=c.hidden)
        for c in _deduplicate(candidates)
    ]


def plain_text(text: str, formatting: Iterable[InlineFormat]) -> str:
    """Return text with every span's hidden delimiter range removed.

    Code span interiors are literal, so hidden ranges of other spans that
    fall inside them are kept.
    """
    formatting = list(formatting)
    literal = [(f.start + 1, f.end - 1) for f in formatting if f.kind == InlineKind.code]
    hidden = {
        i
        for f in formatting
        for s, e in f.hidden
        if f.kind == InlineKind.code or not any(ls <= s and e <= le for ls, le in literal)
        for i in range(s, e)
    }
    if not hidden:
        return text
    return ''.join(ch for i, ch in enumerate(text) if i not in hidden)
