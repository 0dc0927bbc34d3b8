"""Inline markup matchers: each maps text to candidate formatting spans"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from mdpage.core.models import InlineKind


TRIPLE_PATTERNS = (re.compile(r'\*\*\*(.+?)\*\*\*'), re.compile(r'___(.+?)___'))
DOUBLE_PATTERNS = (re.compile(r'\*\*(.+?)\*\*'), re.compile(r'__(.+?)__'))
SINGLE_PATTERNS = (
    re.compile(r'(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)'),
    re.compile(r'(?<!_)_(?!_)(.+?)(?<!_)_(?!_)'),
)
CODE_RE = re.compile(r'`([^`]+)`')
LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')


@dataclass
class Candidate:
    """A matched span before exclusion and deduplication."""
    kind: InlineKind
    start: int
    end: int
    url: Optional[str] = None
    hidden: list[tuple[int, int]] = field(default_factory=list)

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


Matcher = Callable[[str], list[Candidate]]


def _delimited(text: str, patterns, kinds: tuple[InlineKind, ...], width: int) -> list[Candidate]:
    """Collect spans for symmetric markers of the given width, one candidate per kind."""
    found = []
    for pattern in patterns:
        for m in pattern.finditer(text):
            start, end = m.span()
            hidden = [(start, start + width), (end - width, end)]
            found.extend(Candidate(kind, start, end, hidden=list(hidden)) for kind in kinds)
    return found


def match_triple(text: str) -> list[Candidate]:
    """***x*** and ___x___ report a bold span and an italic span over the same range."""
    return _delimited(text, TRIPLE_PATTERNS, (InlineKind.bold, InlineKind.italic), 3)


def match_double(text: str) -> list[Candidate]:
    return _delimited(text, DOUBLE_PATTERNS, (InlineKind.bold,), 2)


def match_single(text: str) -> list[Candidate]:
    return _delimited(text, SINGLE_PATTERNS, (InlineKind.italic,), 1)


def match_code(text: str) -> list[Candidate]:
    return _delimited(text, (CODE_RE,), (InlineKind.code,), 1)


def match_link(text: str) -> list[Candidate]:
    """[label](url): the opening bracket and the "](url)" tail are hidden."""
    found = []
    for m in LINK_RE.finditer(text):
        start, end = m.span()
        found.append(Candidate(
            InlineKind.link, start, end,
            url=m.group(2),
            hidden=[(start, start + 1), (m.end(1), end)],
        ))
    return found


# Priority order. Emphasis passes share an exclusion set; code and links do not.
EMPHASIS_MATCHERS: tuple[Matcher, ...] = (match_triple, match_double, match_single)
OPEN_MATCHERS: tuple[Matcher, ...] = (match_code, match_link)
