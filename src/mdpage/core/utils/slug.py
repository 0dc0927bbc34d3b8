"""Slug generation for heading anchors and output file names"""

import re


_NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """Lower-case text, collapse each run of non-alphanumerics to '-', trim hyphens.

    Duplicate inputs give duplicate slugs; callers get no disambiguation.
    """
    return _NON_ALNUM_RE.sub('-', text.lower()).strip('-')
