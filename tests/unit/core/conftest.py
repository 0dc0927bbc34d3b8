"""Shared fixtures for core unit tests"""

import pytest

from mdpage.core.blocks.classify import parse


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

| Name | Qty |
| :--- | ---: |
| pear | 2 |

> A quote

![Logo](images/logo.png)

---

Footer paragraph.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture():
    return parse(SAMPLE_MD)
