"""Shared fixtures for core unit tests"""

import pytest

from mdfront.core.events import make_parser


SAMPLE_FM_MD = """\
+++
author: Jane (@jane)
date: 2024-01-01
+++
Body text"""

SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text and a [link](https://example.com).

- item one
- item two

```python
print("hello")
```
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("commonmark")


@pytest.fixture(name="fm_tokens")
def fm_tokens_fixture(parser):
    return parser.parse(SAMPLE_FM_MD)


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)
