"""
Parser for the attribute list of a single HTML opening tag.

Given the attribute substring found by the tag matcher, e.g.

```html
 src="a.jpg" alt='A &amp; B' width=100 async
```

returns an ordered mapping of lower-cased attribute names to (entity-decoded) values:

```py
{"src": "a.jpg", "alt": "A & B", "width": "100", "async": ""}
```

The parser never raises. If the attribute list cannot be tokenized, e.g. because
of an unterminated quote, the whole (stripped) substring is returned as a single
positional entry: `{0: '...'}`.
"""

import re
from html import unescape
from typing import Optional

from django_lazyload.types import AttributeMap

_SEPARATOR_RE = re.compile(r"[\s/]+")
_ATTR_RE = re.compile(
    r"""
    (?P<name>[^\s"'<>/=]+)          # Attribute name
    (?:
        \s*=\s*
        (?:
            "(?P<dq>[^"]*)"         # Double-quoted value
            |'(?P<sq>[^']*)'        # Single-quoted value
            |(?P<uq>[^\s"'<>]+)     # Unquoted value
        )
    )?
    """,
    re.VERBOSE,
)
# Quoted string without an attribute name, e.g. `"foo"` in `<img "foo" src="a.jpg">`
_POSITIONAL_RE = re.compile(r""""(?P<dq>[^"]*)"|'(?P<sq>[^']*)'""")


def _first_not_none(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None:
            return value
    return None


def parse_attrs(attr_span: str) -> AttributeMap:
    """
    Convert a raw attribute substring into an ordered attribute mapping.

    - Attribute names are lower-cased.
    - Boolean attributes (no `=`) map to an empty string.
    - On duplicate names the last value wins, the key keeps its first position.
    - Quoted strings without a name are kept under integer keys, in order.
    """
    attrs: AttributeMap = {}
    positional_index = 0
    index = 0
    length = len(attr_span)

    while True:
        separator = _SEPARATOR_RE.match(attr_span, index)
        if separator is not None:
            index = separator.end()
        if index >= length:
            break

        attr_match = _ATTR_RE.match(attr_span, index)
        if attr_match is not None:
            value = _first_not_none(attr_match.group("dq"), attr_match.group("sq"), attr_match.group("uq"))
            attrs[attr_match.group("name").lower()] = unescape(value) if value else ""
            index = attr_match.end()
            continue

        positional_match = _POSITIONAL_RE.match(attr_span, index)
        if positional_match is not None:
            value = _first_not_none(positional_match.group("dq"), positional_match.group("sq")) or ""
            attrs[positional_index] = unescape(value)
            positional_index += 1
            index = positional_match.end()
            continue

        # Could not make sense of the markup, keep it as-is
        return _as_single_token(attr_span)

    return attrs


def _as_single_token(attr_span: str) -> AttributeMap:
    token = attr_span.strip()
    if not token:
        return {}
    return {0: token}
