"""
Regex-based scanner that finds opening HTML tags by name.

This is NOT an HTML parser. It locates the opening tags (`<img ...>`, `<img ... />`)
of the given names in a text fragment, and reports where the tag's attribute list
starts and ends, so that the caller can replace just the attributes.

For `<img src="a.jpg" alt="A" />` the scanner reports:

```py
TagMatch(
    full_match='<img src="a.jpg" alt="A" />',
    tag_name="img",
    attr_span=' src="a.jpg" alt="A" ',
    start_offset=0,
    end_offset=27,
    attr_start=4,
    attr_end=25,
)
```

The attribute part of the pattern is written as an "unrolled loop"
(`normal* (special normal*)*`), where `normal` is anything except `<`, `>` and `/`, and
`special` is a `/` that is NOT followed by `>`. Because `normal` and `special` can
never match the same character, the regex engine has only one way to consume
any given input, and matching stays linear even for input like `<img////////...`.

An attempt never runs past the next `<`, so a run of unterminated tags like
`<img <img <img ...` is rejected tag by tag instead of rescanning the rest of
the text each time. The flip side is that a tag with a literal `<` inside an
attribute value is not matched, and is left as it is.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class TagMatch:
    """A located opening tag within an HTML fragment."""

    full_match: str
    tag_name: str
    """Tag name as written in the markup, e.g. `IMG` for `<IMG src="...">`"""
    attr_span: str
    """Everything between the tag name and the closing `>` or `/>`"""
    start_offset: int
    end_offset: int
    attr_start: int
    """Absolute index at which `attr_span` starts in the scanned string"""
    attr_end: int


def get_tag_regex(tag_names: Iterable[str]) -> str:
    """
    Build the search pattern for opening tags with the given names.

    The pattern has 2 groups:

    1. The tag name
    2. The attribute list, excluding the self-closing slash
    """
    names = "|".join(re.escape(name) for name in tag_names)

    # fmt: off
    return (
        r"<\s*"                 # Opening bracket
        f"({names})"            # 1: Tag name
        r"(?![\w-])"            # Not followed by word character or hyphen
        r"("                    # 2: Unroll the loop: Inside the opening tag
        r"[^<>/]*"              # Not an angle bracket or forward slash
        r"(?:"
        r"/(?!>)"               # A forward slash not followed by a closing bracket
        r"[^<>/]*"              # Not an angle bracket or forward slash
        r")*?"
        r")"
        r"/?>"                  # Self-closing tag
    )
    # fmt: on


@lru_cache(maxsize=128)
def _compile_tag_regex(tag_names: Tuple[str, ...]) -> "re.Pattern[str]":
    return re.compile(get_tag_regex(tag_names), re.IGNORECASE)


def compile_tag_regex(tag_names: Iterable[str]) -> "re.Pattern[str]":
    """Compiled, case-insensitive version of `get_tag_regex()`. Patterns are cached."""
    return _compile_tag_regex(tuple(tag_names))


def match_to_tag(match: "re.Match[str]") -> TagMatch:
    return TagMatch(
        full_match=match.group(0),
        tag_name=match.group(1),
        attr_span=match.group(2),
        start_offset=match.start(0),
        end_offset=match.end(0),
        attr_start=match.start(2),
        attr_end=match.end(2),
    )


def iter_tags(html: str, tag_names: Iterable[str]) -> Iterator[TagMatch]:
    """Yield the opening tags of given names, left to right, non-overlapping."""
    tag_names = tuple(tag_names)
    if not tag_names or not html:
        return

    pattern = compile_tag_regex(tag_names)
    for match in pattern.finditer(html):
        yield match_to_tag(match)


def find_tags(html: str, tag_names: Iterable[str]) -> List[TagMatch]:
    """
    Find all opening tags of given names.

    ```py
    find_tags('<p><img src="a.jpg"></p>', ["img"])
    # [TagMatch(full_match='<img src="a.jpg">', tag_name='img', ...)]
    ```
    """
    return list(iter_tags(html, tag_names))
