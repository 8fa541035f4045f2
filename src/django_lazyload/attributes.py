import re
from typing import Any, List, Mapping, Optional, Union

from django.utils.html import conditional_escape, format_html
from django.utils.safestring import SafeString, mark_safe

_PERCENT_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_UNSAFE_CLASS_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def attributes_to_string(attributes: Mapping[Union[str, int], Any]) -> SafeString:
    """
    Convert a dict of attributes to a string.

    Named attributes are rendered as `key="value"`, with both key and value escaped.
    Entries with integer keys are positional tokens, and are rendered bare (escaped).

    ```py
    attributes_to_string({"src": "a.jpg", "alt": "A & B", 0: "foo"})
    # 'src="a.jpg" alt="A &amp; B" foo'
    ```
    """
    attr_list = []

    for key, value in attributes.items():
        if isinstance(key, int):
            attr_list.append(conditional_escape(value))
            continue

        if value is None or value is False:
            continue
        if value is True:
            attr_list.append(conditional_escape(key))
        else:
            attr_list.append(format_html('{}="{}"', key, value))

    return mark_safe(SafeString(" ").join(attr_list))


def sanitize_html_class(class_name: str) -> str:
    """
    Strip characters that are not safe inside an HTML `class` attribute.

    Percent-encoded octets are removed first, then everything except `A-Z`, `a-z`,
    `0-9`, `_` and `-`.
    """
    sanitized = _PERCENT_OCTET_RE.sub("", class_name)
    return _UNSAFE_CLASS_CHARS_RE.sub("", sanitized)


def split_class_names(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return value.split()


def append_class_names(*class_names: str) -> str:
    """
    Merge CSS class names into a single `class` attribute value.

    Each name is sanitized. Names that end up empty, and repeated names, are dropped.

    ```py
    append_class_names("wp-image-5", "alignleft", "lazyload")
    # 'wp-image-5 alignleft lazyload'
    ```
    """
    result: List[str] = []

    for class_name in class_names:
        sanitized = sanitize_html_class(class_name)
        if sanitized and sanitized not in result:
            result.append(sanitized)

    return " ".join(result)
