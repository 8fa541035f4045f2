"""
Decides whether a single HTML tag should be lazy loaded, and computes its new attributes.

```py
transformer = AttributeTransformer({"aspectratio": True})
transformer.transform({"src": "a.jpg", "width": "100", "height": "50"}, "img")
# {
#     "src": "data:image/gif;base64,...",
#     "width": "100",
#     "height": "50",
#     "data-src": "a.jpg",
#     "data-aspectratio": "100/50",
#     "class": "lazyload",
# }
```
"""

import re
from enum import Enum
from typing import Iterable, Mapping, Optional, Union

from django_lazyload.app_settings import OptionsInput, resolve_options
from django_lazyload.attributes import append_class_names, split_class_names
from django_lazyload.hooks import DEFAULT_TRIGGER_CLASS, InternalHooks, LazyloadHooks, get_hooks
from django_lazyload.types import AttachmentSize, AttributeMap
from django_lazyload.util.logger import trace_tag_msg
from django_lazyload.util.misc import absint

IMAGE_PLACEHOLDER = "data:image/gif;base64,R0lGODlhAQABAAAAACH5BAEKAAEALAAAAAABAAEAAAICTAEAOw=="
FRAME_PLACEHOLDER = "about:blank"

FRAME_TAG_NAMES = ("iframe", "frame")

# Tags with these attributes were prepared for lazy loading by someone else
PROCESSED_MARKERS = ("data-gaussholder",)
# Tags with these attributes already have their source deferred
DEFERRED_MARKERS = ("data-src", "data-srcset")

_ATTACHMENT_ID_CLASS_RE = re.compile(r"^wp-image-(\d+)$")
_SIZE_CLASS_PREFIX = "size-"

HooksInput = Optional[Union[LazyloadHooks, InternalHooks, type, str]]


class TagCategory(str, Enum):
    IMAGE = "image"
    FRAME = "frame"


def get_tag_category(tag_name: str) -> TagCategory:
    if tag_name.lower() in FRAME_TAG_NAMES:
        return TagCategory.FRAME
    return TagCategory.IMAGE


def get_default_placeholder(tag_name: str) -> str:
    """Frames get `about:blank`, so they stay valid documents. Everything else gets a transparent pixel."""
    if get_tag_category(tag_name) == TagCategory.FRAME:
        return FRAME_PLACEHOLDER
    return IMAGE_PLACEHOLDER


def search_id_in_classes(class_names: Iterable[str]) -> Optional[int]:
    """
    Find the attachment ID in CSS classes like `wp-image-123`.

    ```py
    search_id_in_classes(["alignleft", "wp-image-123"])  # 123
    ```
    """
    for class_name in class_names:
        match = _ATTACHMENT_ID_CLASS_RE.match(class_name)
        if match:
            return int(match.group(1))
    return None


def search_size_in_classes(class_names: Iterable[str]) -> Optional[str]:
    """
    Find the attachment size name in CSS classes like `size-large`.

    ```py
    search_size_in_classes(["alignleft", "size-large"])  # "large"
    ```
    """
    for class_name in class_names:
        if class_name.startswith(_SIZE_CLASS_PREFIX) and len(class_name) > len(_SIZE_CLASS_PREFIX):
            return class_name[len(_SIZE_CLASS_PREFIX) :]  # noqa: E203
    return None


class AttributeTransformer:
    """
    Rewrites the attributes of a single tag so that its source is loaded lazily.

    Args:
        options: Options to use. Either `InternalSettings`, `LazyloadSettings`,
            or a dict of option IDs. Defaults to the project settings.
        hooks: Extension points. Defaults to the hooks set in the options.
    """

    def __init__(self, options: OptionsInput = None, hooks: HooksInput = None):
        self.options = resolve_options(options)
        self.hooks = get_hooks(hooks if hooks is not None else self.options.HOOKS)

    def transform(
        self,
        attrs: Mapping[Union[str, int], str],
        tag_name: str,
        attachment_id: Optional[int] = None,
        size: Optional[AttachmentSize] = None,
    ) -> AttributeMap:
        """
        Return new attributes for the tag. The given attributes are not modified.

        The tag is left as it is when:

        - It was already processed (has `data-src` or `data-srcset`). Only the aspect
          ratio may be added to it.
        - It has one of the CSS classes from `skip_class_names`.
        - The `should_lazyload` hook returned `False`.
        - It has neither `srcset` nor `src`.
        """
        tag_name = tag_name.lower()
        attrs = dict(attrs)

        if any(marker in attrs for marker in PROCESSED_MARKERS):
            trace_tag_msg("SKIP", tag_name, attachment_id, size, "processed by another handler")
            return attrs

        if any(marker in attrs for marker in DEFERRED_MARKERS):
            trace_tag_msg("SKIP", tag_name, attachment_id, size, "source already deferred")
            return self.set_aspectratio(attrs)

        class_names = split_class_names(attrs.get("class"))

        skip_class_names = set(self.options.SKIP_CLASS_NAMES).intersection(class_names)
        if skip_class_names:
            trace_tag_msg("SKIP", tag_name, attachment_id, size, f"excluded by class {sorted(skip_class_names)}")
            return attrs

        # Arguments given by the caller take precedence over the CSS classes
        if attachment_id is None:
            attachment_id = search_id_in_classes(class_names)
        if size is None:
            size = search_size_in_classes(class_names)

        if not self.hooks.should_lazyload(attrs, tag_name, attachment_id, size):
            trace_tag_msg("VETO", tag_name, attachment_id, size)
            return attrs

        if attrs.get("srcset"):
            attrs["data-srcset"] = attrs["srcset"]
            attrs["srcset"] = self.get_placeholder(tag_name, attachment_id, size)
            attrs = self.set_sizes(attrs)
            trace_tag_msg("DEFER", tag_name, attachment_id, size, "srcset -> data-srcset")
        elif attrs.get("src"):
            attrs["data-src"] = attrs["src"]
            attrs["src"] = self.get_placeholder(tag_name, attachment_id, size)
            # `sizes` is meaningless without `srcset`
            attrs.pop("sizes", None)
            trace_tag_msg("DEFER", tag_name, attachment_id, size, "src -> data-src")
        else:
            trace_tag_msg("KEEP", tag_name, attachment_id, size, "no source to defer")
            return attrs

        attrs = self.set_aspectratio(attrs)
        attrs = self.set_native_loading(attrs)

        trigger_class = self.get_trigger_class(tag_name, attachment_id, size)
        attrs["class"] = append_class_names(*class_names, trigger_class)

        return self.hooks.filter_attrs(attrs, tag_name, attachment_id, size)

    def get_placeholder(self, tag_name: str, attachment_id: Optional[int], size: Optional[AttachmentSize]) -> str:
        placeholder = get_default_placeholder(tag_name)
        return self.hooks.placeholder(placeholder, tag_name, attachment_id, size)

    def get_trigger_class(self, tag_name: str, attachment_id: Optional[int], size: Optional[AttachmentSize]) -> str:
        return self.hooks.trigger_class(DEFAULT_TRIGGER_CLASS, tag_name, attachment_id, size)

    def set_sizes(self, attrs: AttributeMap) -> AttributeMap:
        if self.options.DATA_SIZES:
            attrs["data-sizes"] = "auto"
            attrs.pop("sizes", None)
        return attrs

    def set_aspectratio(self, attrs: AttributeMap) -> AttributeMap:
        if not self.options.ASPECTRATIO or "data-aspectratio" in attrs:
            return attrs

        width = absint(attrs.get("width"))
        height = absint(attrs.get("height"))
        if width and height:
            attrs["data-aspectratio"] = f"{width}/{height}"
        return attrs

    def set_native_loading(self, attrs: AttributeMap) -> AttributeMap:
        if self.options.NATIVE_LOADING:
            attrs["loading"] = "lazy"
        else:
            attrs.pop("loading", None)
        return attrs


def transform_attrs(
    attrs: Mapping[Union[str, int], str],
    tag_name: str,
    attachment_id: Optional[int] = None,
    size: Optional[AttachmentSize] = None,
    options: OptionsInput = None,
    hooks: HooksInput = None,
) -> AttributeMap:
    """Shortcut for `AttributeTransformer(options, hooks).transform(...)`."""
    return AttributeTransformer(options, hooks).transform(attrs, tag_name, attachment_id, size)
