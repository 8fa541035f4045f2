import re
from typing import Iterable, Optional

from django.utils.safestring import SafeString, mark_safe

from django_lazyload.app_settings import InternalSettings, OptionsInput
from django_lazyload.attributes import attributes_to_string
from django_lazyload.transformer import AttributeTransformer, HooksInput
from django_lazyload.types import AttachmentSize
from django_lazyload.util.attr_parser import parse_attrs
from django_lazyload.util.logger import trace_tag_msg
from django_lazyload.util.tag_matcher import compile_tag_regex, match_to_tag


class ContentRewriter:
    """
    Finds the given tags in an HTML fragment and rewrites their attributes for lazy loading.

    Only the attribute list of a matched tag is ever replaced. The tag name, the
    self-closing slash and all text around the tags are kept as they are. Tags
    whose attributes did not change are kept byte-for-byte, including their
    attribute order and quoting.
    """

    def __init__(self, options: OptionsInput = None, hooks: HooksInput = None):
        self.transformer = AttributeTransformer(options, hooks)

    @property
    def options(self) -> InternalSettings:
        return self.transformer.options

    def rewrite(
        self,
        html: str,
        tag_names: Iterable[str],
        attachment_id: Optional[int] = None,
        size: Optional[AttachmentSize] = None,
    ) -> str:
        tag_names = tuple(tag_names)
        if not html or not tag_names:
            return html

        pattern = compile_tag_regex(tag_names)

        def on_match(match: "re.Match[str]") -> str:
            tag = match_to_tag(match)
            attrs_in = parse_attrs(tag.attr_span)
            attrs_out = self.transformer.transform(attrs_in, tag.tag_name, attachment_id, size)

            # NOTE: Compare as lists to take the order of attributes into account
            if list(attrs_out.items()) == list(attrs_in.items()):
                return tag.full_match

            trace_tag_msg("REWRITE", tag.tag_name, attachment_id, size)

            # Keep the whitespace before `>` or `/>`, so `<img src="a.jpg" />` stays self-closing
            # with the same formatting.
            trailing_whitespace = tag.attr_span[len(tag.attr_span.rstrip()) :]  # noqa: E203
            new_attr_span = " " + attributes_to_string(attrs_out) + trailing_whitespace if attrs_out else ""

            attr_start = tag.attr_start - tag.start_offset
            attr_end = tag.attr_end - tag.start_offset
            return tag.full_match[:attr_start] + new_attr_span + tag.full_match[attr_end:]

        result = pattern.sub(on_match, html)

        if isinstance(html, SafeString):
            return mark_safe(result)
        return result


def rewrite(
    html: str,
    tag_names: Iterable[str],
    attachment_id: Optional[int] = None,
    size: Optional[AttachmentSize] = None,
    options: OptionsInput = None,
    hooks: HooksInput = None,
) -> str:
    """
    Rewrite the given tags in an HTML fragment for lazy loading.

    ```py
    rewrite('<p><img src="a.jpg"></p>', ["img"])
    # '<p><img src="data:image/gif;base64,..." data-src="a.jpg" class="lazyload"></p>'
    ```

    Args:
        html (str): HTML fragment.
        tag_names (list[str]): Names of the tags to process, e.g. `["img", "iframe"]`.
        attachment_id (int, optional): ID of the attachment the markup belongs to.
        size (str | tuple, optional): Image size name, or `(width, height)`.
        options: Options to use instead of the project settings.
        hooks: Extension points to use instead of the ones set in the options.
    """
    return ContentRewriter(options, hooks).rewrite(html, tag_names, attachment_id, size)
