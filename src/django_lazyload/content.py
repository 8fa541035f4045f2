"""
Entry points for the places where rendered markup is lazy loaded: post content,
widgets, avatars, attachment images and content blocks.

Each filter checks the related option and returns its input untouched when the option
is off. Whether the current request should be processed at all is decided by `is_exit()`.
"""

from typing import Any, List, Mapping, Optional, Union

from django.http import HttpRequest

from django_lazyload.app_settings import InternalSettings, OptionsInput, resolve_options
from django_lazyload.rewriter import ContentRewriter
from django_lazyload.transformer import AttributeTransformer
from django_lazyload.types import AttachmentSize, AttributeMap
from django_lazyload.util.logger import trace

IMAGE_BLOCK_NAME = "core/image"

# Query parameters that put the page into a mode where lazy loading is undesired
_PREVIEW_PARAMS = ("preview",)
_PRINT_PARAMS = ("print", "printpage")
_FEED_PARAMS = ("feed",)
_AMP_PARAMS = ("amp",)


def get_embed_tag_names() -> List[str]:
    """Names of the possible HTML tags to embed."""
    return ["iframe"]


def get_content_tag_names(options: OptionsInput = None) -> List[str]:
    opts = resolve_options(options)
    tag_names = []
    if opts.CONTENT_IMGS:
        tag_names.append("img")
    if opts.EMBED:
        tag_names.extend(get_embed_tag_names())
    return tag_names


def get_widget_tag_names(options: OptionsInput = None) -> List[str]:
    opts = resolve_options(options)
    tag_names = []
    if opts.WIDGETS:
        tag_names.append("img")
    if opts.EMBED:
        tag_names.extend(get_embed_tag_names())
    return tag_names


def filter_post_content(html: str, options: OptionsInput = None) -> str:
    """Lazy load images and embeds in the content of a post."""
    tag_names = get_content_tag_names(options)
    if not tag_names:
        return html
    return ContentRewriter(options).rewrite(html, tag_names)


def filter_widget(html: str, options: OptionsInput = None) -> str:
    """Lazy load images and embeds in the content of a text or HTML widget."""
    tag_names = get_widget_tag_names(options)
    if not tag_names:
        return html
    return ContentRewriter(options).rewrite(html, tag_names)


def filter_avatar_html(html: str, size: Optional[int] = None, options: OptionsInput = None) -> str:
    """
    Lazy load the `<img>` of a user's avatar.

    Avatars are square, so the `size` in pixels is passed on as `(size, size)`.
    """
    opts = resolve_options(options)
    if not opts.AVATARS:
        return html

    avatar_size = (size, size) if size is not None else None
    return ContentRewriter(opts).rewrite(html, ["img"], None, avatar_size)


def filter_image_tag(
    html: str,
    attachment_id: Optional[int],
    size: Optional[AttachmentSize] = None,
    options: OptionsInput = None,
) -> str:
    """Lazy load the `<img>` tag rendered for an attachment."""
    opts = resolve_options(options)
    if not opts.ATTACHMENTS:
        return html
    return ContentRewriter(opts).rewrite(html, ["img"], attachment_id, size)


def filter_post_thumbnail_html(
    html: str,
    attachment_id: Optional[int],
    size: Optional[AttachmentSize] = None,
    options: OptionsInput = None,
) -> str:
    """Lazy load the `<img>` tag of a post thumbnail (featured image)."""
    return filter_image_tag(html, attachment_id, size, options)


def filter_attachment_attrs(
    attrs: Mapping[Union[str, int], str],
    attachment_id: Optional[int],
    size: Optional[AttachmentSize] = None,
    options: OptionsInput = None,
) -> AttributeMap:
    """
    Lazy load an attachment image that is being rendered from an attribute dict,
    before it was turned into HTML.
    """
    opts = resolve_options(options)
    if not opts.ATTACHMENTS:
        return dict(attrs)
    return AttributeTransformer(opts).transform(attrs, "img", attachment_id, size)


def filter_block(
    block_content: Optional[str],
    block: Mapping[str, Any],
    options: OptionsInput = None,
) -> Optional[str]:
    """
    Lazy load the image of a rendered content block.

    Only image blocks are processed. The attachment ID and size are taken
    from the block's attributes:

    ```py
    filter_block(
        '<figure class="wp-block-image"><img src="a.jpg"></figure>',
        {"blockName": "core/image", "attrs": {"id": 5, "sizeSlug": "large"}},
    )
    ```
    """
    if block_content is None or block.get("blockName") != IMAGE_BLOCK_NAME:
        return block_content

    opts = resolve_options(options)
    if not opts.ATTACHMENTS:
        return block_content

    block_attrs = block.get("attrs") or {}
    attachment_id = _to_attachment_id(block_attrs.get("id"))
    size = block_attrs.get("sizeSlug")

    return ContentRewriter(opts).rewrite(block_content, ["img"], attachment_id, size)


def _to_attachment_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def is_exit(request: Optional[HttpRequest] = None, options: OptionsInput = None) -> bool:
    """
    Whether to skip lazy loading for the current request.

    Lazy loading is skipped when:

    - It's turned off with the `enabled` setting.
    - The request path starts with one of `exclude_paths` (the admin by default).
    - The request is for a feed, an AMP page, a preview, or a print view.
    """
    opts = resolve_options(options)
    if not opts.ENABLED:
        return True

    if request is None:
        return False

    reason = _get_exit_reason(request, opts)
    if reason:
        trace(f"SKIP    REQUEST {request.path} ({reason})")
        return True
    return False


def _get_exit_reason(request: HttpRequest, opts: InternalSettings) -> Optional[str]:
    path = request.path or "/"

    for prefix in opts.EXCLUDE_PATHS:
        if prefix and path.startswith(prefix):
            return "excluded path"

    segments = [segment for segment in path.split("/") if segment]
    if "feed" in segments or _has_param(request, _FEED_PARAMS):
        return "feed"
    if "amp" in segments or _has_param(request, _AMP_PARAMS):
        return "amp"
    if _has_param(request, _PREVIEW_PARAMS):
        return "preview"
    if any(request.GET.get(param) == "1" for param in _PRINT_PARAMS):
        return "print"

    return None


def _has_param(request: HttpRequest, params: tuple) -> bool:
    for param in params:
        if param not in request.GET:
            continue
        value = request.GET.get(param, "")
        # `?amp` and `?amp=1` are both on, `?amp=0` is off
        if value.lower() not in ("0", "false"):
            return True
    return False
