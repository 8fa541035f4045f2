from typing import Any, Optional, Union

import django.template

from django_lazyload.content import filter_avatar_html, filter_widget, get_content_tag_names
from django_lazyload.rewriter import ContentRewriter
from django_lazyload.util.misc import absint

# NOTE: Variable name `register` is required by Django to recognize this as a template tag library
# See https://docs.djangoproject.com/en/dev/howto/custom-template-tags
register = django.template.Library()


# NOTE: The filters are `is_safe`, so the output is marked safe only if the input was.
# Untrusted HTML stays autoescaped, trusted HTML needs `|safe` before the filter:
# `{{ post.body|safe|lazyload }}`
def _to_str(value: Any) -> str:
    # `str()` on a `SafeString` returns the same `SafeString`
    return value if isinstance(value, str) else str(value)


@register.filter(is_safe=True)
def lazyload(value: Any, tag_names: str = "") -> str:
    """
    Lazy load images and embeds in the given HTML.

    By default, the tags are chosen by the `content_imgs` and `embed` settings.
    A comma-separated list of tag names can be given instead:

    ```django
    {{ post.body|safe|lazyload }}
    {{ post.body|safe|lazyload:"img,video" }}
    ```
    """
    names = [name.strip() for name in tag_names.split(",") if name.strip()]
    if not names:
        names = get_content_tag_names()
    return ContentRewriter().rewrite(_to_str(value), names)


@register.filter(is_safe=True)
def lazyload_widget(value: Any) -> str:
    """
    Lazy load images and embeds in the HTML of a widget.

    ```django
    {{ widget.html|safe|lazyload_widget }}
    ```
    """
    return filter_widget(_to_str(value))


@register.filter(is_safe=True)
def lazyload_avatar(value: Any, size: Optional[Union[int, str]] = None) -> str:
    """
    Lazy load the `<img>` of an avatar. Pass the avatar's size in pixels to have
    it passed on to the hooks as `(size, size)`.

    ```django
    {{ user.avatar_html|safe|lazyload_avatar:96 }}
    ```
    """
    # Sizes without leading digits, e.g. `"abc"`, and `0` mean "unknown"
    avatar_size = absint(size) or None
    return filter_avatar_html(_to_str(value), avatar_size)
