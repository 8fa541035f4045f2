"""Lazy loading of images and embeds in Django-rendered HTML."""

# Public API
# NOTE: Middleware is exposed via django_lazyload.middleware
# NOTE: Template filters are exposed via django_lazyload.templatetags.lazyload_tags
# isort: off
from django_lazyload.app_settings import LazyloadSettings, PlaceholderType
from django_lazyload.attributes import attributes_to_string
from django_lazyload.content import (
    filter_attachment_attrs,
    filter_avatar_html,
    filter_block,
    filter_image_tag,
    filter_post_content,
    filter_post_thumbnail_html,
    filter_widget,
    get_content_tag_names,
    get_embed_tag_names,
    get_widget_tag_names,
    is_exit,
)
from django_lazyload.hooks import LazyloadHooks
from django_lazyload.rewriter import ContentRewriter, rewrite
from django_lazyload.transformer import AttributeTransformer, TagCategory, transform_attrs
from django_lazyload.util.attr_parser import parse_attrs
from django_lazyload.util.tag_matcher import TagMatch, find_tags
import django_lazyload.types as types

# isort: on


__all__ = [
    "attributes_to_string",
    "AttributeTransformer",
    "ContentRewriter",
    "filter_attachment_attrs",
    "filter_avatar_html",
    "filter_block",
    "filter_image_tag",
    "filter_post_content",
    "filter_post_thumbnail_html",
    "filter_widget",
    "find_tags",
    "get_content_tag_names",
    "get_embed_tag_names",
    "get_widget_tag_names",
    "is_exit",
    "LazyloadHooks",
    "LazyloadSettings",
    "parse_attrs",
    "PlaceholderType",
    "rewrite",
    "TagCategory",
    "TagMatch",
    "transform_attrs",
    "types",
]
