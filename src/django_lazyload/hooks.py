from collections.abc import Mapping
from typing import Optional, Type, Union

from django.utils.module_loading import import_string

from django_lazyload.attributes import sanitize_html_class
from django_lazyload.types import AttachmentSize, AttributeMap
from django_lazyload.util.logger import logger
from django_lazyload.util.misc import get_import_path

DEFAULT_TRIGGER_CLASS = "lazyload"


class LazyloadHooks:
    """
    Base class for customizing how tags are lazy loaded.

    Subclass it and override only the methods you need. Each method receives the value
    computed so far, and returns the value to use instead. Attribute maps passed to the
    hooks are copies, so modifying them in place has no effect. Return the new map instead.

    See "Extension points" in README.md.

    **Example:**

    ```python
    from django_lazyload import LazyloadHooks

    class MyHooks(LazyloadHooks):
        def should_lazyload(self, attrs, tag_name, attachment_id, size):
            # Keep the site logo eager
            return attrs.get("id") != "logo"

        def placeholder(self, placeholder, tag_name, attachment_id, size):
            if tag_name == "img":
                return "/static/img/blank.svg"
            return placeholder
    ```

    And point the settings to it:

    ```python
    LAZYLOAD = {
        "hooks": "myapp.lazyload.MyHooks",
    }
    ```
    """

    def should_lazyload(
        self,
        attrs: AttributeMap,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> bool:
        """
        Decide whether the given tag should be lazy loaded. Return `False` to leave
        the tag untouched.

        Args:
            attrs (dict): Attributes of the tag, as found in the markup.
            tag_name (str): Lower-cased tag name, e.g. `"img"`.
            attachment_id (int, optional): ID of the attachment, if known.
            size (str | tuple, optional): Image size name or `(width, height)`, if known.

        Returns:
            bool: Whether to lazy load the tag.
        """
        return True

    def placeholder(
        self,
        placeholder: str,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> str:
        """
        Return the value that is put in `src` / `srcset` until the real source is loaded.

        By default this is `about:blank` for frames and a transparent 1x1 GIF
        for everything else.
        """
        return placeholder

    def trigger_class(
        self,
        class_name: str,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> str:
        """Return the CSS class that marks the element for the client-side loader."""
        return class_name

    def filter_attrs(
        self,
        attrs: AttributeMap,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> AttributeMap:
        """Post-process the final attributes of a tag."""
        return attrs


class InternalHooks:
    """
    Internal wrapper around user-provided hooks, so that we validate the outputs.

    A hook that returns a value of the wrong type does not break the rendering.
    The value is coerced or ignored, and a warning is logged.
    """

    def __init__(self, hooks: LazyloadHooks):
        self.hooks = hooks

    @property
    def _name(self) -> str:
        return get_import_path(self.hooks.__class__)

    def should_lazyload(
        self,
        attrs: AttributeMap,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> bool:
        return bool(self.hooks.should_lazyload(dict(attrs), tag_name, attachment_id, size))

    def placeholder(
        self,
        placeholder: str,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> str:
        result = self.hooks.placeholder(placeholder, tag_name, attachment_id, size)
        if not isinstance(result, str) or not result:
            logger.warning(
                "%s.placeholder() returned an invalid placeholder %r for tag '%s'. Using '%s' instead.",
                self._name,
                result,
                tag_name,
                placeholder,
            )
            return placeholder
        return result

    def trigger_class(
        self,
        class_name: str,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> str:
        result = self.hooks.trigger_class(class_name, tag_name, attachment_id, size)
        sanitized = sanitize_html_class(result) if isinstance(result, str) else ""
        if not sanitized:
            logger.warning(
                "%s.trigger_class() returned an invalid CSS class %r for tag '%s'. Using '%s' instead.",
                self._name,
                result,
                tag_name,
                class_name,
            )
            return class_name
        return sanitized

    def filter_attrs(
        self,
        attrs: AttributeMap,
        tag_name: str,
        attachment_id: Optional[int],
        size: Optional[AttachmentSize],
    ) -> AttributeMap:
        result = self.hooks.filter_attrs(dict(attrs), tag_name, attachment_id, size)
        if not isinstance(result, Mapping):
            logger.warning(
                "%s.filter_attrs() returned %r instead of a mapping for tag '%s'. The result was ignored.",
                self._name,
                type(result),
                tag_name,
            )
            return attrs
        return _coerce_attrs(result)


def _coerce_attrs(attrs: Mapping) -> AttributeMap:
    coerced: AttributeMap = {}
    for key, value in attrs.items():
        # NOTE: `bool` is a subclass of `int`, but `True` is not a positional index
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            logger.warning("Dropping HTML attribute with invalid key %r", key)
            continue
        if value is None:
            value = ""
        coerced[key] = value if isinstance(value, str) else str(value)
    return coerced


def get_hooks(
    hooks: Optional[Union[LazyloadHooks, InternalHooks, Type[LazyloadHooks], str]] = None,
) -> InternalHooks:
    """
    Returns the hooks, wrapped for validation.

    Accepts an instance, a subclass, or an import path to either of them.
    If not given, the hooks configured in settings are used.
    """
    if hooks is None:
        from django_lazyload.app_settings import app_settings

        hooks = app_settings.HOOKS

    if isinstance(hooks, InternalHooks):
        return hooks

    if isinstance(hooks, str):
        hooks = import_string(hooks)

    if isinstance(hooks, type):
        hooks = hooks()

    if not isinstance(hooks, LazyloadHooks):
        raise TypeError(
            f"Lazyload hooks must be an instance or a subclass of LazyloadHooks, got {hooks!r}"
        )

    return InternalHooks(hooks)


# Pre-defined hooks
default_hooks = LazyloadHooks()
