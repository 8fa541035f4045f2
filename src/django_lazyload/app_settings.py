from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Type, Union, cast

from django.conf import settings

from django_lazyload.util.misc import default, to_bool

if TYPE_CHECKING:
    from django_lazyload.hooks import LazyloadHooks


class PlaceholderType(str, Enum):
    """
    How elements look while their source is being loaded.

    This only affects the styling of the page, the placeholder written into
    `src` / `srcset` is the same in both cases.

    **Options:**

    - `transparent`: The element stays transparent until loaded.
    - `spinner`: A loading spinner is shown in place of the element.
    """

    TRANSPARENT = "transparent"
    SPINNER = "spinner"


# This is the source of truth for the settings that are available. If the documentation
# or the defaults do NOT match this, they should be updated.
class LazyloadSettings(NamedTuple):
    """
    Settings available for django_lazyload.

    Fields left as `None` fall back to the defaults.

    **Example:**

    ```python
    LAZYLOAD = LazyloadSettings(
        skip_class_names="no-lazy hero",
        native_loading=True,
    )
    ```

    Settings can be also given as a plain dict, using either the field names,
    or the option IDs (e.g. `"data-sizes"` instead of `data_sizes`):

    ```python
    LAZYLOAD = {
        "data-sizes": False,
        "aspectratio": True,
    }
    ```
    """

    attachments: Optional[bool] = None
    """
    Lazy load images rendered for attachments, e.g. post thumbnails, featured images
    or the header logo.

    Defaults to `True`.
    """

    content_imgs: Optional[bool] = None
    """
    Lazy load `<img>` tags in post content.

    Defaults to `True`.
    """

    widgets: Optional[bool] = None
    """
    Lazy load `<img>` tags in widget content.

    Defaults to `True`.
    """

    avatars: Optional[bool] = None
    """
    Lazy load avatar images.

    Defaults to `True`.
    """

    embed: Optional[bool] = None
    """
    Lazy load embeds like `<iframe>` in post and widget content.

    Defaults to `True`.
    """

    skip_class_names: Optional[str] = None
    """
    Space-separated CSS class names. Tags with any of these classes are left untouched.

    Defaults to `""`.

    ```python
    LAZYLOAD = LazyloadSettings(
        skip_class_names="no-lazy hero-image",
    )
    ```
    """

    picturefill: Optional[bool] = None
    """
    Accepted so that option sets from other lazy loading setups keep working.
    Nothing in this package reads it: loading the `picturefill` polyfill is up to
    the project's own templates and static files.

    Defaults to `True`.
    """

    data_sizes: Optional[bool] = None
    """
    Let the client-side loader calculate the `sizes` attribute. When enabled,
    `sizes` is replaced with `data-sizes="auto"` on tags with `srcset`.

    Defaults to `True`.
    """

    aspectratio: Optional[bool] = None
    """
    Add `data-aspectratio="<width>/<height>"` to lazy loaded tags that have both
    `width` and `height`.

    Defaults to `False`.
    """

    native_loading: Optional[bool] = None
    """
    Set `loading="lazy"` on lazy loaded tags. When disabled, the `loading` attribute
    is removed from them instead.

    Defaults to `False`.
    """

    placeholder_type: Optional[Union[PlaceholderType, str]] = None
    """
    How elements look while loading, see [`PlaceholderType`](#PlaceholderType).

    Defaults to `"transparent"`.
    """

    enabled: Optional[bool] = None
    """
    Global switch. Set to `False` to turn off lazy loading everywhere.

    Defaults to `True`.
    """

    exclude_paths: Optional[Sequence[str]] = None
    """
    URL path prefixes of requests that should never be processed.

    Defaults to `["/admin/"]`.
    """

    hooks: Optional[Union["LazyloadHooks", Type["LazyloadHooks"], str]] = None
    """
    Extension points of the transformer. Either an instance or a subclass
    of [`LazyloadHooks`](../hooks#LazyloadHooks), or an import path to one.

    Defaults to `"django_lazyload.hooks.default_hooks"`.

    ```python
    LAZYLOAD = LazyloadSettings(
        hooks="myapp.lazyload.MyHooks",
    )
    ```
    """


# Maps option IDs to the fields of `LazyloadSettings`. Field names are accepted as well.
OPTION_IDS: Dict[str, str] = {
    "attachments": "attachments",
    "content_imgs": "content_imgs",
    "widgets": "widgets",
    "avatars": "avatars",
    "embed": "embed",
    "skip_class_names": "skip_class_names",
    "picturefill": "picturefill",
    "data-sizes": "data_sizes",
    "aspectratio": "aspectratio",
    "native-loading": "native_loading",
    "placeholder-type": "placeholder_type",
    **{field: field for field in LazyloadSettings._fields},
}


# This is the source of truth for the settings defaults. If the documentation
# does NOT match it, the documentation should be updated.
#
# fmt: off
# --snippet:defaults--
defaults = LazyloadSettings(
    attachments=True,
    content_imgs=True,
    widgets=True,
    avatars=True,
    embed=True,
    skip_class_names="",
    picturefill=True,
    data_sizes=True,
    aspectratio=False,
    native_loading=False,
    placeholder_type=PlaceholderType.TRANSPARENT.value,  # "transparent" | "spinner"
    enabled=True,
    exclude_paths=["/admin/"],
    hooks="django_lazyload.hooks.default_hooks",
)
# --endsnippet:defaults--
# fmt: on


def settings_from_options(options: Mapping[str, Any]) -> LazyloadSettings:
    """
    Build `LazyloadSettings` from a mapping of option IDs to values.

    Unknown keys are ignored.

    ```py
    settings_from_options({"data-sizes": False, "unknown": 1})
    # LazyloadSettings(data_sizes=False, ...)
    ```
    """
    data = {}
    for key, value in options.items():
        field = OPTION_IDS.get(key)
        if field is not None:
            data[field] = value
    return LazyloadSettings(**data)


class InternalSettings:
    """
    Resolved view of the options, with defaults filled in.

    When created without a source, the options are read from Django's
    `settings.LAZYLOAD` on every access. Otherwise the given source is used,
    and Django settings are never touched.
    """

    def __init__(self, source: Optional[Union[LazyloadSettings, Mapping[str, Any]]] = None) -> None:
        self._source = source

    @property
    def _settings(self) -> LazyloadSettings:
        data = self._source if self._source is not None else getattr(settings, "LAZYLOAD", {})
        if isinstance(data, LazyloadSettings):
            return data
        return settings_from_options(data)

    @property
    def ATTACHMENTS(self) -> bool:
        return to_bool(default(self._settings.attachments, cast(bool, defaults.attachments)))

    @property
    def CONTENT_IMGS(self) -> bool:
        return to_bool(default(self._settings.content_imgs, cast(bool, defaults.content_imgs)))

    @property
    def WIDGETS(self) -> bool:
        return to_bool(default(self._settings.widgets, cast(bool, defaults.widgets)))

    @property
    def AVATARS(self) -> bool:
        return to_bool(default(self._settings.avatars, cast(bool, defaults.avatars)))

    @property
    def EMBED(self) -> bool:
        return to_bool(default(self._settings.embed, cast(bool, defaults.embed)))

    @property
    def SKIP_CLASS_NAMES(self) -> List[str]:
        raw_value = default(self._settings.skip_class_names, cast(str, defaults.skip_class_names))
        if not isinstance(raw_value, str):
            return []
        return raw_value.split()

    @property
    def PICTUREFILL(self) -> bool:
        return to_bool(default(self._settings.picturefill, cast(bool, defaults.picturefill)))

    @property
    def DATA_SIZES(self) -> bool:
        return to_bool(default(self._settings.data_sizes, cast(bool, defaults.data_sizes)))

    @property
    def ASPECTRATIO(self) -> bool:
        return to_bool(default(self._settings.aspectratio, cast(bool, defaults.aspectratio)))

    @property
    def NATIVE_LOADING(self) -> bool:
        return to_bool(default(self._settings.native_loading, cast(bool, defaults.native_loading)))

    @property
    def PLACEHOLDER_TYPE(self) -> PlaceholderType:
        raw_value = cast(str, default(self._settings.placeholder_type, defaults.placeholder_type))
        return self._validate_placeholder_type(raw_value)

    def _validate_placeholder_type(self, raw_value: Union[PlaceholderType, str]) -> PlaceholderType:
        try:
            return PlaceholderType(raw_value)
        except ValueError:
            valid_values = [placeholder.value for placeholder in PlaceholderType]
            raise ValueError(f"Invalid placeholder type: {raw_value}. Valid options are {valid_values}")

    @property
    def ENABLED(self) -> bool:
        return to_bool(default(self._settings.enabled, cast(bool, defaults.enabled)))

    @property
    def EXCLUDE_PATHS(self) -> Sequence[str]:
        return default(self._settings.exclude_paths, cast(List[str], defaults.exclude_paths))

    @property
    def HOOKS(self) -> Union["LazyloadHooks", Type["LazyloadHooks"], str]:
        hooks = default(self._settings.hooks, cast(str, defaults.hooks))
        return cast(Union["LazyloadHooks", Type["LazyloadHooks"], str], hooks)


app_settings = InternalSettings()

OptionsInput = Optional[Union[InternalSettings, LazyloadSettings, Mapping[str, Any]]]


def resolve_options(options: OptionsInput = None) -> InternalSettings:
    """
    Normalize the different ways of passing options to an `InternalSettings` instance.

    `None` means "use the project settings".
    """
    if options is None:
        return app_settings
    if isinstance(options, InternalSettings):
        return options
    return InternalSettings(options)
