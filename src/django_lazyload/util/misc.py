import re
from typing import Any, Optional, Type, TypeVar

T = TypeVar("T")

# Leading digits of a dimension attribute, e.g. `100` in `width="100px"`
_INT_PREFIX_RE = re.compile(r"\s*[+-]?(\d+)")


# See https://stackoverflow.com/a/2020083/9788634
def get_import_path(cls_or_fn: Type[Any]) -> str:
    """
    Get the full import path for a class or a function, e.g. `"path.to.MyClass"`
    """
    module = cls_or_fn.__module__
    if module == "builtins":
        return cls_or_fn.__qualname__  # avoid outputs like 'builtins.str'
    return module + "." + cls_or_fn.__qualname__


def default(val: Optional[T], default: T) -> T:
    return val if val is not None else default


def absint(value: Any) -> int:
    """
    Convert a value to a non-negative integer.

    Strings are read up to the first non-digit, so `"100px"` gives `100`.
    Anything that does not start with a number gives `0`.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        return abs(int(value))
    if not isinstance(value, str):
        return 0

    match = _INT_PREFIX_RE.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def to_bool(value: Any) -> bool:
    """
    Interpret an option value as a boolean.

    Options may come from forms or storage as strings, so `"0"`, `"false"`, `"no"`,
    `"off"` and `""` count as `False`.
    """
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)
