"""Helper types shared across the package."""

from typing import Dict, List, Tuple, Union

AttributeMap = Dict[Union[str, int], str]
"""
Ordered mapping of HTML attributes of a single tag.

Named attributes use lower-case string keys. Bare tokens that are not attributes
(e.g. a quoted string with no name) are kept under integer keys.
"""

AttachmentSize = Union[str, Tuple[int, int], List[int]]
"""Named image size (e.g. `"thumbnail"`) or a `(width, height)` pair."""
