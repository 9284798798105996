"""
Filesystem-safe names for servers and resources.

Every server / resource name that ends up as a path segment under the log
directory goes through `sanitize()` first.
"""

from __future__ import annotations

import re
from typing import Any


FALLBACK_NAME = "unknown"

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize(name: Any) -> str:
    """
    Map an arbitrary value to a token made only of `[A-Za-z0-9_-]`.

    - Anything that is not a non-empty string maps to FALLBACK_NAME.
    - Otherwise each unsafe character is replaced by "_" one-for-one, so the
      result has the same length as the input.

    Distinct inputs may collide (e.g. "a.b" and "a b" both give "a_b");
    they then share one log file.
    """
    if not isinstance(name, str) or not name:
        return FALLBACK_NAME
    return _UNSAFE_CHARS_RE.sub("_", name)
