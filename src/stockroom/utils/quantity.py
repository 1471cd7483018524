"""Parsing of caller-supplied stock quantities."""

import re
from typing import Any

_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_quantity(value: Any) -> int | None:
    """Return ``value`` as an int, or None when it is not an integral number.

    Accepts ints, integral floats (``3.0``) and digit strings (``"3"``).
    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value.strip())
    return None


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
