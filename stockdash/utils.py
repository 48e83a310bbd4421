import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Optional


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def join_url(base: str, path: str) -> str:
    """Joins a base URL and a request path with exactly one slash between them."""
    b = base[:-1] if base.endswith("/") else base
    p = path if path.startswith("/") else f"/{path}"
    return f"{b}{p}"


def try_num(value: Any) -> Optional[float]:
    """
    Returns `value` as a finite number, or None when it isn't one.
    Only real numbers and numeric strings qualify; bools, containers,
    blank strings, NaN and infinities do not.
    """
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        # ints past the float range overflow instead of becoming infinite
        n = float(value)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(n):
        return None
    return n if isinstance(value, str) else value


def to_num(value: Any, fallback: float = 0) -> float:
    """The single point of numeric defensiveness: never raises."""
    n = try_num(value)
    return fallback if n is None else n


def money(value: Any) -> str:
    return f"${to_num(value, 0):.2f}"


def value_or(candidate: Any, compute: Callable[[], float]) -> float:
    """
    Supplied-beats-derived: a candidate that is present is coerced and used
    even when it doesn't parse; only an absent one falls back to `compute`.
    """
    if candidate is not None:
        return to_num(candidate)
    return to_num(compute())


def lookup(raw: Mapping, key: str) -> Any:
    """Reads `key` from `raw`, following dotted paths through nested mappings."""
    current: Any = raw
    for part in key.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def pick(raw: Mapping, *keys: str) -> Any:
    """Returns the first candidate key whose value is not None."""
    for key in keys:
        value = lookup(raw, key)
        if value is not None:
            return value
    return None


def to_text(value: Any) -> str:
    # Numbers are stringified; containers and missing values collapse to ""
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    try:
        return str(value)
    except ValueError:
        # int too long for str() under the interpreter's digit limit
        return ""
