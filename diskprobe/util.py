"""String, truthiness and conversion helpers used across the package."""

from __future__ import annotations

import hashlib
import re
import sys
from collections.abc import Callable, Iterable

_TRUTHY_VALUES = frozenset({"1", "YES", "TRUE", "OK"})
_FALSY_VALUES = frozenset({"0", "NO", "FALSE", "BLANK"})
_STATE_STATUS = {True: "enable", False: "disable"}

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


def check_truthy(value: str) -> bool:
    """Return True if ``value`` is one of the accepted truthy words."""
    return value.upper() in _TRUTHY_VALUES


def check_falsy(value: str) -> bool:
    """Return True if ``value`` is a falsy word; an empty string counts as falsy."""
    if not value:
        value = "blank"
    return value.upper() in _FALSY_VALUES


def check_err(err: BaseException | None, handle_err: Callable[[str], object]) -> None:
    """Pass the message of ``err`` to ``handle_err`` when an error is given."""
    if err is None:
        return
    handle_err(str(err))


def fatal(msg: str) -> None:
    """Write ``msg`` to standard error (if any) and exit with status 1."""
    if msg:
        if not msg.endswith("\n"):
            msg += "\n"
        sys.stderr.write(msg)
        sys.stderr.flush()
    raise SystemExit(1)


def string_to_int32(value: str) -> int:
    """Parse a base-10 string into a signed 32-bit integer.

    Raises ValueError for empty, malformed or out-of-range input.
    """
    if not value:
        raise ValueError("Nil value to convert")
    if not _DECIMAL_RE.fullmatch(value):
        raise ValueError(f"invalid syntax: {value!r}")
    number = int(value, 10)
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise ValueError(f"value out of range: {value!r}")
    return number


def str_to_int32(value: str) -> int | None:
    """Like :func:`string_to_int32`, but return None instead of raising."""
    try:
        return string_to_int32(value)
    except ValueError:
        return None


def hash_string(s: str) -> str:
    """Return the hex-encoded MD5 digest of ``s``."""
    return hashlib.md5(s.encode("utf-8")).hexdigest()


def state_status(state: bool) -> str:
    """Return "enable" for a true state and "disable" otherwise."""
    status = _STATE_STATUS[bool(state)]
    return status


def contains(items: Iterable[str], key: str) -> bool:
    """Return True if ``key`` is one of ``items``."""
    return key in items


def contains_ignored_case(items: Iterable[str], key: str) -> bool:
    """Return True if ``key`` is one of ``items``, ignoring case."""
    wanted = key.lower()
    return any(item.lower() == wanted for item in items)


def match_ignored_case(keys: Iterable[str], s: str) -> bool:
    """Return True if any of ``keys`` occurs in ``s``, ignoring case."""
    haystack = s.lower()
    return any(key.lower() in haystack for key in keys)


def remove_string(items: Iterable[str], s: str) -> list[str]:
    """Return ``items`` with every occurrence of ``s`` removed."""
    return [item for item in items if item != s]


def is_match_regex(regex: str, s: str) -> bool:
    """Return True if ``regex`` matches anywhere in ``s``."""
    return re.search(regex, s) is not None