"""Binary-safe event values.

JSON cannot carry arbitrary bytes, so any value that is not valid UTF-8 is
replaced with a ``data:`` URI holding its base64 encoding.
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Any

BINARY_DATA_PREFIX = "data:application/octet-stream;base64,"

_DATA_URI = re.compile(r"^data:application/octet-stream;base64,([\s\S]+)$")


def _as_data_uri(raw: bytes) -> str:
    return BINARY_DATA_PREFIX + base64.b64encode(raw).decode("ascii")


def replace_binary_values(value: Any) -> Any:
    """Make *value* safe to JSON-encode.

    * ``bytes`` holding valid UTF-8 are decoded to ``str``.
    * ``bytes`` that are not valid UTF-8 become a base64 ``data:`` URI.
    * ``str`` carrying surrogate-escaped bytes (e.g. read with
      ``errors="surrogateescape"``) is not valid UTF-8 either and gets the
      same treatment, using the original bytes. Other lone surrogates are
      kept as their ``surrogatepass`` encoding.
    * Anything else is returned unchanged.
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return _as_data_uri(raw)
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            try:
                raw = value.encode("utf-8", "surrogateescape")
            except UnicodeEncodeError:
                raw = value.encode("utf-8", "surrogatepass")
            return _as_data_uri(raw)
    return value


def replace_binary_values_recursive(value: Any) -> Any:
    """Apply :func:`replace_binary_values` through nested dicts and lists.

    Returns a new structure; the argument is left untouched.
    """
    if isinstance(value, dict):
        return {key: replace_binary_values_recursive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [replace_binary_values_recursive(item) for item in value]
    return replace_binary_values(value)


def decode_binary_value(value: Any) -> Any:
    """Reverse :func:`replace_binary_values` for a single value.

    Raises ``ValueError`` when a ``data:`` URI carries invalid base64.
    """
    if not isinstance(value, str):
        return value
    match = _DATA_URI.match(value)
    if match is None:
        return value
    try:
        return base64.b64decode(match.group(1), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 payload: {exc}") from exc


__all__ = [
    "BINARY_DATA_PREFIX",
    "decode_binary_value",
    "replace_binary_values",
    "replace_binary_values_recursive",
]
