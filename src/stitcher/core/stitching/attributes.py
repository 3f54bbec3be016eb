"""Attribute scanner for a single partial open tag.

Only ``key="value"``, ``key='value'``, ``key=value`` and bare ``key``
forms are recognised. Values are kept verbatim: no entity decoding, no
type conversion. A bare key maps to an empty string.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

_WHITESPACE = " \t\r\n\f"


def scan_open_tag(text: str, start: int, tag_name: str, stop: Optional[int] = None) -> Optional[Tuple[Dict[str, str], int]]:
    """Scan the open tag ``<tag_name ...>`` beginning at ``text[start]``.

    Returns ``(attributes, end)`` where ``end`` is the index just past the
    closing ``>``, or ``None`` when no ``>`` is found before ``stop``.
    A ``>`` inside a quoted value does not end the tag.
    """
    limit = len(text) if stop is None else stop
    pos = start + 1 + len(tag_name)
    attrs: Dict[str, str] = {}

    while pos < limit:
        ch = text[pos]
        if ch in _WHITESPACE or ch == "/":
            pos += 1
            continue
        if ch == ">":
            return attrs, pos + 1

        key_start = pos
        while pos < limit and text[pos] not in _WHITESPACE and text[pos] not in "=>/":
            pos += 1
        key = text[key_start:pos]

        while pos < limit and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= limit or text[pos] != "=":
            if key:
                attrs[key] = ""
            continue

        pos += 1
        while pos < limit and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= limit:
            return None

        quote = text[pos]
        if quote in "\"'":
            close = text.find(quote, pos + 1, limit)
            if close == -1:
                return None
            if key:
                attrs[key] = text[pos + 1 : close]
            pos = close + 1
        else:
            value_start = pos
            while pos < limit and text[pos] not in _WHITESPACE and text[pos] != ">":
                pos += 1
            if key:
                attrs[key] = text[value_start:pos]

    return None


def parse_attributes(open_tag: str, tag_name: str) -> Dict[str, str]:
    """Return the attributes of a complete open tag string such as ``<item a="1">``."""
    scanned = scan_open_tag(open_tag, 0, tag_name)
    if scanned is None:
        raise ValueError(f"Unterminated open tag: {open_tag!r}")
    return scanned[0]


__all__ = ["scan_open_tag", "parse_attributes"]
