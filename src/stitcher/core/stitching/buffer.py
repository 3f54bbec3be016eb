"""In-memory text of one file occurrence, plus the tag locator and substitutor.

A fresh ``FileBuffer`` is created for every render invocation, even when
the same partial is rendered several times with different parameters.
"""
from __future__ import annotations

from typing import Optional

from ..exceptions import MalformedPartialError
from .attributes import scan_open_tag
from .models import CandidateFile, PartialOccurrence

INNER_KEY = "inner"


def substitute(text: str, key: str, value: str) -> str:
    """Replace every literal ``${key}`` in ``text`` with ``value``.

    Placeholders inside ``value`` are not expanded by this call.
    """
    return text.replace("${" + key + "}", str(value))


def indent_lines(text: str, indent: str) -> str:
    """Insert ``indent`` after every newline (the first line is left alone)."""
    if not indent:
        return text
    return text.replace("\n", "\n" + indent)


def leading_indent(text: str, index: int) -> str:
    """Return the run of spaces/tabs that ends right before ``text[index]``."""
    pos = index
    while pos > 0 and text[pos - 1] in " \t":
        pos -= 1
    return text[pos:index]


def locate_partial(
    text: str,
    name: str,
    start: int = 0,
    *,
    file: Optional[str] = None,
) -> Optional[PartialOccurrence]:
    """Find the next ``<name ...>...</name>`` element at or after ``start``.

    Returns None when there is no further ``<name`` in ``text``.

    Raises:
        MalformedPartialError: The open tag has no ``</name>`` after it, or
            its ``>`` is missing.
    """
    open_token = f"<{name}"
    close_token = f"</{name}>"

    open_start = text.find(open_token, start)
    if open_start == -1:
        return None

    close_start = text.find(close_token, open_start)
    if close_start == -1:
        raise MalformedPartialError(
            f'"{open_token}" partial element found without closing tag "{close_token}"',
            file=file,
            tag=name,
        )

    scanned = scan_open_tag(text, open_start, name, stop=close_start)
    if scanned is None:
        raise MalformedPartialError(
            f'"{open_token}" open tag is not terminated before "{close_token}"',
            file=file,
            tag=name,
        )
    attributes, open_end = scanned

    parameters = dict(attributes)
    parameters[INNER_KEY] = text[open_end:close_start]

    return PartialOccurrence(
        name=name,
        start=open_start,
        end=close_start + len(close_token),
        parameters=parameters,
        indent=leading_indent(text, open_start),
    )


class FileBuffer:
    """Mutable text of a single file during one render pass."""

    def __init__(self, text: str, source: Optional[str] = None) -> None:
        self.text = text
        self.source = source

    @classmethod
    def read(cls, file: CandidateFile, encoding: str = "utf-8") -> "FileBuffer":
        return cls(file.read_text(encoding=encoding), source=str(file.path))

    def __len__(self) -> int:
        return len(self.text)

    def indent(self, indent: str) -> None:
        self.text = indent_lines(self.text, indent)

    def substitute(self, key: str, value: str) -> None:
        self.text = substitute(self.text, key, value)

    def substitute_all(self, parameters: dict) -> None:
        """Substitute each parameter in turn, in mapping order.

        A value that contains the placeholder of a later key is expanded by
        that later substitution.
        """
        for key, value in parameters.items():
            self.substitute(key, value)

    def find_partial(self, name: str, start: int = 0) -> Optional[PartialOccurrence]:
        return locate_partial(self.text, name, start, file=self.source)

    def span(self, start: int, end: Optional[int] = None) -> str:
        return self.text[start:end]


__all__ = [
    "INNER_KEY",
    "FileBuffer",
    "indent_lines",
    "leading_indent",
    "locate_partial",
    "substitute",
]
