"""
Line classification for C++ sources.

Each line falls into exactly one of four kinds, checked in this order:
standard include, local include, ``using`` declaration, body line.
Classification works on the stripped line; no preprocessing is done.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

_STANDARD_INCLUDE = re.compile(r"^#\s*include\s*<[^>]+>")
_LOCAL_INCLUDE = re.compile(r'^#\s*include\s*"([^"]+)"')
_PRAGMA_ONCE = re.compile(r"^#\s*pragma\s+once\b")


class LineKind(str, Enum):
    """Kind of a source line."""

    STANDARD_INCLUDE = "standard_include"
    LOCAL_INCLUDE = "local_include"
    USING = "using"
    BODY = "body"


def classify_line(line: str) -> LineKind:
    """Classify a single source line."""
    stripped = line.strip()
    if _STANDARD_INCLUDE.match(stripped):
        return LineKind.STANDARD_INCLUDE
    if _LOCAL_INCLUDE.match(stripped):
        return LineKind.LOCAL_INCLUDE
    if stripped.startswith("using "):
        return LineKind.USING
    return LineKind.BODY


def local_include_target(line: str) -> str | None:
    """Return the quoted argument of a local include, or None."""
    match = _LOCAL_INCLUDE.match(line.strip())
    return match.group(1) if match else None


def is_pragma_once(line: str) -> bool:
    return bool(_PRAGMA_ONCE.match(line.strip()))


def split_lines(text: str) -> list[str]:
    """Split text on newlines, accepting both LF and CRLF endings."""
    return text.replace("\r\n", "\n").split("\n")


class BodyBuilder:
    """Accumulates body lines under the blank-line retention rule.

    A blank line is kept only once the body holds non-whitespace content,
    so blank runs left over by stripped directives at the top collapse.
    """

    def __init__(self, strip_pragma_once: bool = False):
        self._lines: list[str] = []
        self._has_content = False
        self._strip_pragma_once = strip_pragma_once

    def add(self, line: str) -> None:
        if not line.strip():
            if self._has_content:
                self._lines.append("")
            return
        if self._strip_pragma_once and is_pragma_once(line):
            return
        self._lines.append(line)
        self._has_content = True

    def text(self) -> str:
        """Body with surrounding whitespace trimmed."""
        return "\n".join(self._lines).strip()


@dataclass
class SourceUnit:
    """A scanned source file.

    Attributes:
        path: Normalized absolute path
        text: Raw file contents
        standard_includes: Standard include lines, stripped
        using_declarations: ``using`` lines, stripped
        local_includes: Quoted include targets in order of appearance, as written
        body: Text with directive lines removed, trimmed
    """

    path: str
    text: str
    standard_includes: set[str] = field(default_factory=set)
    using_declarations: set[str] = field(default_factory=set)
    local_includes: list[str] = field(default_factory=list)
    body: str = ""


def scan_source(path: str, text: str, strip_pragma_once: bool = False) -> SourceUnit:
    """Scan a whole file without following its includes."""
    unit = SourceUnit(path=path, text=text)
    body = BodyBuilder(strip_pragma_once)
    for line in split_lines(text):
        kind = classify_line(line)
        if kind is LineKind.STANDARD_INCLUDE:
            unit.standard_includes.add(line.strip())
        elif kind is LineKind.LOCAL_INCLUDE:
            unit.local_includes.append(local_include_target(line))
        elif kind is LineKind.USING:
            unit.using_declarations.add(line.strip())
        else:
            body.add(line)
    unit.body = body.text()
    return unit


def strip_directives(text: str, strip_pragma_once: bool = False) -> str:
    """Return ``text`` without include and ``using`` lines, trimmed."""
    return scan_source("", text, strip_pragma_once).body
