# uiauto_macos/path.py
"""
@file path.py
@brief Parsing and serialization of System Events element paths.

A path is the textual object specifier System Events returns for an
element, e.g.::

    button "OK" of window "Save" of application process "TextEdit" of application "System Events"

Segments are separated by the ` of ` keyword. Names may contain that
keyword, so splitting honours double-quoted strings, «chevron» classes and
{brace} groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .exceptions import MalformedPathError

DELIMITER = " of "

APPLICATION = "application"
APPLICATION_PROCESS = "application process"

ELEMENT_TYPES = frozenset({
    "application",
    "application process",
    "process",
    "window",
    "sheet",
    "drawer",
    "group",
    "radio group",
    "splitter group",
    "tab group",
    "scroll area",
    "scroll bar",
    "splitter",
    "toolbar",
    "menu bar",
    "menu bar item",
    "menu",
    "menu item",
    "menu button",
    "button",
    "radio button",
    "checkbox",
    "pop up button",
    "pop over",
    "combo box",
    "text field",
    "text area",
    "static text",
    "image",
    "slider",
    "incrementor",
    "busy indicator",
    "progress indicator",
    "relevance indicator",
    "level indicator",
    "value indicator",
    "color well",
    "table",
    "outline",
    "browser",
    "list",
    "row",
    "column",
    "cell",
    "grow area",
    "UI element",
})


@dataclass(frozen=True)
class PathSegment:
    """One node of an element path."""
    type: str
    name: str = ""
    index: Optional[int] = None

    @property
    def is_known_type(self) -> bool:
        return self.type in ELEMENT_TYPES

    def to_string(self) -> str:
        if self.index is not None and self.name in ("", str(self.index)):
            return f"{self.type} {self.index}"
        if self.name:
            return f"{self.type} {quote_applescript_string(self.name)}"
        return self.type


def quote_applescript_string(value: str) -> str:
    """Render value as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def unquote_applescript_string(literal: str) -> str:
    """Inverse of quote_applescript_string; literal includes the quotes."""
    body = literal[1:-1]
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append({"n": "\n", "t": "\t", "r": "\r"}.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def split_path(path_string: str) -> List[str]:
    """
    Split a path into raw segment strings on the top-level ` of ` keyword.

    @throws MalformedPathError on unterminated quotes or brackets
    """
    parts: List[str] = []
    start = 0
    in_quote = False
    chevrons = 0
    braces = 0
    i = 0
    n = len(path_string)

    while i < n:
        ch = path_string[i]
        if in_quote:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_quote = False
        elif ch == '"':
            in_quote = True
        elif ch == "«":
            chevrons += 1
        elif ch == "»":
            if chevrons == 0:
                raise MalformedPathError(path_string, f"unbalanced '»' at offset {i}")
            chevrons -= 1
        elif ch == "{":
            braces += 1
        elif ch == "}":
            if braces == 0:
                raise MalformedPathError(path_string, f"unbalanced '}}' at offset {i}")
            braces -= 1
        elif (
            chevrons == 0
            and braces == 0
            and path_string.startswith(DELIMITER, i)
        ):
            parts.append(path_string[start:i])
            i += len(DELIMITER)
            start = i
            continue
        i += 1

    if in_quote:
        raise MalformedPathError(path_string, "unterminated string literal")
    if chevrons or braces:
        raise MalformedPathError(path_string, "unterminated bracket")

    parts.append(path_string[start:])
    return parts


def _parse_segment(raw: str, path_string: str) -> PathSegment:
    text = raw.strip()
    if not text:
        raise MalformedPathError(path_string, "empty segment")

    if text.endswith('"'):
        # Locate the opening quote of the trailing literal.
        quote_start = None
        in_quote = False
        i = 0
        while i < len(text):
            ch = text[i]
            if in_quote:
                if ch == "\\":
                    i += 2
                    continue
                if ch == '"':
                    in_quote = False
            elif ch == '"':
                in_quote = True
                quote_start = i
            i += 1
        if quote_start is None or in_quote:
            raise MalformedPathError(path_string, f"bad name literal in segment {text!r}")
        type_ = text[:quote_start].strip()
        if not type_:
            raise MalformedPathError(path_string, f"segment {text!r} has no type")
        return PathSegment(type=type_, name=unquote_applescript_string(text[quote_start:]))

    head, sep, tail = text.rpartition(" ")
    if sep and tail.isdigit() and head.strip():
        return PathSegment(type=head.strip(), name=tail, index=int(tail))

    return PathSegment(type=text)


def parse_segments(path_string: str) -> List[PathSegment]:
    """Parse every segment without checking for required owners."""
    if not isinstance(path_string, str) or not path_string.strip():
        raise MalformedPathError(str(path_string), "empty path")
    return [_parse_segment(raw, path_string) for raw in split_path(path_string)]


def find_segment(segments: Iterable[PathSegment], type_: str) -> Optional[PathSegment]:
    """First segment of the given type, or None."""
    for seg in segments:
        if seg.type == type_:
            return seg
    return None


def parse_path(path_string: str) -> List[PathSegment]:
    """
    Parse a full element path.

    @throws MalformedPathError if the path is unparseable or has no
            `application` or `application process` segment
    """
    segments = parse_segments(path_string)
    for required in (APPLICATION, APPLICATION_PROCESS):
        if find_segment(segments, required) is None:
            raise MalformedPathError(path_string, f"missing '{required}' segment")
    return segments


def serialize_path(segments: Sequence[PathSegment]) -> str:
    return DELIMITER.join(seg.to_string() for seg in segments)
