# uiauto_macos/values.py
"""
@file values.py
@brief Decoder for AppleScript results printed in source form (`osascript -s s`).

Mapping:
  "text"            -> str
  12, -3.5, 1.0E+5  -> int / float
  true, false       -> bool
  missing value     -> None
  {a, b}            -> list
  {k:v, |k 2|:v}    -> dict
  anything else     -> stripped source text (object specifiers, class
                       names, constants, `date "..."`)
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from .exceptions import ScriptResultError
from .path import unquote_applescript_string

_INT_RE = re.compile(r"^-?\d+$")
_REAL_RE = re.compile(r"^-?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_KEY_CHARS = re.compile(r"[A-Za-z0-9_ ]")

_LITERALS = {
    "true": True,
    "false": False,
    "missing value": None,
    "null": None,
}


class _Reader:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> ScriptResultError:
        return ScriptResultError(f"{message} at offset {self.pos}", raw=self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            raise self.error(f"expected {ch!r}")
        self.pos += 1

    def read_string(self) -> str:
        start = self.pos
        self.expect('"')
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if ch == '"':
                return unquote_applescript_string(self.text[start:self.pos])
        raise self.error("unterminated string")

    def read_value(self) -> Any:
        self.skip_ws()
        ch = self.peek()
        if ch == "{":
            return self.read_collection()
        if ch == '"':
            start = self.pos
            value = self.read_string()
            self.skip_ws()
            if self.peek() in ("", ",", "}"):
                return value
            # A string followed by more text is part of a larger expression.
            self.pos = start
        return self.read_bare()

    def read_bare(self) -> Any:
        start = self.pos
        depth = 0
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == '"':
                self.read_string()
                continue
            if ch == "«":
                end = self.text.find("»", self.pos)
                if end < 0:
                    raise self.error("unterminated «class»")
                self.pos = end + 1
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    break
                depth -= 1
            elif ch == "," and depth == 0:
                break
            self.pos += 1
        if depth:
            raise self.error("unbalanced braces")
        token = self.text[start:self.pos].strip()
        if not token:
            raise self.error("expected a value")
        return _coerce_bare(token)

    def try_read_key(self) -> Optional[str]:
        """Read `key:` at the current position, or rewind and return None."""
        start = self.pos
        self.skip_ws()
        if self.peek() == "|":
            end = self.text.find("|", self.pos + 1)
            if end < 0:
                raise self.error("unterminated |key|")
            key = self.text[self.pos + 1:end]
            self.pos = end + 1
        elif self.peek() == "«":
            end = self.text.find("»", self.pos)
            if end < 0:
                raise self.error("unterminated «class»")
            key = self.text[self.pos:end + 1]
            self.pos = end + 1
        else:
            key_start = self.pos
            while self.pos < len(self.text) and _KEY_CHARS.match(self.text[self.pos]):
                self.pos += 1
            key = self.text[key_start:self.pos].strip()
        self.skip_ws()
        if key and self.peek() == ":":
            self.pos += 1
            return key
        self.pos = start
        return None

    def read_collection(self) -> Any:
        self.expect("{")
        self.skip_ws()
        if self.peek() == "}":
            self.pos += 1
            return []

        first_key = self.try_read_key()
        if first_key is None:
            items: List[Any] = []
            while True:
                items.append(self.read_value())
                if self._end_of_item():
                    return items

        record: Dict[str, Any] = {}
        key = first_key
        while True:
            record[key] = self.read_value()
            if self._end_of_item():
                return record
            key = self.try_read_key()
            if key is None:
                raise self.error("expected record key")

    def _end_of_item(self) -> bool:
        self.skip_ws()
        ch = self.peek()
        if ch == ",":
            self.pos += 1
            return False
        if ch == "}":
            self.pos += 1
            return True
        raise self.error("expected ',' or '}'")


def _coerce_bare(token: str) -> Any:
    if token in _LITERALS:
        return _LITERALS[token]
    if _INT_RE.match(token):
        return int(token)
    if _REAL_RE.match(token):
        return float(token)
    return token


def parse_applescript_value(text: str) -> Any:
    """
    Decode one AppleScript value printed in source form.

    Empty output (a script that returns nothing) decodes to None.

    @throws ScriptResultError on malformed input
    """
    if text is None or not text.strip():
        return None
    reader = _Reader(text.strip())
    value = reader.read_value()
    reader.skip_ws()
    if reader.pos != len(reader.text):
        raise reader.error("trailing characters")
    return value
