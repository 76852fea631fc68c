#!/usr/bin/env python3
"""
YAMLSHADOW LEXER - Line Classifier
----------------------------------
Splits a raw document into physical lines and classifies each one as
blank, full-line comment or content, exposing indentation and one-line
lookahead. Also hosts the quote-aware helpers used to locate side
comments and mapping keys.

The side comment heuristic is approximate. It does not implement the full
YAML scalar grammar; a quote only opens a quoted scalar at the start of a
token, and a quote left open at the end of a line is carried to the next.

Author: YamlShadow Team
Date: 2026-01-16
"""

import re
from typing import Iterator, List, Optional, Tuple

from yamlshadow.core.models import ScannedLine

LINE_BREAK = re.compile(r"\r\n|\r|\n")
BLOCK_HEADER = re.compile(r"^([|>][0-9+-]*)(?=\s|$)")
DOUBLE_ESCAPES = {'"': '"', "\\": "\\", "/": "/", "n": "\n", "t": "\t", "r": "\r", "0": "\0", " ": " "}

# Characters that cannot start a plain mapping key
KEY_INDICATORS = "[]{}#|>%@`!&*,"
# A quote opens a quoted scalar only after one of these
TOKEN_BOUNDARY = " \t[{,"


class LineScanner:
    """
    Iterates ScannedLine models over a document.

    '\\r\\n', '\\r' and '\\n' all end a line; a leading byte order mark is
    dropped. A trailing line terminator does not produce an empty line.
    """

    def __init__(self, text: str):
        if text.startswith("\ufeff"):
            text = text[1:]
        lines = LINE_BREAK.split(text)
        if lines and lines[-1] == "":
            lines.pop()
        self.lines: List[str] = lines
        self.pos = 0

    def __len__(self):
        return len(self.lines)

    def _make(self, index: int) -> ScannedLine:
        text = self.lines[index]
        content = text.lstrip(" \t")
        return ScannedLine(
            line_no=index + 1,
            text=text,
            indent=len(text) - len(content),
            is_blank=not content.strip(),
            is_comment=content.startswith("#"),
        )

    def __iter__(self) -> Iterator[ScannedLine]:
        while self.pos < len(self.lines):
            line = self._make(self.pos)
            self.pos += 1
            yield line

    def peek(self, offset: int = 1) -> Optional[ScannedLine]:
        """Returns the line `offset` positions after the current one."""
        index = self.pos - 1 + offset
        if 0 <= index < len(self.lines):
            return self._make(index)
        return None


def find_comment_start(text: str, start: int = 0, quote: Optional[str] = None) -> Tuple[int, Optional[str]]:
    """
    Finds the '#' that starts a side comment, protecting hashes wrapped in
    quotes.

    Scanning begins at `start`; `quote` is a quote character left open by a
    previous line. Returns (index or -1, quote still open at end of line).
    """
    in_quote = quote
    i = start
    while i < len(text):
        char = text[i]
        if in_quote == '"':
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_quote = None
        elif in_quote == "'":
            if char == "'":
                if text[i + 1:i + 2] == "'":
                    i += 2
                    continue
                in_quote = None
        elif char == "#":
            # Valid YAML comments need leading whitespace unless at line start
            if i == 0 or text[i - 1].isspace():
                return i, None
        elif char in "\"'" and (i == start or text[i - 1] in TOKEN_BOUNDARY):
            in_quote = char
        i += 1
    return -1, in_quote


def side_comment_of(text: str, start: int = 0, quote: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Returns (raw side comment, open quote). The raw side comment runs from
    the whitespace preceding '#' to the end of the line.
    """
    idx, open_quote = find_comment_start(text, start, quote)
    if idx == -1:
        return None, open_quote
    begin = idx
    while begin > start and text[begin - 1] in " \t":
        begin -= 1
    return text[begin:], None


def _closing_quote(text: str, pos: int) -> int:
    quote = text[pos]
    i = pos + 1
    while i < len(text):
        char = text[i]
        if quote == '"' and char == "\\":
            i += 2
            continue
        if char == quote:
            if quote == "'" and text[i + 1:i + 2] == "'":
                i += 2
                continue
            return i
        i += 1
    return -1


def unquote(token: str) -> str:
    if len(token) < 2 or token[0] != token[-1] or token[0] not in "\"'":
        return token
    inner = token[1:-1]
    if token[0] == "'":
        return inner.replace("''", "'")
    out: List[str] = []
    i = 0
    while i < len(inner):
        if inner[i] == "\\" and i + 1 < len(inner):
            out.append(DOUBLE_ESCAPES.get(inner[i + 1], "\\" + inner[i + 1]))
            i += 2
            continue
        out.append(inner[i])
        i += 1
    return "".join(out)


def _is_colon(text: str, i: int) -> bool:
    return text[i] == ":" and (i + 1 == len(text) or text[i + 1] in " \t")


def split_key(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """
    Reads a mapping key starting at `pos`.

    Returns (key, index just past the ':') or None when the token at `pos`
    is not a key. Quoted keys are unquoted.
    """
    if pos >= len(text):
        return None
    char = text[pos]
    if char in "\"'":
        end = _closing_quote(text, pos)
        if end == -1:
            return None
        j = end + 1
        while j < len(text) and text[j] in " \t":
            j += 1
        if j < len(text) and _is_colon(text, j):
            return unquote(text[pos:end + 1]), j + 1
        return None
    if char in KEY_INDICATORS or (char in "-?" and text[pos + 1:pos + 2] in ("", " ", "\t")):
        return None
    for j in range(pos, len(text)):
        if text[j] == "#" and j > pos and text[j - 1].isspace():
            return None
        if _is_colon(text, j):
            key = text[pos:j].rstrip()
            return (key, j + 1) if key else None
    return None


def block_header(value: str) -> Optional[str]:
    """
    Detects a block scalar indicator ('|', '>-', '|+2', ...) at the start of
    a value, skipping any tag or anchor tokens before it.
    """
    tokens = value.split()
    for token in tokens:
        if token[0] in "!&":
            continue
        match = BLOCK_HEADER.match(token)
        return match.group(1) if match else None
    return None


def skip_blanks(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    return pos
