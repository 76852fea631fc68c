#!/usr/bin/env python3
"""
YAMLSHADOW READER - Structure Resolver
--------------------------------------
Resolves, from raw indentation alone, which structural paths each content
line introduces. The YAML engine never sees this pass; it only needs to be
right for the layouts the engine itself emits and for ordinary hand
written block-style documents.

A line may introduce several paths: '- name: web' opens a list element and
the 'name' key inside it. Lines inside block scalars, multi-line quoted
scalars and plain scalar continuations are reported as continuations of
the path that owns them.

Author: YamlShadow Team
Date: 2026-01-16
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from yamlshadow.core.models import LineInfo, LineKind, Path, ScannedLine
from yamlshadow.comments.lexer import (
    LineScanner, block_header, side_comment_of, skip_blanks, split_key
)

DOCUMENT_MARKER = re.compile(r"^(---|\.\.\.)(?=\s|$)")


@dataclass
class Frame:
    path: Path
    indent: int
    is_element: bool = False
    has_value: bool = False
    counter: int = 0        # next element index for a sequence parent
    anchor: Path = ()       # first path on the line that opened this frame


@dataclass
class BlockScalar:
    owner: Path
    column: int
    keep: bool = False


class StructureReader:
    """
    Indentation-driven path resolver.

    Keeps a stack of open frames (keys and list elements, each with the
    column of its token). A token at column c closes every frame at column
    c or deeper, except that a '-' at the same column as a key with no
    inline value starts an indentless sequence under that key.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.stack: List[Frame] = [Frame((), -1)]
        self.block: Optional[BlockScalar] = None
        self.quote: Optional[Tuple[Path, str]] = None

    @property
    def top(self) -> Frame:
        return self.stack[-1]

    def feed(self, line: ScannedLine, scanner: LineScanner) -> LineInfo:
        if self.block is not None:
            info = self._in_block(line, scanner)
            if info is not None:
                return info
        if self.quote is not None:
            return self._in_quote(line)
        if line.is_blank:
            return LineInfo(LineKind.BLANK)
        if line.is_comment:
            return LineInfo(LineKind.COMMENT)
        return self._content(line)

    def _in_block(self, line: ScannedLine, scanner: LineScanner) -> Optional[LineInfo]:
        block = self.block
        if line.is_blank:
            # Blank lines belong to the scalar only if it goes on after them
            upcoming = self._next_non_blank(scanner)
            if block.keep or (upcoming is not None and upcoming.indent > block.column):
                return LineInfo(LineKind.CONTINUATION, owner=block.owner)
        elif line.indent > block.column:
            return LineInfo(LineKind.CONTINUATION, owner=block.owner)
        self.block = None
        return None

    def _next_non_blank(self, scanner: LineScanner) -> Optional[ScannedLine]:
        offset = 1
        upcoming = scanner.peek(offset)
        while upcoming is not None and upcoming.is_blank:
            offset += 1
            upcoming = scanner.peek(offset)
        return upcoming

    def _in_quote(self, line: ScannedLine) -> LineInfo:
        owner, quote = self.quote
        side, still_open = side_comment_of(line.text, 0, quote)
        if still_open:
            return LineInfo(LineKind.CONTINUATION, owner=owner, open_quote=still_open)
        self.quote = None
        return LineInfo(LineKind.CONTINUATION, owner=owner, side_comment=side)

    def _pop(self, column: int, element: bool = False):
        while self.top.indent >= column:
            top = self.top
            if element and not top.is_element and top.indent == column and not top.has_value:
                break
            self.stack.pop()

    def _value(self, info: LineInfo, text: str, start: int, owner: Path, column: int):
        header = block_header(text[start:])
        side, open_quote = side_comment_of(text, start)
        info.side_comment = side
        if header is not None:
            self.block = BlockScalar(owner, column, keep="+" in header)
        elif open_quote:
            # The closing line's side comment belongs to the line that opened the value
            self.quote = (info.first, open_quote)
            info.open_quote = open_quote

    def _content(self, line: ScannedLine) -> LineInfo:
        text, pos = line.text, line.indent
        body = text[pos:]

        # Document markers, directives and explicit keys anchor nothing
        if pos == 0 and (DOCUMENT_MARKER.match(body) or body.startswith("%")):
            self.reset()
            side, _ = side_comment_of(text, 3 if body[:3] in ("---", "...") else 0)
            return LineInfo(LineKind.CONTENT, side_comment=side)
        if body == "?" or body.startswith("? "):
            side, _ = side_comment_of(text, pos + 1)
            return LineInfo(LineKind.CONTENT, side_comment=side)

        info = LineInfo(LineKind.CONTENT)
        scan_from = pos
        while pos < len(text):
            if text[pos] == "-" and text[pos + 1:pos + 2] in ("", " ", "\t"):
                self._pop(pos, element=True)
                parent = self.top
                path = parent.path + (parent.counter,)
                parent.counter += 1
                info.nodes.append((path, pos))
                self.stack.append(Frame(path, pos, is_element=True, anchor=info.first))
                scan_from = pos + 1
                pos = skip_blanks(text, pos + 1)
                continue

            found = split_key(text, pos)
            if found is None:
                break
            key, after = found
            self._pop(pos)
            path = self.top.path + (key,)
            info.nodes.append((path, pos))
            frame = Frame(path, pos, anchor=info.first)
            value_start = skip_blanks(text, after)
            frame.has_value = value_start < len(text) and text[value_start] != "#"
            self.stack.append(frame)
            self._value(info, text, after, path, pos)
            return info

        if info.nodes:
            owner, column = info.nodes[-1]
            self._value(info, text, scan_from, owner, column)
            return info

        # Neither key nor element: a plain scalar continuing the open frame
        top = self.top
        side, _ = side_comment_of(text, line.indent)
        if top.path and line.indent > top.indent:
            return LineInfo(LineKind.CONTINUATION, owner=top.anchor, side_comment=side)
        return LineInfo(LineKind.CONTENT, side_comment=side)
