#!/usr/bin/env python3
"""
YAMLSHADOW SHADOW - The Comment Curator
---------------------------------------
Records block and side comments of a raw document into a KeyTree, keyed
by the structural path they are anchored to. Runs independently of the
YAML engine's own parse of the same text.

Author: YamlShadow Team
Date: 2026-01-16
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from yamlshadow.core.models import CommentType, LineInfo, LineKind, Path
from yamlshadow.comments.keytree import KeyTree
from yamlshadow.comments.lexer import LineScanner
from yamlshadow.comments.reader import StructureReader

logger = logging.getLogger("yamlshadow.shadow")


@dataclass
class Accumulating:
    """Collecting blank and comment lines not yet anchored anywhere."""
    lines: List[str] = field(default_factory=list)


@dataclass
class Resolving:
    """The last content line resolved to `owner`; nothing is pending."""
    owner: Optional[Path] = None


TrackerState = Union[Accumulating, Resolving]


def _raw(lines: List[str]) -> str:
    return "".join(line + "\n" for line in lines)


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def split_header(lines: List[str]) -> int:
    """
    Returns how many leading pending lines form the header: the first
    comment block and the blank line closing it. 0 when there is none.
    """
    seen_comment = False
    for i, line in enumerate(lines):
        if line.strip():
            seen_comment = True
        elif seen_comment:
            return i + 1
    return 0


def split_block(lines: List[str], nodes: List[Tuple[Path, int]]) -> List[List[str]]:
    """
    Distributes pending lines over the paths a line opens, by column.

    Walking back from the last line, the comment lines indented at least
    to the innermost path's column belong to it, then the next path out,
    and so on. Blank lines stop inner runs; what remains goes to the
    outermost path.
    """
    owned: List[List[str]] = [[] for _ in nodes]
    end = len(lines)
    for i in range(len(nodes) - 1, 0, -1):
        column = nodes[i][1]
        start = end
        while start > 0 and lines[start - 1].strip() and _indent(lines[start - 1]) >= column:
            start -= 1
        owned[i] = lines[start:end]
        end = start
    owned[0] = lines[:end]
    return owned


class CommentShadow:
    """
    The Curator: walks a document line by line and anchors every comment
    it finds in the KeyTree.

    Pending comment lines become the block comment of the next content
    line. When that line opens several paths ('- name: x'), the trailing
    comment lines indented at least to an inner path's column go to that
    path and the rest to the outermost one. A side comment belongs to the
    outermost path on its line.
    """

    def __init__(self, tree: Optional[KeyTree] = None, indent: int = 2):
        self.tree = tree if tree is not None else KeyTree(indent)
        self.state: TrackerState = Accumulating()
        self.header_done = False
        self.anchored = False

    def _pending(self) -> List[str]:
        return self.state.lines if isinstance(self.state, Accumulating) else []

    def _take_header(self, lines: List[str]) -> List[str]:
        if self.header_done:
            return lines
        self.header_done = True
        cut = split_header(lines)
        if cut:
            self.tree.root.comment = _raw(lines[:cut])
            logger.debug("Captured %d header line(s)", cut)
        return lines[cut:]

    def _keep_unanchored(self, side: str, pending: List[str], line_no: int) -> List[str]:
        """
        A side comment on a line that opens no path (document marker,
        directive, explicit key) is kept as a full-line comment: in the
        header before the first path, above the next path afterwards.
        """
        text = side.strip()
        if self.anchored or pending:
            logger.debug("L%d: side comment kept as a full-line comment", line_no)
            return pending + [text]
        header = (self.tree.root.comment or "").rstrip("\n")
        self.tree.root.comment = (header + "\n" if header else "") + text + "\n\n"
        logger.debug("L%d: side comment moved into the header", line_no)
        return pending

    def _anchor(self, info: LineInfo, line_no: int):
        pending = self._take_header(self._pending())
        if not info.nodes:
            if info.side_comment:
                pending = self._keep_unanchored(info.side_comment, pending, line_no)
            self.state = Accumulating(pending) if pending else Resolving(None)
            return
        self.anchored = True
        for path, column in info.nodes:
            self.tree.get_or_create(path, indent=column)
        for (path, _), lines in zip(info.nodes, split_block(pending, info.nodes)):
            if lines:
                self.tree.set_comment(path, _raw(lines), CommentType.BLOCK)
        if info.side_comment:
            self.tree.set_comment(info.first, info.side_comment, CommentType.SIDE)
        self.state = Resolving(info.first)

    def capture(self, raw_text: str) -> KeyTree:
        """
        Scans the raw document and fills the tree.

        Args:
            raw_text: the full document text, comments included.
        """
        scanner = LineScanner(raw_text)
        reader = StructureReader()

        for line in scanner:
            info = reader.feed(line, scanner)

            if info.kind in (LineKind.BLANK, LineKind.COMMENT):
                if isinstance(self.state, Accumulating):
                    self.state.lines.append(line.text)
                else:
                    self.state = Accumulating([line.text])
                continue

            if info.kind is LineKind.CONTINUATION:
                if info.side_comment and info.owner is not None:
                    self.tree.set_comment(info.owner, info.side_comment, CommentType.SIDE)
                continue

            self._anchor(info, line.line_no)

        # Anything left over at the end of the file is the footer
        pending = self._take_header(self._pending())
        if pending:
            self.tree.footer.comment = _raw(pending)
        self.state = Resolving(None)
        return self.tree


def capture(raw_text: str, indent: int = 2) -> KeyTree:
    return CommentShadow(indent=indent).capture(raw_text)
