#!/usr/bin/env python3
"""
YAMLSHADOW EXPORTER - Comment Merge-Back
----------------------------------------
Splices the comments held in a KeyTree back into plain YAML emitted by
the engine. The emitted text is walked with a fresh StructureReader so
every content line is matched to the paths it introduces.

Comments anchored to paths that no longer appear in the emitted text are
dropped; saving never fails because of them.

Author: YamlShadow Team
Date: 2026-01-16
"""

import logging
from typing import List, Optional

from yamlshadow.core.models import LineKind
from yamlshadow.comments.keytree import KeyTree
from yamlshadow.comments.lexer import LineScanner
from yamlshadow.comments.reader import StructureReader

logger = logging.getLogger("yamlshadow.exporter")


def _terminated(raw: str) -> str:
    return raw if raw.endswith("\n") else raw + "\n"


def reindent(raw: str, old: int, new: int) -> str:
    """Shifts every non-blank line of a raw block by `new - old` columns."""
    if old == new:
        return raw
    out: List[str] = []
    for line in raw.split("\n"):
        if not line.strip():
            out.append(line)
        elif new > old:
            out.append(" " * (new - old) + line)
        else:
            lead = len(line) - len(line.lstrip(" "))
            out.append(line[min(lead, old - new):])
    return "\n".join(out)


def _lead(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def inner_block(raw: str, column: int) -> str:
    """
    Normalises the block of a path opened mid-line ('- name: x' opens
    'name' at the dash's column + 2). Its lines must stay at or right of
    that column, without blank lines, to be read back onto the same path.
    """
    out = [line if _lead(line) >= column else " " * column + line.lstrip(" ")
           for line in raw.split("\n") if line.strip()]
    return "".join(line + "\n" for line in out)


def outer_block(raw: str, column: int, inner: int) -> str:
    """
    Pulls the trailing lines of a block back to `column` when they reach
    the column of a path opened later on the same line.
    """
    lines = _terminated(raw)[:-1].split("\n")
    i = len(lines) - 1
    while i >= 0 and lines[i].strip() and _lead(lines[i]) >= inner:
        lines[i] = " " * column + lines[i].lstrip(" ")
        i -= 1
    return "\n".join(lines) + "\n"


class CommentExporter:
    """
    The Reconstructor: writes header, block comments, lines, side comments
    and footer back together. Block comments of paths sharing a line are
    written outermost first, each kept inside its own column. Side comments
    of such paths are joined onto the line in the same order.
    """

    def __init__(self, tree: KeyTree):
        self.tree = tree

    def export(self, plain_text: str) -> str:
        tree = self.tree
        out: List[str] = []
        if tree.root.comment is not None:
            out.append(_terminated(tree.root.comment))

        scanner = LineScanner(plain_text)
        reader = StructureReader()
        deferred: Optional[str] = None
        placed = 0

        for line in scanner:
            info = reader.feed(line, scanner)
            text = line.text

            if info.kind is LineKind.CONTENT:
                sides: List[str] = []
                for i, (path, column) in enumerate(info.nodes):
                    node = tree.get(path)
                    if node is None:
                        continue
                    placed += 1
                    if node.comment is not None:
                        block = reindent(node.comment, node.indent, column)
                        if i > 0:
                            block = inner_block(block, column)
                        if i + 1 < len(info.nodes):
                            block = outer_block(block, column, info.nodes[i + 1][1])
                        if block:
                            out.append(_terminated(block))
                    if node.side_comment is not None:
                        sides.append(node.side_comment)
                if len(sides) > 1:
                    logger.info("L%d: %d side comments share one line, merged", line.line_no, len(sides))
                if sides:
                    side = "".join(sides)
                    # A quoted value still open here takes the comment on its closing line
                    if info.open_quote:
                        deferred = side
                    else:
                        text += side
            elif info.kind is LineKind.CONTINUATION and deferred is not None and not info.open_quote:
                text += deferred
                deferred = None

            out.append(text + "\n")

        if tree.footer.comment is not None:
            out.append(_terminated(tree.footer.comment))

        dropped = len(tree) - placed
        if dropped > 0:
            logger.debug("%d anchor(s) not present in emitted text", dropped)
        return "".join(out)
