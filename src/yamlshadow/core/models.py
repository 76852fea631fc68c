#!/usr/bin/env python3
"""
YAMLSHADOW CORE MODELS
----------------------
Defines the fundamental data structures shared by the scanner, the
structure reader and the comment tracker. These models represent the
lowest level of document abstraction: a physical line and what it means.

Author: YamlShadow Team
Date: 2026-01-16
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

# A path segment is a mapping key (str) or a list index (int)
Segment = Union[str, int]
Path = Tuple[Segment, ...]


class CommentType(Enum):
    """Where a comment sits relative to the line of its anchor."""
    BLOCK = "block"   # full lines directly above the anchor
    SIDE = "side"     # trailing text after the anchor's content


class LineKind(Enum):
    BLANK = "blank"
    COMMENT = "comment"
    CONTENT = "content"
    CONTINUATION = "continuation"


@dataclass
class ScannedLine:
    """
    The atomic unit of a document as seen by the LineScanner.

    Classification is purely lexical: a comment line is any line whose
    first non-whitespace character is '#'.
    """
    line_no: int            # 1-based physical line number
    text: str               # raw text without the line terminator
    indent: int             # count of leading whitespace characters
    is_blank: bool = False
    is_comment: bool = False


@dataclass
class LineInfo:
    """
    Structural reading of one line, produced by the StructureReader.

    `nodes` lists (path, column) for every path the line introduces, outer
    first. `owner` takes the side comment of a continuation line: the
    first path on the line that opened the value.
    """
    kind: LineKind
    nodes: List[Tuple[Path, int]] = field(default_factory=list)
    owner: Optional[Path] = None
    side_comment: Optional[str] = None   # raw, from the whitespace before '#'
    open_quote: Optional[str] = None     # quote char still open at end of line

    @property
    def first(self) -> Optional[Path]:
        return self.nodes[0][0] if self.nodes else None

    @property
    def last(self) -> Optional[Path]:
        return self.nodes[-1][0] if self.nodes else None
