#!/usr/bin/env python3
"""
YAMLSHADOW OPTIONS
------------------
Settings shared by the engine, the configuration layer and the comment
mappers.

Author: YamlShadow Team
Date: 2026-01-16
"""

from dataclasses import dataclass, field
from typing import Optional

from yamlshadow.comments.formatter import CommentFormat, CommentFormatter, HeaderFormatter


@dataclass
class YamlOptions:
    indent: int = 2                 # mapping indentation unit
    indent_list: int = 2            # offset of '-' below its parent key
    path_separator: str = "."
    use_comments: bool = True       # read comments when loading files
    strict: bool = False            # comments only on existing paths
    comment_format: CommentFormat = CommentFormat.DEFAULT
    comment_formatter: Optional[CommentFormatter] = None   # overrides comment_format
    header_formatter: HeaderFormatter = field(default_factory=HeaderFormatter)
    width: int = 4096
    encoding: str = "utf-8"

    def __post_init__(self):
        if self.indent < 1:
            raise ValueError(f"indent must be positive, got {self.indent}")
        if self.indent_list < 0:
            raise ValueError(f"indent_list must not be negative, got {self.indent_list}")
        if not self.path_separator or self.path_separator in "[]\\":
            raise ValueError(f"Invalid path separator: {self.path_separator!r}")

    def formatter(self) -> CommentFormatter:
        return self.comment_formatter or self.comment_format.formatter()
