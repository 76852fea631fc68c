#!/usr/bin/env python3
"""
YAMLSHADOW FORMATTER - Raw / Human Comment Conversion
-----------------------------------------------------
Converts between the "human" text of a comment (what callers read and
write) and the "raw" fragment spliced into the document (markers,
indentation and line breaks included).

Each site (block, side, header) is driven by an immutable
FormatterConfiguration built from four templates: prefix_first,
prefix_multiline, suffix_multiline and suffix_last. Variants are derived
with dataclasses.replace; nothing here is process-wide mutable state.

Author: YamlShadow Team
Date: 2026-01-16
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from yamlshadow.core.models import CommentType
from yamlshadow.comments.keytree import Node


@dataclass(frozen=True)
class FormatterConfiguration:
    prefix_first: str = ""
    prefix_multiline: str = ""
    suffix_multiline: str = ""
    suffix_last: str = ""
    strip_prefix: bool = True
    trim: bool = True

    @property
    def lead(self) -> str:
        """Line breaks the first prefix puts before the comment itself."""
        return self.prefix_first[:self.prefix_first.rfind("\n") + 1]

    @property
    def marker(self) -> str:
        return self.prefix_first[len(self.lead):]

    def validate(self, comment_type: CommentType) -> "FormatterConfiguration":
        for prefix in (self.prefix_first, self.prefix_multiline):
            for line in prefix.split("\n"):
                if line.strip() and not line.lstrip().startswith("#"):
                    raise ValueError(f"Comment prefix must start with '#': {prefix!r}")
        if comment_type is CommentType.SIDE and self.prefix_first and not self.prefix_first[0].isspace():
            raise ValueError(f"Side comment prefix must start with whitespace: {self.prefix_first!r}")
        return self


BLOCK_DEFAULT = FormatterConfiguration(prefix_first="# ", prefix_multiline="# ")
SIDE_DEFAULT = FormatterConfiguration(prefix_first=" # ", prefix_multiline="# ")
HEADER_DEFAULT = FormatterConfiguration(prefix_first="# ", prefix_multiline="# ", suffix_last="\n\n")


def _is_commented(lines: List[str]) -> bool:
    return all(not line.strip() or line.lstrip().startswith("#") for line in lines)


class CommentFormatter:
    """
    Default formatter: '# ' before every block line, ' # ' before a side
    comment, markers stripped and whitespace trimmed when parsing.
    """

    def __init__(self, block: Optional[FormatterConfiguration] = None,
                 side: Optional[FormatterConfiguration] = None):
        self.block = (block or BLOCK_DEFAULT).validate(CommentType.BLOCK)
        self.side = (side or SIDE_DEFAULT).validate(CommentType.SIDE)

    def configuration(self, comment_type: CommentType, node: Optional[Node] = None) -> FormatterConfiguration:
        return self.block if comment_type is CommentType.BLOCK else self.side

    def _strip_line(self, line: str, config: FormatterConfiguration, indent: int, comment_type: CommentType) -> str:
        if config.suffix_multiline and line.endswith(config.suffix_multiline):
            line = line[:-len(config.suffix_multiline)]
        if not config.strip_prefix:
            if comment_type is CommentType.BLOCK:
                strip = min(indent, len(line) - len(line.lstrip(" ")))
                return line[strip:]
            return line
        line = line.lstrip(" \t")
        for prefix in (config.marker.lstrip(), config.prefix_multiline.lstrip()):
            if prefix and line.startswith(prefix):
                return line[len(prefix):]
        return line[1:] if line.startswith("#") else line

    def _body(self, raw: str, config: FormatterConfiguration) -> str:
        body = raw
        if config.suffix_last and body.endswith(config.suffix_last):
            body = body[:-len(config.suffix_last)]
        elif body.endswith("\n"):
            body = body[:-1]
        if config.lead and body.startswith(config.lead):
            body = body[len(config.lead):]
        return body

    def parse(self, raw: Optional[str], comment_type: CommentType = CommentType.BLOCK,
              node: Optional[Node] = None) -> Optional[str]:
        """Raw document fragment -> human text."""
        if raw is None:
            return None
        config = self.configuration(comment_type, node)
        indent = node.indent if node is not None else 0
        lines = [self._strip_line(line, config, indent, comment_type)
                 for line in self._body(raw, config).split("\n")]
        human = "\n".join(lines)
        return human.strip() if config.trim else human

    def _prefixes(self, lines: List[str], config: FormatterConfiguration,
                  comment_type: CommentType) -> Tuple[str, str, str]:
        if not _is_commented(lines):
            return config.lead, config.marker, config.prefix_multiline
        # Already commented text is written as given
        marker = ""
        if comment_type is CommentType.SIDE and not config.lead and not lines[0][:1].isspace():
            marker = " "
        return config.lead, marker, ""

    def dump(self, human: Optional[str], comment_type: CommentType = CommentType.BLOCK,
             node: Optional[Node] = None) -> Optional[str]:
        """Human text -> raw document fragment (no trailing newline unless a suffix adds one)."""
        if human is None:
            return None
        config = self.configuration(comment_type, node)
        indentation = " " * (node.indent if node is not None else 0)
        lines = human.split("\n")
        lead, marker, multiline = self._prefixes(lines, config, comment_type)

        out: List[str] = []
        for i, line in enumerate(lines):
            prefix = marker if i == 0 else multiline
            text = prefix + line if line else prefix.rstrip(" ")
            indented = i > 0 or comment_type is CommentType.BLOCK or bool(lead)
            if indented and text:
                text = indentation + text
            out.append(text)
        return lead + (config.suffix_multiline + "\n").join(out) + config.suffix_last


class PrettyCommentFormatter(CommentFormatter):
    """Separates every top-level key after the first with a blank line."""

    def configuration(self, comment_type: CommentType, node: Optional[Node] = None) -> FormatterConfiguration:
        config = super().configuration(comment_type, node)
        if comment_type is CommentType.BLOCK and node is not None and node.is_top_level and node.position > 0:
            return replace(config, prefix_first="\n" + config.prefix_first)
        return config


class BlankLineCommentFormatter(CommentFormatter):
    """Puts a blank line before every block comment and keeps whitespace."""

    def __init__(self):
        super().__init__(
            block=replace(BLOCK_DEFAULT, prefix_first="\n# ", trim=False),
            side=replace(SIDE_DEFAULT, trim=False),
        )


class RawCommentFormatter(CommentFormatter):
    """Comments are read and written verbatim, markers included."""

    def __init__(self):
        super().__init__(
            block=replace(BLOCK_DEFAULT, strip_prefix=False, trim=False),
            side=replace(SIDE_DEFAULT, strip_prefix=False, trim=False),
        )


class HeaderFormatter(CommentFormatter):
    """
    Header of the document: a comment block at the very top closed by a
    blank line. Parsing stops at the first blank line after the block.
    """

    def __init__(self, header: Optional[FormatterConfiguration] = None):
        header = header or HEADER_DEFAULT
        super().__init__(block=header, side=SIDE_DEFAULT)

    def parse(self, raw: Optional[str], comment_type: CommentType = CommentType.BLOCK,
              node: Optional[Node] = None) -> Optional[str]:
        if raw is None:
            return None
        lines = raw.split("\n")
        seen, end = False, len(lines)
        for i, line in enumerate(lines):
            if line.strip():
                seen = True
            elif seen:
                end = i
                break
        kept = "\n".join(lines[:end])
        return super().parse(kept + self.block.suffix_last if end < len(lines) else raw, comment_type, node)


class CommentFormat(Enum):
    DEFAULT = "default"
    PRETTY = "pretty"
    BLANK_LINE = "blank_line"
    RAW = "raw"

    def formatter(self) -> CommentFormatter:
        if self is CommentFormat.PRETTY:
            return PrettyCommentFormatter()
        if self is CommentFormat.BLANK_LINE:
            return BlankLineCommentFormatter()
        if self is CommentFormat.RAW:
            return RawCommentFormatter()
        return CommentFormatter()
