#!/usr/bin/env python3
"""
YAMLSHADOW MAPPER - Public Comment Facade
-----------------------------------------
The Commentable capability and the mappers implementing it. Callers
address comments by path ('servers[2].host') and read or write human
text; the mapper owns the KeyTree and the formatter turning that text
into raw document fragments.

Author: YamlShadow Team
Date: 2026-01-16
"""

import logging
from typing import Any, Iterator, Optional, Protocol, Tuple, Union, runtime_checkable

from yamlshadow.core.exceptions import PathNotFoundError
from yamlshadow.core.models import CommentType, Path
from yamlshadow.comments.exporter import CommentExporter
from yamlshadow.comments.formatter import CommentFormatter, HeaderFormatter
from yamlshadow.comments.keytree import KeyTree, format_path, parse_path
from yamlshadow.comments.shadow import CommentShadow
from yamlshadow.validator.validator import PathValidator

logger = logging.getLogger("yamlshadow.mapper")

PathLike = Union[str, Path]


@runtime_checkable
class Commentable(Protocol):
    """Anything comments can be attached to by path."""

    def set_comment(self, path: PathLike, comment: Optional[str],
                    comment_type: CommentType = CommentType.BLOCK) -> None: ...

    def get_comment(self, path: PathLike,
                    comment_type: CommentType = CommentType.BLOCK) -> Optional[str]: ...


class CommentMapper:
    """
    In-memory comment store: a KeyTree plus the formatters for body,
    header and footer comments.
    """

    def __init__(self, formatter: Optional[CommentFormatter] = None,
                 header_formatter: Optional[HeaderFormatter] = None,
                 separator: str = ".", indent: int = 2):
        self.formatter = formatter or CommentFormatter()
        self.header_formatter = header_formatter or HeaderFormatter()
        self.separator = separator
        self.indent = indent
        self.tree = KeyTree(indent)

    def path(self, path: PathLike) -> Path:
        if isinstance(path, tuple):
            return path
        return parse_path(path, self.separator)

    def set_comment(self, path: PathLike, comment: Optional[str],
                    comment_type: CommentType = CommentType.BLOCK,
                    formatter: Optional[CommentFormatter] = None):
        """Stores `comment` at `path`; None removes it."""
        key = self.path(path)
        if comment is None:
            self.tree.set_comment(key, None, comment_type)
            return
        node = self.tree.get_or_create(key)
        node.put((formatter or self.formatter).dump(comment, comment_type, node), comment_type)

    def get_comment(self, path: PathLike, comment_type: CommentType = CommentType.BLOCK,
                    formatter: Optional[CommentFormatter] = None) -> Optional[str]:
        try:
            key = self.path(path)
        except ValueError:
            return None
        node = self.tree.get(key)
        if node is None:
            return None
        return (formatter or self.formatter).parse(node.get(comment_type), comment_type, node)

    def remove_comment(self, path: PathLike, comment_type: CommentType = CommentType.BLOCK):
        self.set_comment(path, None, comment_type)

    def get_header(self) -> Optional[str]:
        return self.header_formatter.parse(self.tree.root.comment, CommentType.BLOCK, self.tree.root)

    def set_header(self, header: Optional[str]):
        self.tree.root.comment = self.header_formatter.dump(header, CommentType.BLOCK, self.tree.root)

    def get_footer(self) -> Optional[str]:
        return self.formatter.parse(self.tree.footer.comment, CommentType.BLOCK, self.tree.footer)

    def set_footer(self, footer: Optional[str]):
        self.tree.footer.comment = self.formatter.dump(footer, CommentType.BLOCK, self.tree.footer)

    def comments(self) -> Iterator[Tuple[str, CommentType, str]]:
        """Yields (path, type, human text) for every stored comment, document order."""
        for node in self.tree.walk():
            for comment_type in CommentType:
                text = self.formatter.parse(node.get(comment_type), comment_type, node)
                if text is not None:
                    yield format_path(node.path, self.separator), comment_type, text

    def parse_text(self, text: str) -> KeyTree:
        """Replaces the tree with the comments read from a raw document."""
        self.tree = CommentShadow(indent=self.indent).capture(text)
        return self.tree

    def merge(self, plain_text: str) -> str:
        """Splices the stored comments into comment-free YAML."""
        return CommentExporter(self.tree).export(plain_text)


class ConfigCommentMapper(CommentMapper):
    """
    Comment mapper bound to a configuration. In strict mode a comment may
    only be placed on a path that holds a value. Side comments of paths
    written on one line (a list element and its first key) are stored on
    the outermost of them.
    """

    def __init__(self, configuration: Any):
        options = configuration.options
        super().__init__(
            formatter=options.formatter(),
            header_formatter=options.header_formatter,
            separator=options.path_separator,
            indent=options.indent,
        )
        self.configuration = configuration
        self.validator = PathValidator(options.path_separator)

    @property
    def strict(self) -> bool:
        return self.configuration.options.strict

    def _slot(self, key: Path, comment_type: CommentType) -> Path:
        # Paths sharing a line share its one side comment
        if comment_type is CommentType.SIDE:
            return self.validator.line_anchor(self.configuration.values, key)
        return key

    def set_comment(self, path: PathLike, comment: Optional[str],
                    comment_type: CommentType = CommentType.BLOCK,
                    formatter: Optional[CommentFormatter] = None):
        key = self.path(path)
        if self.strict and comment is not None:
            ok, msg = self.validator.validate_path(self.configuration.values, key)
            if not ok:
                logger.warning(msg)
                raise PathNotFoundError(format_path(key, self.separator))
        super().set_comment(self._slot(key, comment_type), comment, comment_type, formatter)

    def get_comment(self, path: PathLike, comment_type: CommentType = CommentType.BLOCK,
                    formatter: Optional[CommentFormatter] = None) -> Optional[str]:
        try:
            key = self.path(path)
        except ValueError:
            return None
        return super().get_comment(self._slot(key, comment_type), comment_type, formatter)
