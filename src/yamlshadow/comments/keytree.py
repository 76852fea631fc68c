#!/usr/bin/env python3
"""
YAMLSHADOW KEY TREE - The Anchor Map
------------------------------------
An ordered, path-addressable tree recording which raw comment text is
anchored to which structural position of a document.

Nodes live in a flat arena keyed by path tuples. The parent of a node is
`path[:-1]`; children are kept as ordered segment lists so iteration
follows the order in which positions were first seen.

Author: YamlShadow Team
Date: 2026-01-16
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from yamlshadow.core.models import CommentType, Path, Segment

ROOT: Path = ()


@dataclass
class Node:
    path: Path
    indent: int = 0
    comment: Optional[str] = None        # raw block comment
    side_comment: Optional[str] = None   # raw side comment
    children: List[Segment] = field(default_factory=list)
    position: int = 0                    # index among its siblings

    @property
    def is_root(self) -> bool:
        return self.path == ROOT

    @property
    def is_element(self) -> bool:
        return bool(self.path) and isinstance(self.path[-1], int)

    @property
    def is_top_level(self) -> bool:
        return len(self.path) == 1

    def get(self, comment_type: CommentType) -> Optional[str]:
        return self.comment if comment_type is CommentType.BLOCK else self.side_comment

    def put(self, raw: Optional[str], comment_type: CommentType):
        if comment_type is CommentType.BLOCK:
            self.comment = raw
        else:
            self.side_comment = raw


def parse_path(text: str, separator: str = ".") -> Path:
    """
    Converts a string path into a tuple of segments.

    'servers[2].host' -> ('servers', 2, 'host'). A backslash escapes the
    separator or '[' inside a key. Raises ValueError on malformed input.
    """
    if text is None or text == "":
        return ROOT
    segments: List[Segment] = []
    buf: List[str] = []
    pending_key = False   # a key segment is open (possibly empty)
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            buf.append(text[i + 1])
            pending_key = True
            i += 2
            continue
        if text.startswith(separator, i):
            if buf or pending_key:
                segments.append("".join(buf))
            elif not segments or not isinstance(segments[-1], int):
                raise ValueError(f"Empty key in path '{text}'")
            buf, pending_key = [], False
            i += len(separator)
            continue
        if char == "[":
            close = text.find("]", i)
            digits = text[i + 1:close] if close != -1 else ""
            if not digits.isdigit():
                raise ValueError(f"Malformed list index in path '{text}'")
            if buf or pending_key:
                segments.append("".join(buf))
                buf, pending_key = [], False
            segments.append(int(digits))
            i = close + 1
            continue
        buf.append(char)
        pending_key = True
        i += 1
    if buf or pending_key:
        segments.append("".join(buf))
    elif text.endswith(separator) and not text.endswith("\\" + separator):
        raise ValueError(f"Empty key in path '{text}'")
    return tuple(segments)


def format_path(path: Path, separator: str = ".") -> str:
    """Inverse of parse_path."""
    out: List[str] = []
    for segment in path:
        if isinstance(segment, int):
            out.append(f"[{segment}]")
            continue
        key = str(segment).replace("\\", "\\\\").replace(separator, "\\" + separator).replace("[", "\\[")
        if out:
            out.append(separator)
        out.append(key)
    return "".join(out)


class KeyTree:
    """
    Arena of comment anchors.

    Exactly one node exists per path. Nodes are created lazily, either by
    the parser while reading a document or by API calls, and are only
    dropped as a whole subtree when a list element is removed.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.nodes: Dict[Path, Node] = {ROOT: Node(ROOT, indent=0)}
        # Comments found after the last content line
        self.footer = Node(ROOT, indent=0)

    @property
    def root(self) -> Node:
        return self.nodes[ROOT]

    def __len__(self):
        return len(self.nodes) - 1

    def __contains__(self, path: Path) -> bool:
        return tuple(path) in self.nodes

    def get(self, path: Path) -> Optional[Node]:
        return self.nodes.get(tuple(path))

    def get_or_create(self, path: Path, indent: Optional[int] = None) -> Node:
        path = tuple(path)
        node = self.nodes.get(path)
        if node is not None:
            if indent is not None:
                node.indent = indent
            return node
        parent = self.get_or_create(path[:-1])
        if indent is None:
            indent = 0 if parent.is_root else parent.indent + self.indent
        node = Node(path, indent=indent, position=len(parent.children))
        self.nodes[path] = node
        parent.children.append(path[-1])
        return node

    def set_comment(self, path: Path, raw: Optional[str], comment_type: CommentType = CommentType.BLOCK) -> Optional[Node]:
        if raw is None:
            node = self.get(path)
            if node is not None:
                node.put(None, comment_type)
            return node
        node = self.get_or_create(path)
        node.put(raw, comment_type)
        return node

    def get_comment(self, path: Path, comment_type: CommentType = CommentType.BLOCK) -> Optional[str]:
        node = self.get(path)
        return node.get(comment_type) if node is not None else None

    def walk(self, path: Path = ROOT) -> Iterator[Node]:
        """Depth-first, first-seen order, starting below `path`."""
        node = self.nodes.get(tuple(path))
        if node is None:
            return
        for segment in node.children:
            child = self.nodes[node.path + (segment,)]
            yield child
            yield from self.walk(child.path)

    def paths(self) -> List[Path]:
        return [node.path for node in self.walk()]

    def clear(self):
        self.nodes = {ROOT: Node(ROOT, indent=0)}
        self.footer = Node(ROOT, indent=0)

    def _drop(self, path: Path):
        node = self.nodes.pop(path, None)
        if node is None:
            return
        for segment in node.children:
            self._drop(path + (segment,))

    def shift_elements(self, list_path: Path, removed_index: int):
        """
        Re-keys element subtrees after a list element is removed.

        The subtree at `list_path[removed_index]` is dropped, and every
        element after it moves one index down, carrying its comments.
        """
        list_path = tuple(list_path)
        parent = self.get(list_path)
        if parent is None:
            return
        self._drop(list_path + (removed_index,))
        moved: Dict[Path, Node] = {}
        prefix_len = len(list_path)
        for path in list(self.nodes):
            if len(path) <= prefix_len or path[:prefix_len] != list_path:
                continue
            index = path[prefix_len]
            if isinstance(index, int) and index > removed_index:
                node = self.nodes.pop(path)
                node.path = list_path + (index - 1,) + path[prefix_len + 1:]
                if len(path) == prefix_len + 1:
                    node.position -= 1
                moved[node.path] = node
        self.nodes.update(moved)
        children: List[Segment] = []
        for segment in parent.children:
            if isinstance(segment, int):
                if segment == removed_index:
                    continue
                if segment > removed_index:
                    segment -= 1
            children.append(segment)
        parent.children = children
