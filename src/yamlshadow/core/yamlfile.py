#!/usr/bin/env python3
"""
YAMLSHADOW YAMLFILE - The Configuration Layer
---------------------------------------------
A YAML configuration file addressed by dotted paths, whose comments
survive load -> modify -> save cycles. Values go through the YAML engine;
comments go through the ConfigCommentMapper and are merged back into the
engine's output on save.

Author: YamlShadow Team
Date: 2026-01-16
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from yamlshadow.core.engine import YamlEngine
from yamlshadow.core.exceptions import InvalidConfigurationError
from yamlshadow.core.models import CommentType, Path as KeyPath
from yamlshadow.core.options import YamlOptions
from yamlshadow.comments.keytree import format_path
from yamlshadow.comments.mapper import ConfigCommentMapper, PathLike
from yamlshadow.validator.validator import MISSING, PathValidator, match_key

logger = logging.getLogger("yamlshadow.yamlfile")


class YamlFile:
    """
    Configuration backed by a YAML document with comment preservation.

    Example:
        config = YamlFile("app.yml")
        config.load_with_comments()
        config.set("server.port", 8080)
        config.set_comment("server.port", "Public port")
        config.save()
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, options: Optional[YamlOptions] = None):
        self.path = Path(path) if path is not None else None
        self.options = options or YamlOptions()
        self.engine = YamlEngine(self.options)
        self.validator = PathValidator(self.options.path_separator)
        self.values: dict = {}
        self.comment_mapper = ConfigCommentMapper(self)

    # --- Loading & Saving ---

    def _target(self, path: Optional[Union[str, Path]]) -> Path:
        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise ValueError("No file path given for this configuration")
        return self.path

    def load_from_string(self, text: str, with_comments: Optional[bool] = None):
        values = self.engine.load(text)
        ok, msg = self.validator.validate_document(values)
        if not ok:
            raise InvalidConfigurationError(msg)
        self.values = values if values is not None else {}
        if with_comments is None:
            with_comments = self.options.use_comments
        if with_comments:
            self.comment_mapper.parse_text(text)
        logger.debug("Loaded %d top-level key(s), %d comment anchor(s)",
                     len(self.values), len(self.comment_mapper.tree))

    def load(self, path: Optional[Union[str, Path]] = None):
        """Loads values only; comments already set through the API are kept."""
        self.load_from_string(self.engine.read(self._target(path)), with_comments=False)

    def load_with_comments(self, path: Optional[Union[str, Path]] = None):
        self.load_from_string(self.engine.read(self._target(path)), with_comments=True)

    def save_to_string(self) -> str:
        return self.comment_mapper.merge(self.engine.dump(self.values))

    def save(self, path: Optional[Union[str, Path]] = None):
        target = self._target(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self.engine.atomic_write(target, self.save_to_string())

    def exists(self) -> bool:
        return self.path is not None and self.path.exists()

    # --- Values ---

    def _key(self, path: PathLike) -> KeyPath:
        key = self.comment_mapper.path(path)
        if not key:
            raise KeyError("Empty path")
        return key

    def get(self, path: PathLike, default: Any = None) -> Any:
        value = self.validator.resolve(self.values, self._key(path))
        return default if value is MISSING else value

    def contains(self, path: PathLike) -> bool:
        return self.validator.resolve(self.values, self._key(path)) is not MISSING

    def is_section(self, path: PathLike) -> bool:
        return isinstance(self.get(path), dict)

    def set(self, path: PathLike, value: Any):
        """
        Sets a value, creating intermediate sections. Setting None removes
        the path.
        """
        key = self._key(path)
        if value is None:
            self.remove(key)
            return
        current: Any = self.values
        for i, segment in enumerate(key[:-1]):
            following = key[i + 1]
            if isinstance(segment, int):
                if not isinstance(current, list) or not 0 <= segment < len(current):
                    raise KeyError(format_path(key[:i + 1], self.options.path_separator))
                if not isinstance(current[segment], (dict, list)):
                    current[segment] = [] if isinstance(following, int) else {}
                current = current[segment]
                continue
            if not isinstance(current, dict):
                raise KeyError(format_path(key[:i + 1], self.options.path_separator))
            existing = match_key(current, segment)
            if existing is MISSING or not isinstance(current[existing], (dict, list)):
                existing = segment if existing is MISSING else existing
                current[existing] = [] if isinstance(following, int) else {}
            current = current[existing]
        self._assign(current, key, value)

    def _assign(self, container: Any, key: KeyPath, value: Any):
        last = key[-1]
        if isinstance(last, int):
            if not isinstance(container, list) or not 0 <= last <= len(container):
                raise KeyError(format_path(key, self.options.path_separator))
            if last == len(container):
                container.append(value)
            else:
                container[last] = value
            return
        if not isinstance(container, dict):
            raise KeyError(format_path(key, self.options.path_separator))
        existing = match_key(container, last)
        container[last if existing is MISSING else existing] = value

    def remove(self, path: PathLike) -> bool:
        """
        Removes a value. Removing a list element moves the comments of the
        elements after it along with their values.
        """
        key = self._key(path)
        parent = self.validator.resolve(self.values, key[:-1]) if len(key) > 1 else self.values
        last = key[-1]
        if isinstance(last, int):
            if not isinstance(parent, list) or not 0 <= last < len(parent):
                return False
            del parent[last]
            self.comment_mapper.tree.shift_elements(key[:-1], last)
            return True
        if not isinstance(parent, dict):
            return False
        existing = match_key(parent, last)
        if existing is MISSING:
            return False
        del parent[existing]
        return True

    def keys(self, deep: bool = False) -> List[str]:
        out: List[str] = []

        def walk(mapping: dict, prefix: KeyPath):
            for k, v in mapping.items():
                path = prefix + (str(k),)
                out.append(format_path(path, self.options.path_separator))
                if deep and isinstance(v, dict):
                    walk(v, path)

        walk(self.values, ())
        return out

    # --- Comments (Commentable) ---

    def set_comment(self, path: PathLike, comment: Optional[str],
                    comment_type: CommentType = CommentType.BLOCK):
        self.comment_mapper.set_comment(path, comment, comment_type)

    def get_comment(self, path: PathLike, comment_type: CommentType = CommentType.BLOCK) -> Optional[str]:
        return self.comment_mapper.get_comment(path, comment_type)

    def remove_comment(self, path: PathLike, comment_type: CommentType = CommentType.BLOCK):
        self.comment_mapper.remove_comment(path, comment_type)

    def set_header(self, header: Optional[str]):
        self.comment_mapper.set_header(header)

    def get_header(self) -> Optional[str]:
        return self.comment_mapper.get_header()

    def set_footer(self, footer: Optional[str]):
        self.comment_mapper.set_footer(footer)

    def get_footer(self) -> Optional[str]:
        return self.comment_mapper.get_footer()

    def __repr__(self):
        return f"YamlFile({str(self.path)!r}, keys={len(self.values)})"
