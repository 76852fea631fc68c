#!/usr/bin/env python3
"""
YAMLSHADOW VALIDATOR - The Judge
--------------------------------
Checks paths and documents against the plain values loaded by the YAML
engine. Used as the gate for strict comment placement and for loading
configurations whose root must be a mapping.

Author: YamlShadow Team
Date: 2026-01-16
"""

import logging
from typing import Any, Tuple

from yamlshadow.core.models import Path
from yamlshadow.comments.keytree import format_path

logger = logging.getLogger("yamlshadow.validator")

MISSING = object()


def match_key(mapping: dict, segment: str) -> Any:
    if segment in mapping:
        return segment
    # Keys the engine typed (ints, bools, dates) are addressed by their text
    for key in mapping:
        if str(key) == segment or (isinstance(key, bool) and str(key).lower() == segment):
            return key
    return MISSING


class PathValidator:
    """
    Resolves structural paths inside loaded values.
    """

    def __init__(self, separator: str = "."):
        self.separator = separator

    def resolve(self, values: Any, path: Path) -> Any:
        """Returns the value at `path`, or MISSING."""
        current = values
        for segment in path:
            if isinstance(segment, int):
                if not isinstance(current, list) or not 0 <= segment < len(current):
                    return MISSING
                current = current[segment]
                continue
            if not isinstance(current, dict):
                return MISSING
            key = match_key(current, segment)
            if key is MISSING:
                return MISSING
            current = current[key]
        return current

    def validate_path(self, values: Any, path: Path) -> Tuple[bool, str]:
        """
        The primary strictness check: does the configuration hold a value
        (possibly None) at this path?
        """
        if not path:
            return True, "Root always exists."
        if self.resolve(values, path) is MISSING:
            text = format_path(path, self.separator)
            logger.debug("Strict check failed for '%s'", text)
            return False, f"Path '{text}' does not exist in the configuration."
        return True, "OK"

    def line_anchor(self, values: Any, path: Path) -> Path:
        """
        Returns the outermost path written on the same line as `path`.

        The engine puts the first entry of a list element on the dash
        line, so 'items[0].name' shares its line (and its single side
        comment slot) with 'items[0]'.
        """
        while len(path) >= 2 and isinstance(path[-2], int):
            parent = self.resolve(values, path[:-1])
            segment = path[-1]
            if isinstance(parent, dict) and parent:
                on_dash_line = isinstance(segment, str) and match_key(parent, segment) == next(iter(parent))
            elif isinstance(parent, list) and parent:
                on_dash_line = segment == 0 and isinstance(segment, int)
            else:
                on_dash_line = False
            if not on_dash_line:
                break
            path = path[:-1]
        return path

    def validate_document(self, values: Any) -> Tuple[bool, str]:
        """A configuration document must be a mapping (or empty)."""
        if values is None or isinstance(values, dict):
            return True, "OK"
        return False, f"Top-level node must be a mapping, got {type(values).__name__}."
