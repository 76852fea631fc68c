#!/usr/bin/env python3
"""
YAMLSHADOW EXCEPTIONS
---------------------
Error types raised across the configuration layer.

Author: YamlShadow Team
Date: 2026-01-16
"""

from typing import Optional


class InvalidConfigurationError(ValueError):
    """
    Raised when a document cannot be loaded as a configuration: the YAML
    engine rejected it, or its root is not a mapping.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"L{line}:C{column}: {message}"
        super().__init__(message)


class PathNotFoundError(KeyError):
    """Raised in strict mode when a comment targets a path with no value."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(path)

    def __str__(self):
        return f"Path '{self.path}' does not exist in the configuration"
