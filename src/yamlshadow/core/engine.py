#!/usr/bin/env python3
"""
YAMLSHADOW ENGINE - The YAML Backend
------------------------------------
Thin wrapper around ruamel.yaml in safe mode. The engine reads and writes
plain values only; comments never reach it. Output keeps insertion order
and block style so the comment merge-back can walk it line by line.

Author: YamlShadow Team
Date: 2026-01-16
"""

import io
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML, YAMLError

from yamlshadow.core.exceptions import InvalidConfigurationError
from yamlshadow.core.options import YamlOptions

logger = logging.getLogger("yamlshadow.engine")


class YamlEngine:
    """
    Loads and dumps plain Python values (dict, list, scalars).
    """

    def __init__(self, options: Optional[YamlOptions] = None):
        self.options = options or YamlOptions()
        self.yaml = YAML(typ="safe", pure=True)
        self.yaml.sort_base_mapping_type_on_output = False
        self.yaml.default_flow_style = False
        self.yaml.allow_unicode = True
        self.yaml.width = self.options.width
        self.yaml.indent(
            mapping=self.options.indent,
            sequence=self.options.indent_list + 2,
            offset=self.options.indent_list,
        )

    def load(self, text: str) -> Any:
        try:
            return self.yaml.load(text)
        except YAMLError as e:
            mark = getattr(e, "problem_mark", None) or getattr(e, "context_mark", None)
            problem = getattr(e, "problem", None) or str(e)
            if mark:
                raise InvalidConfigurationError(problem, mark.line + 1, mark.column + 1) from e
            raise InvalidConfigurationError(problem) from e

    def dump(self, values: Any) -> str:
        if values is None or values == {}:
            return ""
        stream = io.StringIO()
        self.yaml.dump(values, stream)
        return stream.getvalue()

    def read(self, path: Path) -> str:
        return Path(path).read_text(encoding=self.options.encoding)

    def atomic_write(self, target_path: Path, content: str):
        """Writes through a temporary sibling file and os.replace."""
        target_path = Path(target_path)
        temp_file = target_path.with_name(target_path.name + ".yamlshadow.tmp")
        try:
            temp_file.write_text(content, encoding=self.options.encoding)
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            logger.error("Atomic write to %s failed: %s", target_path, e)
            raise
