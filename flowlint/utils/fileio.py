"""Basic file IO helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml_file(path: Path) -> Any:
    """Parse a YAML config file, returning ``None`` when it is absent.

    Syntax errors surface as ``ValueError`` naming the file, matching how
    config loaders report a document of the wrong shape.
    """

    if not path.is_file():
        return None
    text = path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Config at {path} is not valid YAML: {exc}") from exc
