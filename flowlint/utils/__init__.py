"""Utility helpers for flowlint."""

from .fileio import read_yaml_file
from .text import DEFAULT_TOKEN, render_template

__all__ = [
    "read_yaml_file",
    "render_template",
    "DEFAULT_TOKEN",
]
