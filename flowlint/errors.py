"""Exceptions raised by the flowlint core."""

from __future__ import annotations

from typing import Optional


class ConstructionError(TypeError):
    """A rule class is malformed and must not be evaluated.

    Raised when the abstract base is instantiated directly, when a concrete
    rule omits required metadata, or when codes are registered after the
    rule has been bound to flows.
    """

    def __init__(self, message: str, prop: Optional[str] = None, rule_class: Optional[str] = None) -> None:
        super().__init__(message)
        self.prop = prop
        self.rule_class = rule_class
