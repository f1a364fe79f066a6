"""Core result data structures for rule evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

import structlog

from .utils.text import render_template

logger = structlog.get_logger(__name__)

UNKNOWN_TYPE = "unknown-type"
INTERNAL_ERROR_TYPE = "internal-error"


@dataclass(frozen=True)
class CodeDefinition:
    """A diagnostic template a rule may emit, keyed by ``code``."""

    code: str
    message: str = ""
    recommendation: str = ""
    type: str = ""
    description: str = ""


@dataclass(frozen=True)
class DiagnosticEntry:
    """Capture a single rendered finding."""

    code: str
    message: str
    type: str
    recommendation: str
    flow_id: Optional[str] = None
    node_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.node_id is None:
            del data["node_id"]
        return data


@dataclass
class RuleResult:
    """Findings for one rule evaluated against one flow.

    A result is created fresh for every evaluation pass and is only mutated by
    the rule that owns it. ``passed`` flips to ``False`` on the first error and
    never reverts.
    """

    rule_id: str
    rule_description: str
    passed: bool = True
    error_count: int = 0
    entries: List[DiagnosticEntry] = field(default_factory=list)
    flow_id: Optional[str] = None
    clean: bool = False
    clean_messages: List[str] = field(default_factory=list)
    excluded_codes: List[str] = field(default_factory=list)

    def set_flow_id(self, flow_id: Optional[str]) -> None:
        self.flow_id = flow_id

    def add_error(
        self,
        code: Optional[CodeDefinition],
        *,
        message_args: Sequence[Any] = (),
        recommendation_args: Sequence[Any] = (),
        node_id: Optional[str] = None,
        flow_id: Optional[str] = None,
    ) -> DiagnosticEntry:
        """Render ``code`` and append it, or record an internal error when ``code`` is ``None``."""

        if code is None:
            code = CodeDefinition(
                code=f"ruleId-{self.rule_id}",
                message=f"Unknown Error [ruleId:{self.rule_id}]: %",
                type=INTERNAL_ERROR_TYPE,
                recommendation="Resolve error, exclude or ignore this rule for the flow.",
            )
            recommendation_args = ()

        entry = DiagnosticEntry(
            code=code.code,
            message=render_template(code.message, message_args),
            type=code.type or UNKNOWN_TYPE,
            recommendation=render_template(code.recommendation, recommendation_args),
            flow_id=flow_id or self.flow_id,
            node_id=node_id or None,
        )
        self._append(entry)
        return entry

    def add_unknown_code_error(self, code_id: str) -> DiagnosticEntry:
        """Record that the rule referenced a code missing from its registry."""

        entry = DiagnosticEntry(
            code=f"ruleId-{self.rule_id}-unknown-code",
            message=f"Unknown Error Code [ruleId:{self.rule_id}]: {code_id}",
            type=INTERNAL_ERROR_TYPE,
            recommendation="Correct rule to include valid code.",
            flow_id=self.flow_id,
        )
        self._append(entry)
        return entry

    def add_excluded_code(self, code_id: str) -> None:
        self.excluded_codes.append(code_id)
        logger.debug("code_excluded", rule_id=self.rule_id, code=code_id, flow_id=self.flow_id)

    def add_clean(self, message: str) -> None:
        self.clean = True
        self.clean_messages.append(message)

    def set_clean(self, clean: bool) -> None:
        self.clean = bool(clean)

    def _append(self, entry: DiagnosticEntry) -> None:
        self.entries.append(entry)
        self.error_count += 1
        self.passed = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "rule_description": self.rule_description,
            "flow_id": self.flow_id,
            "passed": self.passed,
            "error_count": self.error_count,
            "entries": [entry.to_dict() for entry in self.entries],
            "clean": self.clean,
            "clean_messages": list(self.clean_messages),
            "excluded_codes": list(self.excluded_codes),
        }
