"""Base class for lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

import structlog

from flowlint.config import parse_exclude_spec
from flowlint.errors import ConstructionError
from flowlint.result import CodeDefinition, DiagnosticEntry, RuleResult

logger = structlog.get_logger(__name__)

REQUIRED_PROPS = ("id", "description", "reference", "cleans")


@dataclass(frozen=True)
class RuleProps:
    """Construction metadata every rule must declare."""

    id: str
    description: str
    reference: str
    cleans: bool
    clean_flow: Optional[bool] = None

    @classmethod
    def from_props(cls, rule_class: str, props: Mapping[str, Any]) -> "RuleProps":
        for prop in REQUIRED_PROPS:
            if props.get(prop) is None:
                raise ConstructionError(
                    f"LintRule: Property '{prop}' is required in class {rule_class}",
                    prop=prop,
                    rule_class=rule_class,
                )
        known = {item.name for item in fields(cls)}
        unexpected = sorted(set(props) - known)
        if unexpected:
            raise ConstructionError(
                f"LintRule: Unexpected properties {', '.join(unexpected)} in class {rule_class}",
                rule_class=rule_class,
            )
        return cls(**props)


def flow_id_of(flow: Any) -> Optional[str]:
    """Return the identifier of an opaque flow, or ``None`` when it has none."""

    if flow is None:
        return None
    if isinstance(flow, Mapping):
        return flow.get("flowId", flow.get("flow_id"))
    flow_id = getattr(flow, "flow_id", None)
    if flow_id is None:
        flow_id = getattr(flow, "flowId", None)
    return flow_id


class LintRule(ABC):
    """Abstract base for checks evaluated against flows.

    Subclasses pass their metadata to ``__init__``, register codes with
    ``add_code`` and implement ``run_rule``::

        class ExampleRule(LintRule):
            def __init__(self):
                super().__init__(
                    id="example-rule",
                    description="Example Rule",
                    reference="https://example-reference-rule/doc",
                    cleans=False,
                )
                self.add_code("example-error", message="Example Rule of flow '%'")

    A driver then calls ``set_flows``, optionally ``set_exclude_codes``, then
    ``run_rule`` and reads ``get_results``. ``run_rule`` is expected to catch
    its own failures and report them via ``add_error(None, message_args=[...])``
    so one broken rule cannot abort a whole lint run. A rule instance runs one
    evaluation at a time; use separate instances for parallel evaluation.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> "LintRule":
        if cls is LintRule:
            raise ConstructionError("Cannot instantiate abstract class: LintRule", rule_class="LintRule")
        return super().__new__(cls)

    def __init__(self, **props: Any) -> None:
        self.props = RuleProps.from_props(type(self).__name__, props)
        self.id = self.props.id
        self.description = self.props.description
        self.reference = self.props.reference
        self.cleans = self.props.cleans
        self.clean_flow = self.props.clean_flow

        self._codes: Dict[str, CodeDefinition] = {}
        self._sealed = False
        self.result = RuleResult(self.id, self.description)
        self.main_flow: Any = None
        self.all_flows: List[Any] = []
        self.exclude_codes: Set[str] = set()

    @property
    def codes(self) -> Mapping[str, CodeDefinition]:
        return MappingProxyType(self._codes)

    @abstractmethod
    def run_rule(self) -> None:
        """Evaluate ``main_flow``/``all_flows`` and report through ``add_error``."""

    def clear(self) -> None:
        self.result = RuleResult(self.id, self.description)

    def add_code(self, code_id: str, **code_props: Any) -> CodeDefinition:
        """Register a code; a repeated ``code_id`` replaces the earlier definition."""

        if self._sealed:
            raise ConstructionError(
                f"LintRule: Code '{code_id}' registered after {type(self).__name__} was bound to flows",
                rule_class=type(self).__name__,
            )
        code_props.pop("code", None)
        definition = CodeDefinition(code=code_id, **code_props)
        self._codes[code_id] = definition
        return definition

    def set_flows(self, main_flow: Any, all_flows: Optional[Sequence[Any]] = None) -> None:
        if not self._sealed:
            self._sealed = True
            logger.debug("rule_codes_sealed", rule_id=self.id, codes=sorted(self._codes))
        self.main_flow = main_flow
        self.all_flows = list(all_flows) if all_flows is not None else [main_flow]
        self.result.set_flow_id(flow_id_of(main_flow))

    def set_exclude_codes(self, exclude_spec: Optional[str]) -> None:
        self.exclude_codes = {
            code_id
            for rule_id, code_id in parse_exclude_spec(exclude_spec)
            if rule_id == self.id and code_id in self._codes
        }

    def add_error(
        self,
        code_id: Optional[str] = None,
        *,
        message_args: Sequence[Any] = (),
        recommendation_args: Sequence[Any] = (),
        node_id: Optional[str] = None,
        flow_id: Optional[str] = None,
    ) -> Optional[DiagnosticEntry]:
        """Report a finding for ``code_id``.

        Excluded codes are recorded on the result and produce no entry. An
        unregistered code yields an unknown-code internal error, and a missing
        ``code_id`` yields the generic internal error for this rule.
        """

        if code_id in self.exclude_codes:
            self.result.add_excluded_code(code_id)
            return None

        if code_id:
            code = self._codes.get(code_id)
            if code is None:
                return self.result.add_unknown_code_error(code_id)
        else:
            code = None

        return self.result.add_error(
            code,
            message_args=message_args,
            recommendation_args=recommendation_args,
            node_id=node_id,
            flow_id=flow_id,
        )

    def get_results(self) -> RuleResult:
        return self.result

    def set_clean(self, clean: bool) -> None:
        self.clean_flow = clean
        self.result.set_clean(clean)

    def add_clean_result(self, message: str) -> None:
        self.result.add_clean(message)

    def describe(self) -> Dict[str, Any]:
        """Return rule metadata for drivers that list available rules."""

        return {
            "id": self.id,
            "description": self.description,
            "reference": self.reference,
            "cleans": self.cleans,
            "codes": {
                code_id: {
                    "description": code.description,
                    "type": code.type,
                    "message": code.message,
                    "recommendation": code.recommendation,
                }
                for code_id, code in self._codes.items()
            },
        }
