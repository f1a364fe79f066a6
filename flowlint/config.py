"""Exclusion configuration for rule codes.

Exclusions are expressed as ``ruleId.codeId`` pairs joined by commas, e.g.
``"example-rule.example-error,other-rule.other-code"``. The same list is
shared by every rule; each rule keeps only the pairs aimed at itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

import structlog

from .utils import read_yaml_file

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILENAME = ".flowlint.yaml"
EXCLUDE_ENV_VAR = "FLOWLINT_EXCLUDE_CODES"


def parse_exclude_spec(spec: Optional[str]) -> List[Tuple[str, str]]:
    """Split an exclusion spec into ``(rule_id, code_id)`` pairs.

    Tokens without a rule id or code id are skipped with a warning. Segments
    after the code id are ignored, also with a warning.
    """

    pairs: List[Tuple[str, str]] = []
    if not spec:
        return pairs
    for raw_token in spec.split(","):
        segments = [segment.strip() for segment in raw_token.strip().split(".")]
        rule_id = segments[0]
        code_id = segments[1] if len(segments) > 1 else ""
        if not rule_id or not code_id:
            logger.warning("exclude_token_malformed", token=raw_token, spec=spec)
            continue
        if len(segments) > 2:
            logger.warning("exclude_token_extra_segments", token=raw_token, rule_id=rule_id, code_id=code_id)
        pairs.append((rule_id, code_id))
    return pairs


@dataclass(frozen=True)
class ExcludeConfig:
    """Rule/code pairs to suppress across a lint run."""

    rule_codes: Tuple[str, ...] = ()

    def to_spec(self) -> str:
        return ",".join(self.rule_codes)

    def merged(self, other: "ExcludeConfig") -> "ExcludeConfig":
        combined = list(self.rule_codes)
        combined.extend(code for code in other.rule_codes if code not in combined)
        return ExcludeConfig(rule_codes=tuple(combined))


def load_exclude_config(path: Path = Path(DEFAULT_CONFIG_FILENAME)) -> ExcludeConfig:
    """Load exclusions from a YAML document.

    The ``exclude`` key holds either a list of ``rule.code`` strings or a
    mapping of rule id to a list of code ids::

        exclude:
          example-rule:
            - example-error

    A missing file yields an empty configuration. Rules never read files
    themselves; a driver loads the config and hands ``to_spec()`` to
    ``LintRule.set_exclude_codes``.
    """

    data = read_yaml_file(Path(path))
    if data is None:
        return ExcludeConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config at {path} is not a mapping")
    return ExcludeConfig(rule_codes=tuple(_collect_rule_codes(data.get("exclude"), path)))


def exclude_config_from_env(environ: Optional[Mapping[str, str]] = None) -> ExcludeConfig:
    """Read exclusions from ``FLOWLINT_EXCLUDE_CODES``."""

    env = os.environ if environ is None else environ
    spec = env.get(EXCLUDE_ENV_VAR, "")
    return ExcludeConfig(rule_codes=tuple(f"{rule_id}.{code_id}" for rule_id, code_id in parse_exclude_spec(spec)))


def _collect_rule_codes(raw: Any, path: Path) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        tokens = [raw]
    elif isinstance(raw, (list, tuple)):
        tokens = [_scalar_text(item) for item in raw]
    elif isinstance(raw, dict):
        tokens = []
        for rule_id, code_ids in raw.items():
            if code_ids is None or isinstance(code_ids, str):
                code_ids = [code_ids]
            elif not isinstance(code_ids, (list, tuple)):
                raise ValueError(
                    f"Config at {path} has an unsupported code list for rule '{rule_id}': {type(code_ids).__name__}"
                )
            tokens.extend(f"{_scalar_text(rule_id)}.{_scalar_text(code_id)}" for code_id in code_ids)
    else:
        raise ValueError(f"Config at {path} has an unsupported 'exclude' value: {type(raw).__name__}")
    return [f"{rule_id}.{code_id}" for rule_id, code_id in parse_exclude_spec(",".join(tokens))]


def _scalar_text(value: Any) -> str:
    return "" if value is None else str(value)
