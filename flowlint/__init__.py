"""Rule contract and diagnostic results for linting flow definitions."""

from importlib.metadata import version, PackageNotFoundError

from .errors import ConstructionError
from .result import CodeDefinition, DiagnosticEntry, RuleResult
from .rules import LintRule, RuleProps

try:
    __version__ = version("flowlint")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    "CodeDefinition",
    "ConstructionError",
    "DiagnosticEntry",
    "LintRule",
    "RuleProps",
    "RuleResult",
]
