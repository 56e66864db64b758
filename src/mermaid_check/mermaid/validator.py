"""
Heuristic mermaid syntax validator.

Checks a single diagram without a rendering engine. The diagram type is
taken from the first line and selects one rule from a fixed table; each rule
is a pure function over the diagram's lines returning a reason string when
the diagram is rejected. The checks accept a superset of valid mermaid and
only reject a curated set of detectable malformations.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

# ============================================================
# DATA CLASSES
# ============================================================


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for one diagram. ``error`` is set iff the diagram is invalid."""

    valid: bool
    error: Optional[str] = None
    diagram_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.valid and self.error is not None:
            raise ValueError("A valid result cannot carry an error message")
        if not self.valid and not self.error:
            raise ValueError("An invalid result requires an error message")

    def to_dict(self) -> dict:
        d: dict = {"valid": self.valid, "diagram_type": self.diagram_type}
        if self.error:
            d["error"] = self.error
        return d


RuleCheck = Callable[[Sequence[str]], Optional[str]]


@dataclass(frozen=True)
class DiagramRule:
    """One diagram type: the first-line prefixes that select it and its check.

    A rule without a check marks a recognized type that is passed through.
    """

    name: str
    keywords: tuple[str, ...]
    check: Optional[RuleCheck] = None

    def matches(self, first_line: str) -> bool:
        return first_line.startswith(self.keywords)


# ============================================================
# SHARED HELPERS
# ============================================================


def _body(lines: Sequence[str]):
    """Yield trimmed body lines (everything after the type line)."""
    for line in lines[1:]:
        yield line.strip()


def _is_comment(line: str) -> bool:
    return line.startswith("%")


def _count_unescaped(line: str, quote: str) -> int:
    count = 0
    for i, char in enumerate(line):
        if char == quote and (i == 0 or line[i - 1] != "\\"):
            count += 1
    return count


def _brace_balance(lines: Sequence[str]) -> int:
    return sum(line.count("{") - line.count("}") for line in lines)


# ============================================================
# FLOWCHART
# ============================================================

# Lines starting with these are structure, not connections
_FLOWCHART_SKIP_PREFIXES = ("%", "subgraph", "end", "classDef", "class")

_CONNECTORS = (
    "-->", "---", "-.->", "-.-", "==>", "===", "--x", "--o",
    "-->>", "--[", "<-->", "<-.->", "<==>",
)

_BARE_CONNECTORS = ("--", "==", "-.")

_CONNECTOR_SHAPES = (
    re.compile(r"--[>x\[\]|o]"),
    re.compile(r"==>"),
    re.compile(r"-\.[>-]"),
)


def _is_connection_line(line: str) -> bool:
    if any(token in line for token in _CONNECTORS):
        return True
    if not any(token in line for token in _BARE_CONNECTORS):
        # Plain node declaration
        return True
    return any(shape.search(line) for shape in _CONNECTOR_SHAPES)


def check_flowchart(lines: Sequence[str]) -> Optional[str]:
    """Quote balance over the whole diagram, then connector shapes per line."""
    if len(lines) < 2:
        return "Flowchart must have at least one node or connection"

    single_quotes = sum(_count_unescaped(line, "'") for line in lines)
    double_quotes = sum(_count_unescaped(line, '"') for line in lines)

    if single_quotes % 2 != 0:
        return "Unbalanced single quotes in flowchart"

    if double_quotes % 2 != 0:
        return "Unbalanced double quotes in flowchart"

    for line in _body(lines):
        if not line or line.startswith(_FLOWCHART_SKIP_PREFIXES):
            continue
        if not _is_connection_line(line):
            return f'Invalid connection syntax in line: "{line}"'

    return None


# ============================================================
# SEQUENCE / CLASS
# ============================================================


def check_sequence(lines: Sequence[str]) -> Optional[str]:
    if _brace_balance(lines) != 0:
        return "Unbalanced braces in sequence diagram"
    return None


def check_class(lines: Sequence[str]) -> Optional[str]:
    if _brace_balance(lines) != 0:
        return "Unbalanced braces in class diagram"
    return None


# ============================================================
# ER DIAGRAM
# ============================================================

_CARDINALITY_TOKENS = ("||", "|o", "o|", "oo")

# entityA <card><card>--<card><card> entityB [: label]
_RELATIONSHIP = re.compile(r"[A-Za-z0-9_]+\s+[|o][|o]--[|o][|o]\s+[A-Za-z0-9_]+\s*:?\s*.*$")


def check_er(lines: Sequence[str]) -> Optional[str]:
    for line in _body(lines):
        if not line or _is_comment(line):
            continue
        if any(token in line for token in _CARDINALITY_TOKENS) and not _RELATIONSHIP.search(line):
            return f'Invalid relationship syntax in line: "{line}"'
    return None


# ============================================================
# GIT GRAPH
# ============================================================

_COMMIT = re.compile(r'commit(\s+id:\s*"[^"]*")?(\s+type:\s*(NORMAL|REVERSE|HIGHLIGHT))?')


def check_gitgraph(lines: Sequence[str]) -> Optional[str]:
    for line in _body(lines):
        if line.startswith("commit") and not _COMMIT.match(line):
            return f'Invalid commit syntax in line: "{line}"'
    return None


# ============================================================
# GANTT
# ============================================================


def check_gantt(lines: Sequence[str]) -> Optional[str]:
    has_date_format = False
    has_section = False
    has_task = False

    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith("dateFormat"):
            has_date_format = True
        elif trimmed.startswith("section"):
            has_section = True
        elif ":" in trimmed:
            has_task = True

    if not has_date_format:
        return "Missing dateFormat in Gantt chart"

    if not has_task:
        return "No tasks defined in Gantt chart"

    if not has_section:
        logger.debug("Gantt chart has tasks but no section")

    return None


# ============================================================
# PIE
# ============================================================


def check_pie(lines: Sequence[str]) -> Optional[str]:
    if len(lines) < 2:
        return "Pie chart must have at least one data point"

    for line in _body(lines):
        if line and not _is_comment(line) and ":" not in line:
            return f'Invalid pie chart data in line: "{line}"'

    return None


# ============================================================
# RULE TABLE
# ============================================================

# First match wins. Checked types come before the recognized-only entries so
# that "graph TD" is checked while a bare "graph" is only recognized.
DEFAULT_RULES: tuple[DiagramRule, ...] = (
    DiagramRule("flowchart", ("graph ", "flowchart "), check_flowchart),
    DiagramRule("sequence", ("sequenceDiagram",), check_sequence),
    DiagramRule("class", ("classDiagram",), check_class),
    DiagramRule("er", ("erDiagram",), check_er),
    DiagramRule("gitgraph", ("gitGraph",), check_gitgraph),
    DiagramRule("gantt", ("gantt",), check_gantt),
    DiagramRule("pie", ("pie",), check_pie),
    DiagramRule("flowchart", ("graph", "flowchart")),
    DiagramRule("state", ("stateDiagram",)),
    DiagramRule("journey", ("journey",)),
)


# ============================================================
# VALIDATOR
# ============================================================


class MermaidValidator:
    """
    Dispatches a diagram to the rule selected by its first line.

    ::: This is-in-layer Domain-Layer.
    ::: This is a validator.
    ::: This is stateless.

    Stateless apart from the rule table, so one instance can be shared.
    """

    def __init__(self, rules: Sequence[DiagramRule] = DEFAULT_RULES):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[DiagramRule, ...]:
        return self._rules

    def detect_rule(self, first_line: str) -> Optional[DiagramRule]:
        """Return the first rule whose keywords prefix ``first_line``."""
        for rule in self._rules:
            if rule.matches(first_line):
                return rule
        return None

    def validate(self, content: str) -> ValidationResult:
        """Validate one diagram's content."""
        lines = content.split("\n")
        first_line = lines[0].strip()

        if len(lines) <= 1 and not first_line:
            return ValidationResult(valid=False, error="Empty diagram")

        rule = self.detect_rule(first_line)
        if rule is None:
            return ValidationResult(
                valid=False, error=f'Unknown diagram type: "{first_line}"'
            )

        if rule.check is None:
            logger.debug("Diagram type '%s' has no checks; passing through", rule.name)
            return ValidationResult(valid=True, diagram_type=rule.name)

        reason = rule.check(lines)
        if reason is not None:
            return ValidationResult(valid=False, error=reason, diagram_type=rule.name)
        return ValidationResult(valid=True, diagram_type=rule.name)


# ============================================================
# MODULE-LEVEL CONVENIENCE
# ============================================================

_default_validator = MermaidValidator()


def validate_mermaid(content: str) -> ValidationResult:
    """Validate mermaid diagram syntax. Module-level convenience function."""
    return _default_validator.validate(content)
