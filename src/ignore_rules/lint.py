"""
Lint checks for compiled rules

Compilation never rejects a pattern. These checks report patterns that
were degraded or that probably do not do what their author meant.
"""

from dataclasses import dataclass
from typing import List

from .constants import ESCAPE_CHAR, OVERLY_BROAD_PATTERNS, PATH_SEPARATOR
from .normalizer import normalize_line
from .rule_engine import Rule, RuleSet, evaluate
from .translator import SegmentGlob
from .utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuleWarning:
    """Represents a lint warning for one rule"""
    line_number: int
    source_text: str
    message: str


def _literal_prefixes(rule: Rule) -> List[str]:
    """Directory paths spelled out literally at the start of an anchored rule"""
    prefixes = []
    names = []
    # The last segment names the rule's own target, not a parent
    for segment in rule.matcher.segments[:-1]:
        if not isinstance(segment, SegmentGlob) or segment.literal_text is None:
            break
        names.append(segment.literal_text)
        prefixes.append(PATH_SEPARATOR.join(names))
    return prefixes


def check_rule(rule: Rule) -> List[str]:
    """
    Check a single rule for potential issues

    Args:
        rule: Compiled rule

    Returns:
        List of warning messages
    """
    warnings = list(rule.issues)

    normalized = normalize_line(rule.source_text)
    body = normalized.body if normalized else ''

    if not rule.matcher.segments:
        warnings.append("Pattern has no path components and never matches")

    # Escaping an ordinary character is a no-op; usually a Windows path
    for index, char in enumerate(body[:-1]):
        if char == ESCAPE_CHAR and body[index + 1].isalnum():
            warnings.append("Pattern contains backslash. Use forward slashes for paths.")
            break

    if body in OVERLY_BROAD_PATTERNS and not rule.negate:
        warnings.append("Very broad pattern - will exclude every path")

    if body.startswith('*.') and PATH_SEPARATOR in body.rstrip(PATH_SEPARATOR):
        warnings.append("Extension pattern with path separator - this may not work as expected")

    return warnings


def lint_rules(rule_set: RuleSet) -> List[RuleWarning]:
    """
    Lint every rule of a rule set

    Besides per-rule checks, flags negated rules whose parent directory is
    excluded by an earlier rule. Evaluation would still re-include such
    paths, while git does not descend into excluded directories.

    Args:
        rule_set: Compiled rules

    Returns:
        Warnings ordered by line number
    """
    warnings: List[RuleWarning] = []
    rules = rule_set.rules

    for index, rule in enumerate(rules):
        for message in check_rule(rule):
            warnings.append(RuleWarning(rule.line_number, rule.source_text, message))

        if not rule.negate or not rule.anchored:
            continue

        earlier = RuleSet(rules=rules[:index])
        for prefix in _literal_prefixes(rule):
            result = evaluate(earlier, prefix, is_dir=True)
            if result.ignored:
                deciding = result.deciding_rule
                warnings.append(RuleWarning(
                    rule.line_number,
                    rule.source_text,
                    f"Parent directory '{prefix}/' is excluded by line {deciding.line_number} "
                    f"({deciding.source_text!r}); git would not re-include this path"
                ))
                break

    if warnings:
        logger.debug(f"Lint found {len(warnings)} warnings in {len(rules)} rules")
    return warnings
