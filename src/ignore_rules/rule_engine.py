"""
Rule engine: compiled rules and last-match-wins path evaluation
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

import pathspec

from .constants import PATH_SEPARATOR
from .translator import GlobMatcher
from .utils import get_logger

logger = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Rule:
    """One compiled ignore line"""
    line_number: int  # 1-based position in the input
    source_text: str  # Line as given, before normalization
    negate: bool
    directory_only: bool
    anchored: bool
    matcher: GlobMatcher = field(repr=False, compare=False)
    issues: Tuple[str, ...] = ()  # Degradations applied by the translator

    def matches(self, path: PathLike, is_dir: Optional[bool] = None) -> bool:
        """Check this rule alone against a path, ignoring negation"""
        parts, directory = split_query_path(path, is_dir)
        return self.matcher.match_parts(parts, directory)


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a path against a rule set"""
    ignored: bool
    deciding_rule: Optional[Rule] = None  # None when no rule matched

    def __iter__(self):
        # Allows `ignored, rule = result`
        return iter((self.ignored, self.deciding_rule))


def split_query_path(path: PathLike, is_dir: Optional[bool] = None) -> Tuple[Tuple[str, ...], bool]:
    """
    Split a query path into components

    A trailing '/' marks the path as a directory unless is_dir says
    otherwise. Leading '/', './' and '.' components are dropped and OS
    separators are normalized, so paths are always taken relative to the
    rule root.

    Args:
        path: Relative path as str or os.PathLike
        is_dir: Explicit directory flag, overrides the trailing-slash convention

    Returns:
        Tuple of (components, is_directory)
    """
    text = pathspec.util.normalize_file(path)
    directory = text.endswith(PATH_SEPARATOR) if is_dir is None else bool(is_dir)
    parts = tuple(part for part in text.split(PATH_SEPARATOR) if part and part != '.')
    return parts, directory


def evaluate(rule_set: "RuleSet", path: PathLike, is_dir: Optional[bool] = None) -> MatchResult:
    """
    Evaluate a path against a rule set

    The last rule that matches decides: it ignores the path unless it is a
    negated rule. A path matched by no rule is included.

    Args:
        rule_set: Compiled rules
        path: Path relative to the rule root
        is_dir: Explicit directory flag, see split_query_path()

    Returns:
        MatchResult with the verdict and the deciding rule
    """
    parts, directory = split_query_path(path, is_dir)

    # Last match wins, so the first hit scanning backwards decides
    for rule in reversed(rule_set.rules):
        if rule.matcher.match_parts(parts, directory):
            logger.trace("'%s' decided by line %d: %r", path, rule.line_number, rule.source_text)
            return MatchResult(ignored=not rule.negate, deciding_rule=rule)

    return MatchResult(ignored=False, deciding_rule=None)


@dataclass(frozen=True)
class RuleSet:
    """
    Ordered, immutable collection of compiled rules

    Rules keep input line order; later rules override earlier ones.
    Instances are never modified after compilation and can be shared
    between threads.
    """
    rules: Tuple[Rule, ...] = ()
    source_lines: int = 0  # Input lines consumed, blank and comment lines included

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def evaluate(self, path: PathLike, is_dir: Optional[bool] = None) -> MatchResult:
        return evaluate(self, path, is_dir)

    def matches(self, path: PathLike, is_dir: Optional[bool] = None) -> bool:
        """
        Check if a path is ignored

        Args:
            path: Path relative to the rule root; end directories with '/'
            is_dir: Explicit directory flag (for Path objects)

        Returns:
            True if the path is ignored
        """
        return evaluate(self, path, is_dir).ignored

    def matches_with_reason(self, path: PathLike,
                            is_dir: Optional[bool] = None) -> Tuple[bool, Optional[Rule]]:
        """
        Check if a path is ignored and report the deciding rule

        Returns:
            Tuple of (ignored, rule); rule is None when nothing matched
        """
        result = evaluate(self, path, is_dir)
        return result.ignored, result.deciding_rule

    def includes(self, path: PathLike, is_dir: Optional[bool] = None) -> bool:
        return not self.matches(path, is_dir)

    def filter(self, paths: Iterable[PathLike],
               is_dir: Optional[Callable[[PathLike], bool]] = None) -> Iterator[PathLike]:
        """
        Yield the paths that are not ignored, in input order

        Args:
            paths: Paths relative to the rule root
            is_dir: Predicate marking directories, e.g. 'lambda p: (root / p).is_dir()';
                without it only a trailing '/' marks a directory
        """
        for path in paths:
            directory = is_dir(path) if is_dir is not None else None
            if not self.matches(path, directory):
                yield path
