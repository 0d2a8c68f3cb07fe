"""
Gitignore-style rule compilation and matching

Compiles an ordered list of ignore patterns into an immutable RuleSet and
answers, for a relative path, whether the last matching rule ignores it.
Directories are marked with a trailing '/' on the query path (or with
is_dir=True).
"""

from .constants import DEFAULT_IGNORE_FILENAME
from .compiler import compile_lines, compile_file, compile_file_and_lines, compile_rule
from .rule_engine import Rule, RuleSet, MatchResult, evaluate
from .file_loader import IgnoreFileLoader, IgnoreFileInfo
from .lint import RuleWarning, lint_rules

__version__ = "0.1.0"

__all__ = [
    'DEFAULT_IGNORE_FILENAME',
    'compile_lines',
    'compile_file',
    'compile_file_and_lines',
    'compile_rule',
    'Rule',
    'RuleSet',
    'MatchResult',
    'evaluate',
    'IgnoreFileLoader',
    'IgnoreFileInfo',
    'RuleWarning',
    'lint_rules',
]
