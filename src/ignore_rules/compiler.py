"""
Pattern compiler: raw ignore lines to an immutable RuleSet
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from .file_loader import IgnoreFileLoader
from .normalizer import normalize_line
from .rule_engine import Rule, RuleSet
from .translator import translate_pattern
from .utils import get_logger

logger = get_logger(__name__)


def compile_rule(line: str, line_number: int) -> Optional[Rule]:
    """
    Compile a single line

    Args:
        line: Raw line text
        line_number: 1-based position of the line in its input

    Returns:
        Rule, or None for blank and comment lines
    """
    normalized = normalize_line(line)
    if normalized is None:
        return None

    translated = translate_pattern(normalized.body)
    return Rule(
        line_number=line_number,
        source_text=line,
        negate=normalized.negate,
        directory_only=translated.directory_only,
        anchored=translated.anchored,
        matcher=translated.matcher,
        issues=translated.issues,
    )


def compile_lines(lines: Iterable[str]) -> RuleSet:
    """
    Compile ignore lines in order

    Blank and comment lines produce no rule but still count towards line
    numbering. Malformed globs never fail; they degrade to literal matching.

    Args:
        lines: Raw lines, with or without trailing carriage returns

    Returns:
        RuleSet with one rule per pattern line
    """
    rules: List[Rule] = []
    line_count = 0
    for line_count, line in enumerate(lines, 1):
        rule = compile_rule(line, line_count)
        if rule is not None:
            logger.trace("Line %d compiled: %r", line_count, rule)
            rules.append(rule)

    logger.debug(f"Compiled {len(rules)} rules from {line_count} lines")
    return RuleSet(rules=tuple(rules), source_lines=line_count)


def compile_file(file_path: Union[str, Path],
                 loader: Optional[IgnoreFileLoader] = None) -> RuleSet:
    """
    Compile an ignore file

    Args:
        file_path: Path to the ignore file
        loader: Loader to read with (defaults to UTF-8)

    Returns:
        RuleSet compiled from the file's lines

    Raises:
        OSError: If the file cannot be opened or read
    """
    loader = loader or IgnoreFileLoader()
    return compile_lines(loader.read_lines(file_path))


def compile_file_and_lines(file_path: Union[str, Path], extra_lines: Iterable[str] = (),
                           loader: Optional[IgnoreFileLoader] = None) -> RuleSet:
    """
    Compile an ignore file followed by extra lines

    The extra lines are numbered after the file's last line, so both share
    one numbering scheme.

    Args:
        file_path: Path to the ignore file
        extra_lines: Lines appended after the file's contents

    Returns:
        RuleSet in which the extra lines take precedence over the file

    Raises:
        OSError: If the file cannot be opened or read
    """
    loader = loader or IgnoreFileLoader()
    lines = loader.read_lines(file_path)
    lines.extend(extra_lines)
    return compile_lines(lines)
