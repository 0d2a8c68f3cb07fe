"""
Line normalization: comments, trailing whitespace, negation and leading escapes
"""

from dataclasses import dataclass
from typing import Optional

from .constants import COMMENT_CHAR, NEGATION_CHAR, ESCAPE_CHAR, TRAILING_WHITESPACE


@dataclass(frozen=True)
class NormalizedLine:
    """Pattern body of a non-blank, non-comment line"""
    body: str
    negate: bool = False


def _is_escaped(text: str, index: int) -> bool:
    """True if the character at index is preceded by an odd run of backslashes"""
    count = 0
    index -= 1
    while index >= 0 and text[index] == ESCAPE_CHAR:
        count += 1
        index -= 1
    return count % 2 == 1


def strip_trailing_whitespace(line: str) -> str:
    """
    Remove trailing whitespace that is not escaped with a backslash

    The escaping backslash itself is left in place; it is removed later when
    the glob is translated.
    """
    end = len(line)
    while end > 0 and line[end - 1] in TRAILING_WHITESPACE:
        if _is_escaped(line, end - 1):
            break
        end -= 1
    return line[:end]


def normalize_line(line: str) -> Optional[NormalizedLine]:
    """
    Normalize one raw ignore-file line

    Args:
        line: Raw line text, possibly ending in a carriage return

    Returns:
        NormalizedLine, or None if the line is blank or a comment
    """
    line = line.rstrip('\r')

    # Only a '#' in the very first column starts a comment
    if line.startswith(COMMENT_CHAR):
        return None

    line = strip_trailing_whitespace(line)
    if not line:
        return None

    negate = False
    if line.startswith(NEGATION_CHAR):
        negate = True
        line = line[1:]
    elif line.startswith(ESCAPE_CHAR + NEGATION_CHAR) or line.startswith(ESCAPE_CHAR + COMMENT_CHAR):
        line = line[1:]

    if not line:
        return None

    return NormalizedLine(body=line, negate=negate)
