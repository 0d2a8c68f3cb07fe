"""
Glob translation: turns a normalized pattern body into a compiled matcher

A pattern is split on '/' into segment globs. Each segment glob is a small
token table (literal runs, '*', '?', character classes) that is matched
against exactly one path component. A segment consisting of '**' matches
zero or more whole components. Matching a path is a walk over its
components that tracks every pattern position still reachable, so no
regular expression is built per rule and evaluation is bounded by
len(path components) * len(pattern segments).
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple, Union

from .constants import ESCAPE_CHAR, PATH_SEPARATOR, DOUBLE_STAR
from .utils import get_logger

logger = get_logger(__name__)


# Issue messages recorded on degraded patterns (surfaced by lint)
ISSUE_INVALID_DOUBLE_STAR = "consecutive '*' outside a whole path segment are matched literally"
ISSUE_UNCLOSED_CLASS = "unclosed '[' is matched literally"
ISSUE_TRAILING_ESCAPE = "trailing '\\' is matched literally"


@dataclass(frozen=True)
class Literal:
    """Run of characters matched exactly"""
    text: str

    @property
    def width(self) -> int:
        return len(self.text)

    def match_at(self, name: str, pos: int) -> bool:
        return name.startswith(self.text, pos)


@dataclass(frozen=True)
class AnyChar:
    """'?': exactly one character"""
    width: int = 1

    def match_at(self, name: str, pos: int) -> bool:
        return pos < len(name)


@dataclass(frozen=True)
class CharClass:
    """'[...]': one character from a set of ranges, optionally negated"""
    ranges: Tuple[Tuple[str, str], ...]
    negated: bool = False
    width: int = 1

    def match_at(self, name: str, pos: int) -> bool:
        if pos >= len(name):
            return False
        char = name[pos]
        hit = any(low <= char <= high for low, high in self.ranges)
        return hit != self.negated


@dataclass(frozen=True)
class AnyRun:
    """'*': zero or more characters within one path component"""


STAR = AnyRun()

Token = Union[Literal, AnyChar, CharClass, AnyRun]


@dataclass(frozen=True)
class SegmentGlob:
    """Glob for a single path component"""
    tokens: Tuple[Token, ...]

    @property
    def is_literal(self) -> bool:
        return all(isinstance(token, Literal) for token in self.tokens)

    @property
    def literal_text(self) -> Optional[str]:
        """Exact component text, or None if the glob has wildcards"""
        if not self.is_literal:
            return None
        return ''.join(token.text for token in self.tokens)

    def matches(self, name: str) -> bool:
        """Match one path component against the token table"""
        tokens = self.tokens
        literal = self.literal_text
        if literal is not None:
            return name == literal

        # Greedy scan with a single backtrack point at the last '*'.
        # Every non-star token has a fixed width, so this is exact.
        ti = 0
        pos = 0
        star_ti = -1
        star_pos = 0
        while pos < len(name):
            token = tokens[ti] if ti < len(tokens) else None
            if isinstance(token, AnyRun):
                star_ti = ti
                star_pos = pos
                ti += 1
            elif token is not None and token.match_at(name, pos):
                pos += token.width
                ti += 1
            elif star_ti != -1:
                ti = star_ti + 1
                star_pos += 1
                pos = star_pos
            else:
                return False

        while ti < len(tokens) and isinstance(tokens[ti], AnyRun):
            ti += 1
        return ti == len(tokens)


@dataclass(frozen=True)
class DoubleStar:
    """'**' as a whole segment: zero or more path components"""


ANY_DEPTH = DoubleStar()

Segment = Union[SegmentGlob, DoubleStar]


@dataclass(frozen=True)
class GlobMatcher:
    """
    Compiled matcher for one ignore pattern

    Attributes:
        segments: Segment globs in pattern order
        floating: Pattern may start at any depth (basename-style)
        directory_only: Matched component must be a directory
    """
    segments: Tuple[Segment, ...]
    floating: bool = False
    directory_only: bool = False

    def _closure(self, states: Set[int]) -> FrozenSet[int]:
        """Extend states across '**' segments, which may match nothing"""
        pending = list(states)
        closed = set(states)
        while pending:
            index = pending.pop()
            if index < len(self.segments) and isinstance(self.segments[index], DoubleStar):
                if index + 1 not in closed:
                    closed.add(index + 1)
                    pending.append(index + 1)
        return frozenset(closed)

    def match_parts(self, parts: Sequence[str], is_dir: bool = False) -> bool:
        """
        Match a path given as its components

        The pattern matches when it covers a leading run of components (or,
        when floating, a run starting at any component). The covered run may
        be the whole path or be followed by further components, so a match
        on a directory also covers everything below it.

        Args:
            parts: Path components, root first, without empty entries
            is_dir: The full path names a directory

        Returns:
            True if the pattern matches the path
        """
        end = len(self.segments)
        if end == 0 or not parts:
            return False

        start = self._closure({0})
        states = start
        for index, name in enumerate(parts):
            advanced = set()
            for position in states:
                if position == end:
                    continue
                segment = self.segments[position]
                if isinstance(segment, DoubleStar):
                    advanced.add(position)
                elif segment.matches(name):
                    advanced.add(position + 1)
            states = self._closure(advanced)

            if end in states:
                consumed = index + 1
                # Anything followed by another component is a directory
                if not self.directory_only or consumed < len(parts) or is_dir:
                    return True

            if self.floating:
                states = states | start
            elif not states:
                return False

        return False


@dataclass(frozen=True)
class TranslatedPattern:
    """Result of translating one pattern body"""
    anchored: bool
    directory_only: bool
    matcher: GlobMatcher
    issues: Tuple[str, ...] = field(default=())


def _split_unescaped(body: str, separator: str) -> List[str]:
    """Split on separator characters that are not backslash-escaped"""
    parts = []
    current = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == ESCAPE_CHAR and index + 1 < len(body):
            current.append(body[index:index + 2])
            index += 2
            continue
        if char == separator:
            parts.append(''.join(current))
            current = []
        else:
            current.append(char)
        index += 1
    parts.append(''.join(current))
    return parts


def _parse_class(text: str, start: int) -> Optional[Tuple[CharClass, int]]:
    """
    Parse a bracket expression starting at text[start] == '['

    Returns:
        (CharClass, index after the closing ']') or None if unclosed
    """
    index = start + 1
    negated = False
    if index < len(text) and text[index] in '!^':
        negated = True
        index += 1

    ranges = []
    first = True
    while index < len(text):
        char = text[index]
        if char == ']' and not first:
            return CharClass(ranges=tuple(ranges), negated=negated), index + 1
        first = False

        if char == ESCAPE_CHAR and index + 1 < len(text):
            char = text[index + 1]
            index += 2
        else:
            index += 1

        # Range unless the '-' is the last character before ']'
        if index + 1 < len(text) and text[index] == '-' and text[index + 1] != ']':
            high = text[index + 1]
            index += 2
            if high == ESCAPE_CHAR and index < len(text):
                high = text[index]
                index += 1
            ranges.append((char, high))
        else:
            ranges.append((char, char))

    return None


def translate_segment(text: str, issues: List[str]) -> SegmentGlob:
    """
    Translate one path component glob into tokens

    Args:
        text: Segment text, still containing backslash escapes
        issues: Receives a message for every construct degraded to literals

    Returns:
        SegmentGlob with adjacent literal characters merged into runs
    """
    tokens: List[Token] = []
    literal: List[str] = []

    def flush():
        if literal:
            tokens.append(Literal(''.join(literal)))
            literal.clear()

    index = 0
    while index < len(text):
        char = text[index]
        if char == ESCAPE_CHAR:
            if index + 1 < len(text):
                literal.append(text[index + 1])
                index += 2
            else:
                literal.append(char)
                issues.append(ISSUE_TRAILING_ESCAPE)
                index += 1
        elif char == '*':
            run_end = index
            while run_end < len(text) and text[run_end] == '*':
                run_end += 1
            if run_end - index == 1:
                flush()
                tokens.append(STAR)
            else:
                literal.append(text[index:run_end])
                issues.append(ISSUE_INVALID_DOUBLE_STAR)
            index = run_end
        elif char == '?':
            flush()
            tokens.append(AnyChar())
            index += 1
        elif char == '[':
            parsed = _parse_class(text, index)
            if parsed is None:
                literal.append(char)
                issues.append(ISSUE_UNCLOSED_CLASS)
                index += 1
            else:
                flush()
                tokens.append(parsed[0])
                index = parsed[1]
        else:
            literal.append(char)
            index += 1

    flush()
    return SegmentGlob(tokens=tuple(tokens))


def translate_pattern(body: str) -> TranslatedPattern:
    """
    Translate a normalized pattern body

    Args:
        body: Pattern text with negation and comment handling already done

    Returns:
        TranslatedPattern with anchoring, directory-only flag and matcher
    """
    directory_only = False
    if body.endswith(PATH_SEPARATOR) and not _ends_escaped(body):
        directory_only = True
        body = body[:-1]

    raw_segments = _split_unescaped(body, PATH_SEPARATOR)
    # Extra trailing separators do not anchor; a leading one does
    while len(raw_segments) > 1 and not raw_segments[-1]:
        raw_segments.pop()
    anchored = len(raw_segments) > 1

    issues: List[str] = []
    segments: List[Segment] = []
    for raw in raw_segments:
        if not raw:
            # Leading '/' or repeated separators
            continue
        if raw == DOUBLE_STAR:
            # Consecutive '**' segments are equivalent to one
            if segments and isinstance(segments[-1], DoubleStar):
                continue
            segments.append(ANY_DEPTH)
        else:
            segments.append(translate_segment(raw, issues))

    if issues:
        logger.debug(f"Pattern '{body}' degraded: {'; '.join(issues)}")

    matcher = GlobMatcher(
        segments=tuple(segments),
        floating=not anchored,
        directory_only=directory_only,
    )
    return TranslatedPattern(
        anchored=anchored,
        directory_only=directory_only,
        matcher=matcher,
        issues=tuple(issues),
    )


def _ends_escaped(body: str) -> bool:
    count = 0
    index = len(body) - 2
    while index >= 0 and body[index] == ESCAPE_CHAR:
        count += 1
        index -= 1
    return count % 2 == 1
