#!/usr/bin/env python3
"""
Tests for glob translation and segment matching
"""

import pytest

from ignore_rules.translator import (
    DoubleStar,
    ISSUE_INVALID_DOUBLE_STAR,
    ISSUE_TRAILING_ESCAPE,
    ISSUE_UNCLOSED_CLASS,
    translate_pattern,
    translate_segment,
)


def segment_matches(glob, name):
    return translate_segment(glob, []).matches(name)


def parts_of(path):
    return tuple(p for p in path.split("/") if p)


@pytest.mark.parametrize("body,anchored,directory_only", [
    ("foo", False, False),
    ("foo/", False, True),
    ("/foo", True, False),
    ("/foo/", True, True),
    ("foo/bar", True, False),
    ("**/foo", True, False),
    ("foo/**", True, False),
    ("*.js", False, False),
    ("foo//", False, True),
    ("/foo//", True, True),
])
def test_anchoring_and_directory_flags(body, anchored, directory_only):
    """Anchoring comes from a non-trailing '/', directory-only from a trailing one"""
    translated = translate_pattern(body)
    assert translated.anchored is anchored
    assert translated.directory_only is directory_only
    assert translated.matcher.floating is not anchored


def test_repeated_trailing_slashes_stay_floating():
    """Only a non-trailing separator anchors a pattern"""
    matcher = translate_pattern("foo//").matcher
    assert matcher.match_parts(parts_of("x/foo/a"))
    assert matcher.match_parts(parts_of("foo/a"))
    assert not matcher.match_parts(parts_of("x/foo"))

    anchored = translate_pattern("/foo//").matcher
    assert anchored.match_parts(parts_of("foo/a"))
    assert not anchored.match_parts(parts_of("x/foo/a"))


def test_escaped_trailing_slash_is_not_directory_only():
    translated = translate_pattern("foo\\/")
    assert not translated.directory_only


@pytest.mark.parametrize("glob,name,expected", [
    ("*.js", "a.js", True),
    ("*.js", ".js", True),
    ("*.js", "a.jsx", False),
    ("?.c", "a.c", True),
    ("?.c", "ab.c", False),
    ("a*b*c", "abc", True),
    ("a*b*c", "axxbyyc", True),
    ("a*b*c", "axxbyy", False),
    ("*ignore", ".gitignore", True),
    ("[a-c]x", "bx", True),
    ("[a-c]x", "dx", False),
    ("[!a-c]x", "dx", True),
    ("[^a-c]x", "ax", False),
    ("[]]", "]", True),
    ("[a-]", "-", True),
    ("\\*.js", "*.js", True),
    ("\\*.js", "a.js", False),
    ("\\?", "?", True),
    ("\\[a]", "[a]", True),
    ("\\ ", " ", True),
    ("a.b", "a.b", True),
    ("a.b", "axb", False),
    ("a+(b)", "a+(b)", True),
    ("$RECYCLE.BIN", "$RECYCLE.BIN", True),
])
def test_segment_globs(glob, name, expected):
    """Wildcards stay inside one component and other characters match literally"""
    assert segment_matches(glob, name) is expected


def test_invalid_double_star_degrades_to_literal():
    """Runs of '*' inside a component are literal characters"""
    issues = []
    segment = translate_segment("a**b", issues)
    assert ISSUE_INVALID_DOUBLE_STAR in issues
    assert segment.matches("a**b")
    assert not segment.matches("axxb")

    translated = translate_pattern("***")
    assert ISSUE_INVALID_DOUBLE_STAR in translated.issues
    assert translated.matcher.match_parts(("***",))
    assert not translated.matcher.match_parts(("abc",))


def test_unclosed_class_degrades_to_literal():
    translated = translate_pattern("[abc")
    assert translated.issues == (ISSUE_UNCLOSED_CLASS,)
    assert translated.matcher.match_parts(("[abc",))
    assert not translated.matcher.match_parts(("a",))


def test_trailing_escape_degrades_to_literal():
    translated = translate_pattern("foo\\")
    assert translated.issues == (ISSUE_TRAILING_ESCAPE,)
    assert translated.matcher.match_parts(("foo\\",))


def test_well_formed_patterns_have_no_issues():
    for body in ["*.py[cod]", "**/foo/**", "foo/**/bar", "\\#x", "a?b"]:
        assert translate_pattern(body).issues == ()


def test_double_star_segments():
    """'**' segments match zero or more whole components"""
    matcher = translate_pattern("foo/**/bar").matcher
    assert matcher.match_parts(parts_of("foo/bar"))
    assert matcher.match_parts(parts_of("foo/x/bar"))
    assert matcher.match_parts(parts_of("foo/x/y/bar"))
    assert matcher.match_parts(parts_of("foo/bar/extra"))
    assert not matcher.match_parts(parts_of("foo/xbar"))
    assert not matcher.match_parts(parts_of("x/foo/bar"))


def test_leading_double_star():
    matcher = translate_pattern("**/foo").matcher
    assert matcher.match_parts(parts_of("foo"))
    assert matcher.match_parts(parts_of("a/b/foo"))
    assert matcher.match_parts(parts_of("a/foo/child"))
    assert not matcher.match_parts(parts_of("a/foox"))


def test_trailing_double_star_includes_attachment_point():
    matcher = translate_pattern("abc/**").matcher
    assert matcher.match_parts(parts_of("abc"))
    assert matcher.match_parts(parts_of("abc/x"))
    assert matcher.match_parts(parts_of("abc/x/y/z"))
    assert not matcher.match_parts(parts_of("xabc/x"))


def test_repeated_double_star_collapses():
    translated = translate_pattern("a/**/**/b")
    assert sum(isinstance(s, DoubleStar) for s in translated.matcher.segments) == 1
    assert translated.matcher.match_parts(parts_of("a/b"))


def test_lone_double_star_matches_everything():
    matcher = translate_pattern("**").matcher
    assert matcher.match_parts(parts_of("a"))
    assert matcher.match_parts(parts_of("a/b/c"))


def test_anchored_pattern_covers_descendants():
    matcher = translate_pattern("foo/bar").matcher
    assert matcher.match_parts(parts_of("foo/bar"))
    assert matcher.match_parts(parts_of("foo/bar/child"))
    assert not matcher.match_parts(parts_of("x/foo/bar"))
    assert not matcher.match_parts(parts_of("foo"))


def test_floating_pattern_matches_any_depth():
    matcher = translate_pattern("*.js").matcher
    assert matcher.match_parts(parts_of("a.js"))
    assert matcher.match_parts(parts_of("dir/sub/a.js"))
    assert matcher.match_parts(parts_of("a.js/inner"))
    assert not matcher.match_parts(parts_of("dir/a.ts"))


def test_directory_only_needs_directory():
    """A directory-only match must be followed by a component or flagged as a directory"""
    matcher = translate_pattern("foo/").matcher
    assert not matcher.match_parts(parts_of("foo"))
    assert matcher.match_parts(parts_of("foo"), is_dir=True)
    assert matcher.match_parts(parts_of("foo/a"))
    assert matcher.match_parts(parts_of("x/foo/a"))
    assert not matcher.match_parts(parts_of("x/foo"))


def test_empty_pattern_never_matches():
    matcher = translate_pattern("/").matcher
    assert matcher.segments == ()
    assert not matcher.match_parts(parts_of("a"))
    assert not matcher.match_parts((), is_dir=True)


def test_slash_inside_escape_does_not_split():
    translated = translate_pattern("a\\/b")
    assert not translated.anchored
    assert len(translated.matcher.segments) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
