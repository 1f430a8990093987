#!/usr/bin/env python3
"""
Tests for error messages: location, context excerpt and hints.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfrun import BFError, UnmatchedCloserError, UnmatchedOpenerError, VM


def test_closer_message_has_location_and_hint():
    with pytest.raises(UnmatchedCloserError) as info:
        VM.construct(b"+++\n++]\n.")
    err = info.value
    msg = str(err)
    assert msg.startswith("SyntaxError: unmatched ']' (line 2, column 3)")
    assert ">    2 | ++]" in msg
    assert "Hint:" in msg
    assert err.context in msg


def test_caret_points_at_bracket():
    with pytest.raises(UnmatchedOpenerError) as info:
        VM.construct(b"ab[cd")
    lines = info.value.context.split("\n")
    marked = lines.index(">    1 | ab[cd")
    assert lines[marked + 1].endswith("  ^")
    assert lines[marked + 1].index("^") == lines[marked].index("[")


def test_context_is_limited_to_nearby_lines():
    src = b"\n".join([b"+"] * 10 + [b"]"] + [b"-"] * 10)
    with pytest.raises(UnmatchedCloserError) as info:
        VM.construct(src)
    assert info.value.line == 11
    numbered = [ln for ln in info.value.context.split("\n") if "|" in ln and ln.split("|")[0].strip()]
    assert len(numbered) == 5


def test_opener_message_counts_open_loops():
    with pytest.raises(UnmatchedOpenerError) as info:
        VM.construct(b"[[[]")
    assert "2 left open" in str(info.value)


def test_syntax_errors_are_bf_errors():
    with pytest.raises(BFError):
        VM.construct(b"]")


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
