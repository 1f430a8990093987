#!/usr/bin/env python3
"""
Tests for jump table construction and bracket validation.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfrun import (
    BFSyntaxError,
    UnmatchedCloserError,
    UnmatchedOpenerError,
    build_jump_table,
    load,
)


def _table(src):
    return build_jump_table(load(src))


def test_simple_pair():
    table = _table(b"+[-]")
    assert table.partner(1) == 3
    assert table.partner(3) == 1
    assert list(table.pairs()) == [(1, 3)]
    assert len(table) == 1


def test_nested_pairs_match_innermost():
    table = _table(b"[[][[]]]")
    assert list(table.pairs()) == [(0, 7), (1, 2), (3, 6), (4, 5)]
    for opener, closer in table.pairs():
        assert table.partner(closer) == opener


def test_non_brackets_have_no_partner():
    table = _table(b"+[.]")
    assert 0 not in table
    assert 1 in table
    assert 99 not in table
    with pytest.raises(KeyError):
        table.partner(0)


def test_comments_do_not_shift_indices():
    table = _table(b"loop: [ body - ] done")
    assert list(table.pairs()) == [(0, 2)]


def test_no_brackets():
    table = _table(b"+++.")
    assert len(table) == 0
    assert list(table.pairs()) == []


def test_unmatched_opener():
    with pytest.raises(UnmatchedOpenerError) as info:
        _table(b"[")
    assert info.value.offset == 0
    assert info.value.line == 1


def test_unmatched_closer():
    with pytest.raises(UnmatchedCloserError) as info:
        _table(b"]")
    assert info.value.offset == 0


def test_closer_before_opener():
    with pytest.raises(UnmatchedCloserError) as info:
        _table(b"+][")
    assert info.value.column == 2


def test_opener_reports_innermost_unclosed():
    with pytest.raises(UnmatchedOpenerError) as info:
        _table(b"[\n+[\n-]")
    assert info.value.line == 1
    with pytest.raises(UnmatchedOpenerError) as info:
        _table(b"[]\n  [[-]")
    assert (info.value.line, info.value.column) == (2, 3)


def test_errors_share_base_class():
    for src in (b"[", b"]", b"[[]", b"[]]"):
        with pytest.raises(BFSyntaxError):
            _table(src)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
