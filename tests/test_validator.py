#!/usr/bin/env python3
"""
Tests for the bracket/symbol validator.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bftape import (
    UnbalancedBracketError,
    UnrecognizedSymbolError,
    check,
    validate,
)

HELLO = "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."


def test_balanced_programs_are_valid():
    for source in ["", "+-<>,.", "[]", "[[]]", "[-]>[-<+>]", HELLO]:
        assert validate(source), source
        assert validate(source, strict=True), source


def test_unmatched_close_is_invalid():
    for source in ["]", "][", "[]]", "+-]"]:
        assert not validate(source), source


def test_unclosed_open_is_invalid():
    for source in ["[", "[[]", "[][", "+[>[<]"]:
        assert not validate(source), source


def test_comments_follow_compiler_policy():
    """Non-symbol characters are comments unless strict mode is requested."""
    source = "add two: ++ and loop [ - ]\n"
    assert validate(source)
    assert not validate(source, strict=True)


def test_strict_rejects_even_whitespace():
    assert not validate("+ +", strict=True)
    assert not validate("+\n", strict=True)


def test_check_reports_unmatched_close_position():
    with pytest.raises(UnbalancedBracketError) as exc_info:
        check("+]")
    err = exc_info.value
    assert err.position == 1
    assert (err.line, err.column) == (1, 2)
    assert "unmatched ']'" in str(err)
    assert "Hint:" in str(err)


def test_check_reports_innermost_unclosed_bracket():
    with pytest.raises(UnbalancedBracketError) as exc_info:
        check("[+\n[]\n[")
    err = exc_info.value
    assert err.position == 6
    assert (err.line, err.column) == (3, 1)
    assert ">    3 | [" in err.context


def test_check_reports_unrecognized_symbol_in_strict_mode():
    with pytest.raises(UnrecognizedSymbolError) as exc_info:
        check("++x", strict=True)
    err = exc_info.value
    assert err.position == 2
    assert (err.line, err.column) == (1, 3)
    assert "'x'" in str(err)


def test_strict_mode_rejects_newline_where_it_appears():
    with pytest.raises(UnrecognizedSymbolError) as exc_info:
        check("+\n+x", strict=True)
    err = exc_info.value
    assert err.position == 1
    assert (err.line, err.column) == (1, 2)
    assert "'\\n'" in str(err)


def test_unmatched_close_wins_over_later_symbol():
    """The scan stops at the first problem it meets."""
    with pytest.raises(UnbalancedBracketError):
        check("]x", strict=True)
