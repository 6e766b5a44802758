from __future__ import annotations

from typing import List

from .errors import (
    BFSyntaxError,
    UnbalancedBracketError,
    UnrecognizedSymbolError,
    make_syntax_error,
)
from .instructions import BF_OPS


def check(source: str, *, strict: bool = False) -> None:
    """
    Scan ``source`` and raise if it is not a well-formed program.

    Brackets must be properly nested and fully closed. Characters other than
    the eight symbols are comments unless ``strict`` is set, in which case
    the first one found is rejected.

    Raises:
        UnbalancedBracketError: for an unmatched ']' or an unclosed '['.
        UnrecognizedSymbolError: for a non-symbol character in strict mode.
    """
    open_brackets: List[int] = []

    for pos, ch in enumerate(source):
        if ch == '[':
            open_brackets.append(pos)
        elif ch == ']':
            if not open_brackets:
                raise make_syntax_error(
                    UnbalancedBracketError, message="unmatched ']'", source=source, position=pos
                )
            open_brackets.pop()
        elif ch not in BF_OPS and strict:
            raise make_syntax_error(
                UnrecognizedSymbolError,
                message=f"unrecognized symbol {ch!r}",
                source=source,
                position=pos,
            )

    if open_brackets:
        raise make_syntax_error(
            UnbalancedBracketError, message="unclosed '['", source=source, position=open_brackets[-1]
        )


def validate(source: str, *, strict: bool = False) -> bool:
    """Return True if ``source`` would compile under the same policy."""
    try:
        check(source, strict=strict)
    except BFSyntaxError:
        return False
    return True
