from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Type, TypeVar


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _locate(source: str, position: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of a source offset."""
    line = source.count('\n', 0, position) + 1
    line_start = source.rfind('\n', 0, position) + 1
    return line, position - line_start + 1


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'syntax':
        if "unmatched ']'" in msg:
            return "Remove the ']' or add a '[' before it."
        if "unclosed '['" in msg:
            return "Every '[' needs a matching ']' later in the program."
        if 'unrecognized symbol' in msg:
            return 'Strict mode only accepts + - < > [ ] , . (no comments or whitespace).'
        return None
    if kind == 'runtime':
        if 'past the end of the tape' in msg:
            return 'Use a larger tape capacity or check the pointer movement in loops.'
        if 'before the start of the tape' in msg:
            return 'The tape pointer starts at cell 0 and cannot move left of it.'
        return None
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFError):
    position: int
    line: int
    column: int
    context: str


class UnbalancedBracketError(BFSyntaxError):
    pass


class UnrecognizedSymbolError(BFSyntaxError):
    pass


@dataclass
class BFRuntimeError(BFError):
    pc: int
    pointer: int


@dataclass
class TapeBoundsError(BFRuntimeError):
    capacity: int


class StreamError(BFRuntimeError):
    pass


S = TypeVar('S', bound=BFSyntaxError)


def make_syntax_error(cls: Type[S], *, message: str, source: str, position: int) -> S:
    line, column = _locate(source, position)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(message, kind='syntax')
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"SyntaxError: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        position=position,
        line=line,
        column=column,
        context=ctx,
    )


def make_bounds_error(*, message: str, pc: int, pointer: int, capacity: int) -> TapeBoundsError:
    hint = _hint_for(message, kind='runtime')
    hint_block = f"\nHint: {hint}" if hint else ""
    return TapeBoundsError(
        message=f"TapeBoundsError: {message} (instruction {pc}, cell {pointer} of {capacity}){hint_block}",
        pc=pc,
        pointer=pointer,
        capacity=capacity,
    )


def make_stream_error(*, message: str, pc: int, pointer: int) -> StreamError:
    return StreamError(
        message=f"StreamError: {message} (instruction {pc})",
        pc=pc,
        pointer=pointer,
    )
