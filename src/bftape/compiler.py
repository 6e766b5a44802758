from __future__ import annotations

from typing import List

from .errors import UnbalancedBracketError, UnrecognizedSymbolError, make_syntax_error
from .instructions import (
    SIMPLE_INSTRUCTIONS,
    UNRESOLVED,
    Instruction,
    LoopEnd,
    LoopStart,
    Program,
)


class BrainFuckCompiler:
    """
    BrainFuck Compiler

    Compiles source text to a resolved Program in a single pass.

    Loop Resolution:
    - '[' records the index of the instruction it emits and gets a placeholder target
    - ']' pops that index, points its LoopEnd back at it, then backpatches the LoopStart
    - Jump targets are instruction indices, so comments never shift them

    Symbol Policy:
    - Non-symbol characters are comments and take no instruction slot
    - With strict=True they are rejected instead (same policy as validate())
    """

    def __init__(self, strict=False):
        self.strict = strict

    def compile(self, source: str) -> Program:
        """
        Compile ``source`` into a Program.

        Raises:
            UnbalancedBracketError: a ']' with no open '[', or a '[' never closed.
            UnrecognizedSymbolError: a non-symbol character in strict mode.
        """
        instructions: List[Instruction] = []
        positions: List[int] = []
        loop_stack: List[int] = []  # indices into instructions, not source offsets

        for pos, ch in enumerate(source):
            simple = SIMPLE_INSTRUCTIONS.get(ch)
            if simple is not None:
                instructions.append(simple)
                positions.append(pos)
            elif ch == '[':
                loop_stack.append(len(instructions))
                instructions.append(LoopStart(target=UNRESOLVED))
                positions.append(pos)
            elif ch == ']':
                if not loop_stack:
                    raise make_syntax_error(
                        UnbalancedBracketError, message="unmatched ']'", source=source, position=pos
                    )
                start = loop_stack.pop()
                end = len(instructions)
                instructions.append(LoopEnd(target=start))
                positions.append(pos)
                instructions[start] = LoopStart(target=end)
            elif self.strict:
                raise make_syntax_error(
                    UnrecognizedSymbolError,
                    message=f"unrecognized symbol {ch!r}",
                    source=source,
                    position=pos,
                )

        if loop_stack:
            raise make_syntax_error(
                UnbalancedBracketError,
                message="unclosed '['",
                source=source,
                position=positions[loop_stack[-1]],
            )

        return Program(instructions=tuple(instructions), positions=tuple(positions))


def compile_program(source: str, *, strict: bool = False) -> Program:
    return BrainFuckCompiler(strict=strict).compile(source)
