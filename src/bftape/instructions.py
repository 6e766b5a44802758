from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Iterator, Tuple, Union

import numpy as np

# Opcodes shared with the jitted execution loop.
OP_INCREMENT = 0
OP_DECREMENT = 1
OP_MOVE_NEXT = 2
OP_MOVE_PREVIOUS = 3
OP_LOOP_START = 4
OP_LOOP_END = 5
OP_READ = 6
OP_PRINT = 7

# Placeholder target for a LoopStart whose LoopEnd has not been seen yet.
UNRESOLVED = -1


# ---------------- Instructions ----------------
@dataclass(frozen=True)
class Increment:
    opcode: ClassVar[int] = OP_INCREMENT
    symbol: ClassVar[str] = '+'


@dataclass(frozen=True)
class Decrement:
    opcode: ClassVar[int] = OP_DECREMENT
    symbol: ClassVar[str] = '-'


@dataclass(frozen=True)
class MoveNext:
    opcode: ClassVar[int] = OP_MOVE_NEXT
    symbol: ClassVar[str] = '>'


@dataclass(frozen=True)
class MovePrevious:
    opcode: ClassVar[int] = OP_MOVE_PREVIOUS
    symbol: ClassVar[str] = '<'


@dataclass(frozen=True)
class LoopStart:
    target: int  # index of the matching LoopEnd
    opcode: ClassVar[int] = OP_LOOP_START
    symbol: ClassVar[str] = '['


@dataclass(frozen=True)
class LoopEnd:
    target: int  # index of the matching LoopStart
    opcode: ClassVar[int] = OP_LOOP_END
    symbol: ClassVar[str] = ']'


@dataclass(frozen=True)
class Read:
    opcode: ClassVar[int] = OP_READ
    symbol: ClassVar[str] = ','


@dataclass(frozen=True)
class Print:
    opcode: ClassVar[int] = OP_PRINT
    symbol: ClassVar[str] = '.'


Instruction = Union[Increment, Decrement, MoveNext, MovePrevious, LoopStart, LoopEnd, Read, Print]

# Instructions without operands are stateless, so one shared instance each is enough.
SIMPLE_INSTRUCTIONS: Dict[str, Instruction] = {
    '+': Increment(),
    '-': Decrement(),
    '>': MoveNext(),
    '<': MovePrevious(),
    ',': Read(),
    '.': Print(),
}

BF_OPS = frozenset("+-<>[],.")


# ---------------- Program ----------------
@dataclass(frozen=True)
class Program:
    """
    Ordered, fully resolved instruction sequence.

    Every LoopStart at index i with target j is paired with a LoopEnd at
    index j whose target is i. ``positions`` holds the source offset each
    instruction was compiled from and is only used for diagnostics.
    """

    instructions: Tuple[Instruction, ...] = ()
    positions: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def to_source(self) -> str:
        """Emit the canonical symbol text of the program (comments dropped)."""
        return ''.join(ins.symbol for ins in self.instructions)

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Flatten the program into the arrays the execution loop runs on.

        Returns:
            (opcodes, targets); targets holds the resolved jump index for
            loop instructions and the instruction's own index otherwise.
        """
        n = len(self.instructions)
        opcodes = np.empty(n, dtype=np.int32)
        targets = np.arange(n, dtype=np.int32)
        for i, ins in enumerate(self.instructions):
            opcodes[i] = ins.opcode
            if isinstance(ins, (LoopStart, LoopEnd)):
                targets[i] = ins.target
        return opcodes, targets

    def source_position(self, index: int) -> int:
        if 0 <= index < len(self.positions):
            return self.positions[index]
        return -1
