from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .instructions import Program


def new_tape(capacity: int) -> np.ndarray:
    if capacity < 1:
        raise ValueError(f'Tape capacity must be at least 1, got {capacity}')
    return np.zeros(capacity, dtype=np.uint8)


def render_tape(tape: np.ndarray) -> str:
    """Render every cell as a 3-wide decimal field between '|' delimiters."""
    return ''.join(f"|{int(v):>3}|" for v in tape)


@dataclass
class ExecutionState:
    program: Program
    tape: np.ndarray
    pointer: int = 0
    pc: int = 0
    steps: int = 0
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    @property
    def capacity(self) -> int:
        return len(self.tape)

    @property
    def halted(self) -> bool:
        return self.pc >= len(self.program)

    @property
    def current(self) -> int:
        return int(self.tape[self.pointer])

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
