from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
from numba import njit

from .errors import TapeBoundsError, make_bounds_error, make_stream_error
from .instructions import (
    OP_DECREMENT,
    OP_INCREMENT,
    OP_LOOP_END,
    OP_LOOP_START,
    OP_MOVE_NEXT,
    OP_MOVE_PREVIOUS,
    OP_PRINT,
    OP_READ,
    Program,
)
from .state import ExecutionState, new_tape, render_tape
from .streams import ByteSink, ByteSource

DEFAULT_TAPE_CAPACITY = 30000
DEFAULT_BATCH_STEPS = 50000

CARRIAGE_RETURN = 0x0D
NEWLINE = 0x0A

# Stop reasons reported by run_batch
STOP_HALT = 0
STOP_PRINT = 1
STOP_READ = 2
STOP_BOUNDS = 3
STOP_BATCH = 4

TraceHook = Callable[[str], None]


@njit(cache=True)
def run_batch(opcodes, targets, tape, pc, pointer, max_steps):
    """
    JIT-compiled execution loop for everything except I/O.

    Stops in front of Read/Print and in front of a move that would leave the
    tape; in both cases pc stays on that instruction and nothing is mutated.
    """
    prog_len = len(opcodes)
    last_cell = len(tape) - 1
    stop_reason = STOP_BATCH
    steps = 0

    while pc < prog_len and steps < max_steps:
        command = opcodes[pc]

        if command == OP_INCREMENT:
            tape[pointer] = (tape[pointer] + 1) & 255
        elif command == OP_DECREMENT:
            tape[pointer] = (tape[pointer] - 1) & 255
        elif command == OP_MOVE_NEXT:
            if pointer == last_cell:
                stop_reason = STOP_BOUNDS
                break
            pointer += 1
        elif command == OP_MOVE_PREVIOUS:
            if pointer == 0:
                stop_reason = STOP_BOUNDS
                break
            pointer -= 1
        elif command == OP_LOOP_START:
            if tape[pointer] == 0:
                pc = targets[pc]
        elif command == OP_LOOP_END:
            if tape[pointer] != 0:
                pc = targets[pc]
        elif command == OP_PRINT:
            stop_reason = STOP_PRINT
            break
        elif command == OP_READ:
            stop_reason = STOP_READ
            break

        pc += 1
        steps += 1

    if pc >= prog_len:
        stop_reason = STOP_HALT

    return pc, pointer, stop_reason, steps


class Executor:
    """
    Runs a compiled Program against a fixed-capacity byte tape.

    Plain instructions run in jitted batches of ``batch_steps``; Read and
    Print are handled here so the input source and output sink can be any
    Python object. A trace hook forces single-instruction batches and is
    called with the rendered tape after every completed instruction.
    """

    def __init__(self, tape_capacity: int = DEFAULT_TAPE_CAPACITY, batch_steps: int = DEFAULT_BATCH_STEPS):
        if tape_capacity < 1:
            raise ValueError(f'Tape capacity must be at least 1, got {tape_capacity}')
        if batch_steps < 1:
            raise ValueError(f'Batch size must be at least 1, got {batch_steps}')
        self.tape_capacity = int(tape_capacity)
        self.batch_steps = int(batch_steps)

    def run(
        self,
        program: Program,
        input_stream: Any = None,
        output_sink: Any = None,
        *,
        trace: Optional[TraceHook] = None,
    ) -> ExecutionState:
        """
        Execute ``program`` until the instruction pointer passes its end.

        Returns:
            The final ExecutionState (tape, pointer, step count, trace lines).

        Raises:
            TapeBoundsError: a move would take the pointer off the tape.
            StreamError: reading input or writing output failed.
        """
        source = ByteSource.wrap(input_stream)
        sink = ByteSink.wrap(output_sink)
        state = ExecutionState(
            program=program,
            tape=new_tape(self.tape_capacity),
            is_tracing=trace is not None,
        )
        opcodes, targets = program.to_arrays()
        budget = 1 if trace is not None else self.batch_steps

        while not state.halted:
            pc, pointer, stop_reason, steps = run_batch(
                opcodes, targets, state.tape, state.pc, state.pointer, budget
            )
            state.pc = int(pc)
            state.pointer = int(pointer)
            state.steps += int(steps)
            if steps:
                self._record(state, trace)

            if stop_reason == STOP_PRINT:
                self._print(state, sink)
                self._record(state, trace)
            elif stop_reason == STOP_READ:
                self._read(state, source)
                self._record(state, trace)
            elif stop_reason == STOP_BOUNDS:
                raise self._bounds_error(state, opcodes)

        return state

    def _print(self, state: ExecutionState, sink: ByteSink) -> None:
        try:
            sink.write_byte(state.current)
        except (OSError, ValueError) as exc:
            raise make_stream_error(
                message=f'failed to write output: {exc}', pc=state.pc, pointer=state.pointer
            ) from exc
        state.pc += 1
        state.steps += 1

    def _read(self, state: ExecutionState, source: ByteSource) -> None:
        while True:
            try:
                value = source.read_byte()
            except (OSError, ValueError) as exc:
                raise make_stream_error(
                    message=f'failed to read input: {exc}', pc=state.pc, pointer=state.pointer
                ) from exc
            if value != CARRIAGE_RETURN:
                break

        # End of input and newline both read as 0
        if value is None or value == NEWLINE:
            value = 0
        state.tape[state.pointer] = value
        state.pc += 1
        state.steps += 1

    def _bounds_error(self, state: ExecutionState, opcodes: np.ndarray) -> TapeBoundsError:
        if opcodes[state.pc] == OP_MOVE_NEXT:
            message = 'moved past the end of the tape'
        else:
            message = 'moved before the start of the tape'
        return make_bounds_error(
            message=message, pc=state.pc, pointer=state.pointer, capacity=state.capacity
        )

    @staticmethod
    def _record(state: ExecutionState, trace: Optional[TraceHook]) -> None:
        if trace is None:
            return
        line = render_tape(state.tape)
        state.add_trace(line)
        trace(line)


def execute(
    program: Program,
    tape_capacity: int = DEFAULT_TAPE_CAPACITY,
    input_stream: Any = None,
    output_sink: Any = None,
    *,
    trace: Optional[TraceHook] = None,
) -> np.ndarray:
    """Run ``program`` on a fresh tape and return the final tape."""
    return Executor(tape_capacity).run(program, input_stream, output_sink, trace=trace).tape
