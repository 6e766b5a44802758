from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np

from .compiler import BrainFuckCompiler
from .executor import DEFAULT_BATCH_STEPS, DEFAULT_TAPE_CAPACITY, Executor
from .streams import ByteSink


@dataclass(frozen=True)
class RunOptions:
    tape_capacity: int = DEFAULT_TAPE_CAPACITY
    strict: bool = False
    trace: bool = False
    batch_steps: int = DEFAULT_BATCH_STEPS


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape: np.ndarray
    pointer: int
    steps: int
    trace: List[str] = field(default_factory=list)


def run_string(
    source: str,
    input_data: Any = None,
    *,
    options: Optional[RunOptions] = None,
    output_sink: Any = None,
) -> RunResult:
    opts = RunOptions() if options is None else options
    program = BrainFuckCompiler(strict=opts.strict).compile(source)

    sink = ByteSink.wrap(output_sink, record=True)
    executor = Executor(tape_capacity=opts.tape_capacity, batch_steps=opts.batch_steps)
    trace_hook = (lambda line: None) if opts.trace else None
    state = executor.run(program, input_data, sink, trace=trace_hook)

    return RunResult(
        output=sink.getvalue(),
        tape=state.tape,
        pointer=state.pointer,
        steps=state.steps,
        trace=list(state.trace),
    )
