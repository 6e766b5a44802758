
from .compiler import BrainFuckCompiler, compile_program
from .validator import check, validate
from .executor import DEFAULT_TAPE_CAPACITY, Executor, execute
from .instructions import (
    Decrement,
    Increment,
    Instruction,
    LoopEnd,
    LoopStart,
    MoveNext,
    MovePrevious,
    Print,
    Program,
    Read,
)
from .errors import (
    BFError,
    BFRuntimeError,
    BFSyntaxError,
    StreamError,
    TapeBoundsError,
    UnbalancedBracketError,
    UnrecognizedSymbolError,
)
from .state import ExecutionState, render_tape
from .api import RunOptions, RunResult, run_string

__all__ = [
    'BrainFuckCompiler',
    'compile_program',
    'check',
    'validate',
    'DEFAULT_TAPE_CAPACITY',
    'Executor',
    'execute',
    'Instruction',
    'Increment',
    'Decrement',
    'MoveNext',
    'MovePrevious',
    'LoopStart',
    'LoopEnd',
    'Read',
    'Print',
    'Program',
    'BFError',
    'BFSyntaxError',
    'UnbalancedBracketError',
    'UnrecognizedSymbolError',
    'BFRuntimeError',
    'TapeBoundsError',
    'StreamError',
    'ExecutionState',
    'render_tape',
    'RunOptions',
    'RunResult',
    'run_string',
]
