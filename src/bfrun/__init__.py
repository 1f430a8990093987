from .lexer import Instruction, Program, filter_source, load
from .jumps import JumpTable, build_jump_table
from .tape import Tape
from .vm import VM, ByteSink, InputSource, TeeSink
from .errors import (
    BFError,
    BFSyntaxError,
    StepLimitError,
    TapeMemoryError,
    UnmatchedCloserError,
    UnmatchedOpenerError,
)
from .api import RunOptions, RunResult, run_bytes, run_file, run_string

__all__ = [
    'Instruction',
    'Program',
    'filter_source',
    'load',
    'JumpTable',
    'build_jump_table',
    'Tape',
    'VM',
    'ByteSink',
    'InputSource',
    'TeeSink',
    'BFError',
    'BFSyntaxError',
    'StepLimitError',
    'TapeMemoryError',
    'UnmatchedCloserError',
    'UnmatchedOpenerError',
    'RunOptions',
    'RunResult',
    'run_bytes',
    'run_file',
    'run_string',
]
