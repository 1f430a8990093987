from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from .tape import Tape
from .vm import VM, ByteSink, InputSource, TeeSink
from .lexer import Source

InputData = Union[bytes, bytearray, str, InputSource]


@dataclass(frozen=True)
class RunOptions:
    max_steps: Optional[int] = None
    initial_tape_size: int = 64


@dataclass(frozen=True)
class RunResult:
    output: bytes
    steps: int
    cursor: int
    cell: int
    input_consumed: int
    tape: bytes


def run_bytes(
    source: Source,
    input_data: InputData = b"",
    *,
    output: Any = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    """
    Load and run a program to completion.

    Output bytes are always collected into ``RunResult.output``; when an
    ``output`` sink is given they are also written to it as they are
    produced. Unbalanced brackets raise before anything executes.
    """
    options = options or RunOptions()
    inp = input_data if isinstance(input_data, InputSource) else InputSource(input_data)
    collected = ByteSink()
    sink = collected if output is None else TeeSink(output, collected)

    vm = VM.construct(
        source,
        input_source=inp,
        output=sink,
        tape=Tape(options.initial_tape_size),
    )
    steps = vm.run(max_steps=options.max_steps)
    return RunResult(
        output=collected.getvalue(),
        steps=steps,
        cursor=vm.state.cursor,
        cell=vm.cell,
        input_consumed=vm.state.input_pos,
        tape=vm.tape.window(),
    )


def run_string(
    source: str,
    input_data: InputData = "",
    *,
    output: Any = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    return run_bytes(source, input_data, output=output, options=options)


def run_file(
    path: Union[str, Path],
    input_data: InputData = b"",
    *,
    output: Any = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    p = Path(path)
    return run_bytes(p.read_bytes(), input_data, output=output, options=options)
