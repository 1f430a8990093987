from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from .errors import StepLimitError
from .jumps import JumpTable, build_jump_table
from .lexer import Instruction, Program, Source, load
from .state import VMState
from .tape import Tape

logger = logging.getLogger(__name__)

Chunk = Union[bytes, bytearray, memoryview, str]


class InputSource:
    """Finite input bytes read one at a time; chunks are concatenated in order."""

    def __init__(self, *chunks: Chunk):
        data = bytearray()
        for chunk in chunks:
            if isinstance(chunk, str):
                chunk = chunk.encode('utf-8')
            data += chunk
        self.data = bytes(data)
        self.position = 0

    def read(self) -> Optional[int]:
        """Next byte, or None once the input is exhausted."""
        if self.position >= len(self.data):
            return None
        b = self.data[self.position]
        self.position += 1
        return b

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.data)


class ByteSink:
    """Append-only in-memory output."""

    def __init__(self) -> None:
        self._chunks: List[bytes] = []

    def write(self, data: bytes) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b''.join(self._chunks)

    def __len__(self) -> int:
        return sum(len(c) for c in self._chunks)


class TeeSink:
    """Forward every write to each of the given sinks, in order."""

    def __init__(self, *sinks: Any):
        self.sinks = sinks

    def write(self, data: bytes) -> int:
        for sink in self.sinks:
            sink.write(data)
        return len(data)

    def flush(self) -> None:
        for sink in self.sinks:
            flush = getattr(sink, 'flush', None)
            if flush is not None:
                flush()


class VM:
    """
    Execution engine.

    Walks the instruction sequence from index 0, moving the cursor over
    the tape and doing I/O, until the instruction pointer runs past the
    last instruction. Every instruction is defined for every reachable
    state, so once constructed the VM can only halt (or hit a resource
    error from the host).
    """

    def __init__(
        self,
        program: Program,
        jumps: JumpTable,
        *,
        input_source: Optional[InputSource] = None,
        output: Any = None,
        tape: Optional[Tape] = None,
    ):
        self.program = program
        self.jumps = jumps
        self.input = input_source if input_source is not None else InputSource()
        self.output = output if output is not None else ByteSink()
        self.tape = tape if tape is not None else Tape()
        self.state = VMState()
        self.state.halted = len(program) == 0
        self._flush = getattr(self.output, 'flush', None)

    @classmethod
    def construct(
        cls,
        source: Source,
        *,
        input_source: Optional[InputSource] = None,
        output: Any = None,
        tape: Optional[Tape] = None,
    ) -> "VM":
        """Load ``source`` and resolve its loops; raises on unbalanced brackets."""
        program = load(source)
        jumps = build_jump_table(program)
        logger.debug("loaded %d instructions from %d source bytes", len(program), len(program.source))
        return cls(program, jumps, input_source=input_source, output=output, tape=tape)

    @property
    def cell(self) -> int:
        return self.tape[self.state.cursor]

    def step(self) -> bool:
        """Execute one instruction. Returns True once the VM has halted."""
        state = self.state
        if state.halted:
            return True

        op = self.program.instructions[state.ip]
        tape = self.tape

        if op is Instruction.MOVE_RIGHT:
            state.cursor += 1
            tape.visit(state.cursor)
        elif op is Instruction.MOVE_LEFT:
            state.cursor -= 1
            tape.visit(state.cursor)
        elif op is Instruction.INCREMENT:
            tape[state.cursor] = tape[state.cursor] + 1
        elif op is Instruction.DECREMENT:
            tape[state.cursor] = tape[state.cursor] + 255
        elif op is Instruction.OUTPUT:
            self.output.write(bytes((tape[state.cursor],)))
            if self._flush is not None:
                self._flush()
        elif op is Instruction.INPUT:
            b = self.input.read()
            tape[state.cursor] = 0 if b is None else b
            state.input_pos = self.input.position
        elif op is Instruction.JUMP_IF_ZERO:
            if tape[state.cursor] == 0:
                state.ip = int(self.jumps.targets[state.ip])
        elif op is Instruction.JUMP_BACK:
            if tape[state.cursor] != 0:
                state.ip = int(self.jumps.targets[state.ip])

        state.ip += 1
        state.steps += 1
        if state.ip >= len(self.program):
            state.halted = True
        return state.halted

    def run(self, max_steps: Optional[int] = None) -> int:
        """Run until halted and return the number of instructions executed.

        With ``max_steps`` set, raise StepLimitError if the program is
        still running after that many instructions.
        """
        state = self.state
        start = state.steps
        step = self.step
        while not state.halted:
            if max_steps is not None and state.steps - start >= max_steps:
                raise StepLimitError(
                    message=f"program still running after {max_steps} steps (ip={state.ip})",
                    steps=state.steps - start,
                )
            step()
        executed = state.steps - start
        logger.debug("halted after %d steps, cursor=%d", executed, state.cursor)
        return executed
