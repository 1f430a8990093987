from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union

Source = Union[bytes, bytearray, memoryview, str]


class Instruction(IntEnum):
    """The eight instructions; each value is the byte of its source symbol."""

    MOVE_RIGHT = ord('>')
    MOVE_LEFT = ord('<')
    INCREMENT = ord('+')
    DECREMENT = ord('-')
    OUTPUT = ord('.')
    INPUT = ord(',')
    JUMP_IF_ZERO = ord('[')
    JUMP_BACK = ord(']')

    @property
    def symbol(self) -> str:
        return chr(self.value)


CODE_BYTES = frozenset(int(op) for op in Instruction)


@dataclass(frozen=True)
class Program:
    instructions: Tuple[Instruction, ...]
    offsets: Tuple[int, ...]  # source byte offset of each instruction
    source: bytes

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def to_source(self) -> bytes:
        return bytes(self.instructions)


def _as_bytes(source: Source) -> bytes:
    if isinstance(source, str):
        return source.encode('utf-8')
    return bytes(source)


def is_code_byte(b: int) -> bool:
    return b in CODE_BYTES


def filter_source(source: Source) -> bytes:
    """Drop every byte that is not one of the eight instruction symbols."""
    return bytes(b for b in _as_bytes(source) if b in CODE_BYTES)


def load(source: Source) -> Program:
    """
    Map the raw source to its instruction sequence.

    Any byte sequence is acceptable here; bracket balance is checked by
    the jump table builder.
    """
    raw = _as_bytes(source)
    instructions = []
    offsets = []
    for pos, b in enumerate(raw):
        if b in CODE_BYTES:
            instructions.append(Instruction(b))
            offsets.append(pos)
    return Program(instructions=tuple(instructions), offsets=tuple(offsets), source=raw)
