from __future__ import annotations

from dataclasses import dataclass


@dataclass
class VMState:
    ip: int = 0  # instruction pointer
    cursor: int = 0  # tape position
    input_pos: int = 0  # bytes consumed from the input source
    steps: int = 0
    halted: bool = False

    def reset(self) -> None:
        self.ip = 0
        self.cursor = 0
        self.input_pos = 0
        self.steps = 0
        self.halted = False
