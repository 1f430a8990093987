from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from .errors import UnmatchedCloserError, UnmatchedOpenerError, make_syntax_error
from .lexer import Instruction, Program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JumpTable:
    """
    Matching partner of every bracket, in both directions.

    ``targets[i]`` is the index of the partner of the bracket at ``i``;
    slots of non-bracket instructions point at themselves.
    """

    targets: np.ndarray

    def partner(self, index: int) -> int:
        target = int(self.targets[index])
        if target == index:
            raise KeyError(index)
        return target

    def pairs(self) -> Iterator[Tuple[int, int]]:
        """Yield (opener, closer) pairs in opener order."""
        for i, t in enumerate(self.targets.tolist()):
            if t > i:
                yield i, t

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int) or not 0 <= index < len(self.targets):
            return False
        return int(self.targets[index]) != index

    def __len__(self) -> int:
        return int(np.count_nonzero(self.targets != np.arange(len(self.targets)))) // 2


def build_jump_table(program: Program) -> JumpTable:
    """Resolve every bracket pair in one forward scan.

    Raises UnmatchedCloserError or UnmatchedOpenerError; nothing runs
    before this has succeeded.
    """
    targets = np.arange(len(program), dtype=np.int32)
    stack: List[int] = []

    for i, op in enumerate(program.instructions):
        if op is Instruction.JUMP_IF_ZERO:
            stack.append(i)
        elif op is Instruction.JUMP_BACK:
            if not stack:
                raise make_syntax_error(
                    UnmatchedCloserError,
                    message="unmatched ']'",
                    source=program.source,
                    offset=program.offsets[i],
                )
            start = stack.pop()
            targets[start] = i
            targets[i] = start

    if stack:
        raise make_syntax_error(
            UnmatchedOpenerError,
            message=f"unmatched '[' ({len(stack)} left open)",
            source=program.source,
            offset=program.offsets[stack[-1]],
        )

    table = JumpTable(targets=targets)
    logger.debug("resolved %d loop pairs over %d instructions", len(table), len(program))
    return table
