from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _locate(source: bytes, offset: int) -> Tuple[int, int]:
    line = source.count(b'\n', 0, offset) + 1
    column = offset - (source.rfind(b'\n', 0, offset) + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"  {'':4s} | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if "unmatched ']'" in msg:
        return "Every ']' needs an earlier '[' that is still open. Remove it or add the missing '['."
    if "unmatched '['" in msg:
        return "Every '[' must be closed by a later ']'. Check nested loops for a missing ']'."
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFError):
    offset: int
    line: int
    column: int
    context: str


class UnmatchedCloserError(BFSyntaxError):
    """A ']' with no open '[' before it."""


class UnmatchedOpenerError(BFSyntaxError):
    """A '[' that is never closed."""


@dataclass
class TapeMemoryError(BFError):
    cells: int


@dataclass
class StepLimitError(BFError):
    steps: int


def make_syntax_error(cls: type, *, message: str, source: bytes, offset: int) -> BFSyntaxError:
    line, column = _locate(source, offset)
    lines = source.decode('latin-1').split('\n')
    ctx = _build_context(lines, line, column)
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"SyntaxError: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        offset=offset,
        line=line,
        column=column,
        context=ctx,
    )
