from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .errors import BFError
from .tape import Tape
from .vm import VM, ByteSink, InputSource, TeeSink

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Run a Brainfuck program on an unbounded tape of 8-bit wrapping cells.",
        epilog="At least one of --output or --print is required. "
               "Input bytes are the --stream text followed by the --input file contents.",
    )
    parser.add_argument("source", help="program source file")
    parser.add_argument("-o", "--output", metavar="FILE", help="write program output to FILE")
    parser.add_argument("-i", "--input", metavar="FILE", help="read program input from FILE")
    parser.add_argument("-s", "--stream", metavar="TEXT", help="use TEXT (UTF-8) as program input")
    parser.add_argument("-p", "--print", dest="print_screen", action="store_true",
                        help="print program output to stdout")
    parser.add_argument("--max-steps", type=int, default=None, metavar="N",
                        help="abort if the program has not halted after N instructions")
    parser.add_argument("-v", "--verbose", action="store_true", help="log load/run details to stderr")
    return parser


def _fetch_input(args: argparse.Namespace) -> InputSource:
    chunks: List[Any] = []
    if args.stream is not None:
        chunks.append(args.stream)
    if args.input is not None:
        chunks.append(Path(args.input).read_bytes())
    return InputSource(*chunks)


def main(argv: Optional[List[str]] = None, *, stdout: Any = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.print_screen and args.output is None:
        parser.error("no output file or print flag")
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must be non-negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        source = Path(args.source).read_bytes()
        input_source = _fetch_input(args)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        collected = ByteSink()
        if args.print_screen:
            screen = stdout if stdout is not None else sys.stdout.buffer
            sink: Any = TeeSink(screen, collected)
        else:
            screen = None
            sink = collected

        vm = VM.construct(source, input_source=input_source, output=sink, tape=Tape())
        vm.run(max_steps=args.max_steps)
        logger.info("consumed %d input bytes, wrote %d output bytes", vm.state.input_pos, len(collected))

        if screen is not None:
            screen.write(b"\n")
            flush = getattr(screen, "flush", None)
            if flush is not None:
                flush()
        if args.output is not None:
            Path(args.output).write_bytes(collected.getvalue())
    except BFError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
