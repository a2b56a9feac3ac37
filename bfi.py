#!/usr/bin/env python3
"""
Run a Brainfuck program file.

    bfi hello.bf
    bfi --trace --trace-window 8 doubling.bf < input.bin

Program output goes to stdout, traces and error messages to stderr.
Exit status: 0 on normal halt, otherwise the exit_code of the error kind.
"""

import argparse
import logging
import sys
from typing import List, Optional

from bfcore.bf_runner import run_file
from bfcore.config import LOG_LEVELS, Settings
from bfcore.errors import BrainfuckError
from bfcore.loader import load_program
from bfcore.sinks import StreamSink
from brainfuck_debugger import BrainfuckDebugger

logger = logging.getLogger("bfi")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bfi", description="Brainfuck interpreter with a fixed 32000-cell tape")
    ap.add_argument("program", help="Path to the Brainfuck source file")
    ap.add_argument("--step-limit", type=int, default=None,
                    help="Stop after this many instructions (default: BF_STEP_LIMIT, or unlimited)")
    ap.add_argument("--trace", action="store_true", help="Print machine state after every step to stderr")
    ap.add_argument("--trace-window", type=int, default=None, help="Tape cells shown per trace frame")
    ap.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                    help="Logging level (default: BF_LOG_LEVEL or WARNING)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"bfi: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=args.log_level or settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    step_limit = args.step_limit if args.step_limit is not None else settings.step_limit
    if step_limit is not None and step_limit <= 0:
        step_limit = None
    trace_window = args.trace_window if args.trace_window is not None else settings.trace_window

    sink = StreamSink()
    try:
        if args.trace:
            code = load_program(args.program)
            debugger = BrainfuckDebugger(show_memory_range=trace_window)
            outcome = debugger.debug_run(code, sink, step_limit=step_limit)
        else:
            outcome = run_file(args.program, sink, step_limit=step_limit)
    except BrainfuckError as e:
        # load and bracket errors: nothing was executed
        print(f"bfi: {e}", file=sys.stderr)
        return e.exit_code
    finally:
        sink.close()

    if not outcome.ok:
        print(f"bfi: {outcome.error}", file=sys.stderr)
        return outcome.error.exit_code

    logger.debug("%s halted normally after %d steps", args.program, outcome.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
