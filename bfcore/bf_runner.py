"""Glue between the loader, the loop resolver and the engine."""

from typing import Optional

from bfcore.loader import load_program
from bfcore.loops import resolve_loops
from bfcore.sinks import BufferSink, ByteSink
from brainfuck import RunOutcome, StepObserver, run


def run_program(code: str, sink: ByteSink, step_limit: Optional[int] = None,
                observer: Optional[StepObserver] = None) -> RunOutcome:
    """Resolve loops then execute. ResolutionError propagates before any step runs."""
    jump_table = resolve_loops(code)
    return run(code, jump_table, sink, step_limit=step_limit, observer=observer)


def run_file(path, sink: ByteSink, step_limit: Optional[int] = None,
             observer: Optional[StepObserver] = None) -> RunOutcome:
    """Load ``path`` and run it. LoadError and ResolutionError propagate."""
    code = load_program(path)
    return run_program(code, sink, step_limit=step_limit, observer=observer)


def run_once(code: str, input_data: bytes = b"", step_limit: Optional[int] = None) -> bytes:
    """Execute BF code against in-memory input, return everything it printed.
    Fresh tape each call. Fatal errors are raised rather than returned.
    """
    sink = BufferSink(input_data)
    outcome = run_program(code, sink, step_limit=step_limit)
    if not outcome.ok:
        raise outcome.error
    return sink.output
