#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Shows the execution of a Brainfuck program one instruction at a time,
displaying the program position, the memory tape around the pointer and
the output produced so far after every step.
"""

import sys
from typing import Optional, TextIO

from bfcore.bf_runner import run_program
from bfcore.config import DEFAULT_TRACE_WINDOW
from brainfuck import EngineState, RunOutcome, StepResult

# Program text longer than this is shown as a window around the IP
PROGRAM_WINDOW = 60


class BrainfuckDebugger:
    """Renders engine state after every step through the engine's observer hook."""

    def __init__(self, show_memory_range: int = DEFAULT_TRACE_WINDOW, stream: Optional[TextIO] = None):
        self.show_memory_range = max(1, show_memory_range)
        self.stream = stream if stream is not None else sys.stderr
        self.code = ""
        self.output = bytearray()

    def debug_run(self, code: str, sink, step_limit: Optional[int] = None) -> RunOutcome:
        """Execute ``code`` against ``sink`` while tracing each step."""
        self.code = code
        self.output = bytearray()
        self._print(f"Program: {len(code)} characters")
        self._print("=" * 80)

        outcome = run_program(code, _RecordingSink(sink, self.output),
                              step_limit=step_limit, observer=self.on_step)

        if outcome.ok:
            self._print(f"\nHalted after {outcome.steps} steps")
        else:
            self._print(f"\nFailed after {outcome.steps} steps: {outcome.error}")
        self._print(f"Output: {bytes(self.output)!r}")
        return outcome

    def on_step(self, state: EngineState, position: int, cmd: str, result: StepResult):
        jumped = " (jump)" if result is StepResult.JUMPED else ""
        self._print(f"\nStep {state.steps}: Execute {cmd!r} at position {position}{jumped}")
        self._show_state(state, f"AFTER STEP {state.steps}")

    def _show_state(self, state: EngineState, label: str):
        """Show current state of memory, pointer, and program."""
        self._print(f"{label}:")

        # Show program with instruction pointer
        ip = state.instruction_pointer
        start = max(0, ip - PROGRAM_WINDOW // 2)
        end = min(len(self.code), start + PROGRAM_WINDOW)
        program_display = ""
        for i in range(start, end):
            cmd = self.code[i]
            if i == ip:
                program_display += f"[{cmd}]"
            else:
                program_display += cmd
        if ip >= len(self.code):
            program_display += "[END]"
        self._print(f"Program:  {program_display!r}")

        # Show memory tape (focused around pointer)
        memory = state.memory
        start = max(0, state.pointer - self.show_memory_range // 2)
        end = min(len(memory), start + self.show_memory_range)

        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)

        memory_vals = [f"{v:3d}" for v in memory[start:end].tolist()]
        memory_ptrs = ["  ^" if i == state.pointer else "   " for i in range(start, end)]
        memory_addrs = [f"{i:3d}" for i in range(start, end)]

        self._print("Memory:   [" + "|".join(memory_vals) + "]")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))

        if self.output:
            self._print(f"Output:   {bytes(self.output)!r} → {list(self.output)}")
        else:
            self._print("Output:   (empty)")

    def _print(self, text: str):
        print(text, file=self.stream)


class _RecordingSink:
    """Forwards to the real sink while keeping a copy of the output."""

    def __init__(self, sink, record: bytearray):
        self._sink = sink
        self._record = record

    def read_byte(self):
        return self._sink.read_byte()

    def write_byte(self, value: int) -> None:
        self._record.append(value)
        self._sink.write_byte(value)


if __name__ == "__main__":
    from bfcore.sinks import BufferSink

    # Example run if called directly: doubling program, f(x) = 2*x
    debugger = BrainfuckDebugger(show_memory_range=6, stream=sys.stdout)
    debugger.debug_run(",[>++<-]>.", BufferSink(bytes([3])))
