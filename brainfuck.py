#!/usr/bin/env python3
"""
Brainfuck execution engine.

Runs program text against a byte sink one instruction at a time, using a
pre-resolved JumpTable for every loop jump. Characters outside the eight
commands are no-ops but still occupy a position in the text.

The tape is a fixed 32000 cells of unsigned bytes. Moving the pointer off
either end is a fatal OutOfBoundsError; reading past the end of input
stores 0 in the cell.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

import numpy as np

from bfcore.errors import BrainfuckError, OutOfBoundsError, StepLimitExceeded
from bfcore.loops import JumpTable, resolve_loops
from bfcore.sinks import ByteSink

logger = logging.getLogger(__name__)

TAPE_SIZE = 32000
EOF_SENTINEL = 0


class Status(Enum):
    RUNNING = "running"
    HALTED = "halted"
    FAILED = "failed"


class StepResult(Enum):
    ADVANCED = "advanced"
    JUMPED = "jumped"
    HALTED = "halted"


def new_tape(memory_size: int = TAPE_SIZE) -> np.ndarray:
    return np.zeros(memory_size, dtype=np.uint8)


@dataclass
class EngineState:
    """Everything a run mutates: pointers, tape and status."""

    memory: np.ndarray = field(default_factory=new_tape)
    pointer: int = 0
    instruction_pointer: int = 0
    status: Status = Status.RUNNING
    error: Optional[BrainfuckError] = None
    steps: int = 0

    @property
    def cell(self) -> int:
        return int(self.memory[self.pointer])

    @property
    def finished(self) -> bool:
        return self.status is not Status.RUNNING


@dataclass(frozen=True)
class RunOutcome:
    status: Status
    steps: int
    error: Optional[BrainfuckError] = None

    @property
    def ok(self) -> bool:
        return self.status is Status.HALTED


# Called after every successful step with (state, position, command, result)
StepObserver = Callable[[EngineState, int, str, StepResult], None]


class BrainfuckInterpreter:
    def __init__(self, code: str, sink: ByteSink, jump_table: Optional[JumpTable] = None,
                 step_limit: Optional[int] = None, observer: Optional[StepObserver] = None):
        self.code = code
        self.sink = sink
        self.jump_table = jump_table if jump_table is not None else resolve_loops(code)
        # 0 means no limit, as in BF_STEP_LIMIT
        self.step_limit = step_limit or None
        self.observer = observer

    def new_state(self, memory_size: int = TAPE_SIZE) -> EngineState:
        return EngineState(memory=new_tape(memory_size))

    def step(self, state: EngineState) -> StepResult:
        """Dispatch the instruction at ``state.instruction_pointer``.

        Halted states stay halted; a failed state re-raises its error.
        Raises OutOfBoundsError (after marking the state failed) when a
        move would leave the tape.
        """
        if state.status is Status.HALTED:
            return StepResult.HALTED
        if state.status is Status.FAILED:
            raise state.error

        code = self.code
        ip = state.instruction_pointer
        if ip >= len(code):
            state.status = Status.HALTED
            return StepResult.HALTED

        cmd = code[ip]
        memory = state.memory
        next_ip = ip + 1
        result = StepResult.ADVANCED

        if cmd == '>':
            if state.pointer + 1 >= len(memory):
                self._fail(state, OutOfBoundsError("right", state.pointer + 1))
            state.pointer += 1

        elif cmd == '<':
            if state.pointer - 1 < 0:
                self._fail(state, OutOfBoundsError("left", state.pointer - 1))
            state.pointer -= 1

        elif cmd == '+':
            memory[state.pointer] = (int(memory[state.pointer]) + 1) % 256

        elif cmd == '-':
            memory[state.pointer] = (int(memory[state.pointer]) - 1) % 256

        elif cmd == '.':
            self.sink.write_byte(state.cell)

        elif cmd == ',':
            value = self.sink.read_byte()
            memory[state.pointer] = EOF_SENTINEL if value is None else value & 0xFF

        elif cmd == '[':
            if state.cell == 0:
                next_ip = self.jump_table[ip] + 1
                result = StepResult.JUMPED

        elif cmd == ']':
            if state.cell != 0:
                next_ip = self.jump_table[ip] + 1
                result = StepResult.JUMPED

        state.instruction_pointer = next_ip
        state.steps += 1
        if next_ip >= len(code):
            state.status = Status.HALTED
            result = StepResult.HALTED

        if self.observer is not None:
            self.observer(state, ip, cmd, result)
        return result

    def run(self, state: Optional[EngineState] = None) -> RunOutcome:
        """Step until the program halts or fails; errors land in the outcome."""
        state = state if state is not None else self.new_state()
        limit = self.step_limit

        try:
            while not state.finished:
                if limit is not None and state.steps >= limit:
                    self._fail(state, StepLimitExceeded(limit))
                self.step(state)
        except BrainfuckError as e:
            # fatal errors are reported through the outcome
            if e is not state.error:
                raise

        logger.debug("run %s after %d step(s)", state.status.value, state.steps)
        return RunOutcome(status=state.status, steps=state.steps, error=state.error)

    @staticmethod
    def _fail(state: EngineState, error: BrainfuckError):
        state.status = Status.FAILED
        state.error = error
        raise error


def run(code: str, jump_table: JumpTable, sink: ByteSink, step_limit: Optional[int] = None,
        observer: Optional[StepObserver] = None, state: Optional[EngineState] = None) -> RunOutcome:
    """Execute ``code`` against ``sink`` using a pre-resolved jump table."""
    interpreter = BrainfuckInterpreter(code, sink, jump_table=jump_table,
                                       step_limit=step_limit, observer=observer)
    return interpreter.run(state)
