"""
Error taxonomy for the interpreter.

Every fatal condition is a BrainfuckError carrying the process exit code
the command line reports for it. End of input on ',' is not an error.
"""

from typing import Iterable, Tuple


class BrainfuckError(Exception):
    """Base class for all fatal interpreter conditions."""

    exit_code = 1


class LoadError(BrainfuckError):
    """The program file is missing or unreadable."""

    exit_code = 3

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot load program '{path}': {reason}")


class ResolutionError(BrainfuckError, SyntaxError):
    """Bracket structure is invalid; raised before any instruction runs."""

    exit_code = 4


class UnmatchedCloseError(ResolutionError):
    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Unmatched ']' at position {position}")


class UnmatchedOpenError(ResolutionError):
    def __init__(self, positions: Iterable[int]):
        self.positions: Tuple[int, ...] = tuple(positions)
        listed = ", ".join(str(p) for p in self.positions)
        super().__init__(f"Unmatched '[' at position(s) {listed}")


class OutOfBoundsError(BrainfuckError, IndexError):
    """The data pointer would leave the tape."""

    exit_code = 5

    def __init__(self, direction: str, position: int):
        self.direction = direction
        self.position = position
        super().__init__(f"data pointer moved {direction} out of the tape (to cell {position})")


class StepLimitExceeded(BrainfuckError):
    """The host-imposed step budget ran out before the program halted."""

    exit_code = 6

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"program exceeded the step limit of {limit}")
