"""
Loop resolution: pair every '[' with its matching ']' in one scan.

The resulting JumpTable is what the engine consults on every jump, so a
loop-open or loop-close never has to rescan the program text.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

from bfcore.errors import UnmatchedCloseError, UnmatchedOpenError

logger = logging.getLogger(__name__)


class JumpTable:
    """Immutable, bidirectional map between matching bracket positions."""

    __slots__ = ("_opens", "_closes")

    def __init__(self, opens: Dict[int, int]):
        self._opens = MappingProxyType(dict(opens))
        self._closes = MappingProxyType({close: open_ for open_, close in opens.items()})

    @property
    def opens(self) -> Mapping[int, int]:
        """Open position -> close position."""
        return self._opens

    @property
    def closes(self) -> Mapping[int, int]:
        """Close position -> open position."""
        return self._closes

    def __getitem__(self, position: int) -> int:
        if position in self._opens:
            return self._opens[position]
        return self._closes[position]

    def __contains__(self, position) -> bool:
        return position in self._opens or position in self._closes

    def __len__(self) -> int:
        return len(self._opens)

    def __eq__(self, other) -> bool:
        if not isinstance(other, JumpTable):
            return NotImplemented
        return dict(self._opens) == dict(other._opens)

    def __repr__(self) -> str:
        return f"JumpTable({dict(sorted(self._opens.items()))})"

    def pairs(self) -> Iterator[Tuple[int, int]]:
        return iter(sorted(self._opens.items()))


def resolve_loops(code: str) -> JumpTable:
    """Build the jump table for ``code``.

    Raises UnmatchedCloseError at the first ']' with nothing open, or
    UnmatchedOpenError naming every '[' still open at the end of the text.
    """
    opens: Dict[int, int] = {}
    stack: List[int] = []

    for i, cmd in enumerate(code):
        if cmd == '[':
            stack.append(i)
        elif cmd == ']':
            if not stack:
                raise UnmatchedCloseError(i)
            opens[stack.pop()] = i

    if stack:
        raise UnmatchedOpenError(stack)

    logger.debug("resolved %d loop pair(s) in %d characters", len(opens), len(code))
    return JumpTable(opens)
