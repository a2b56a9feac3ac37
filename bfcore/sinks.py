"""
Byte I/O capabilities handed to the engine.

A sink provides ``read_byte() -> Optional[int]`` (None at end of stream)
and ``write_byte(value)``.
"""

import sys
from typing import BinaryIO, Optional, Protocol


class ByteSink(Protocol):
    def read_byte(self) -> Optional[int]:
        ...

    def write_byte(self, value: int) -> None:
        ...


class BufferSink:
    """In-memory sink: reads from a fixed byte string, collects output."""

    def __init__(self, input_data: bytes = b""):
        if isinstance(input_data, str):
            input_data = input_data.encode("latin-1")
        self._input = bytes(input_data)
        self._input_index = 0
        self._output = bytearray()
        self.input_reads = 0
        self.output_writes = 0

    def read_byte(self) -> Optional[int]:
        if self._input_index >= len(self._input):
            return None
        value = self._input[self._input_index]
        self._input_index += 1
        self.input_reads += 1
        return value

    def write_byte(self, value: int) -> None:
        self._output.append(value)
        self.output_writes += 1

    @property
    def output(self) -> bytes:
        return bytes(self._output)


class StreamSink:
    """Sink over binary streams, stdin/stdout by default.

    Pending output is flushed before every blocking read so prompts show up.
    """

    def __init__(self, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

    def read_byte(self) -> Optional[int]:
        self.flush()
        data = self.stdin.read(1)
        if not data:
            return None
        return data[0]

    def write_byte(self, value: int) -> None:
        self.stdout.write(bytes((value,)))

    def flush(self) -> None:
        self.stdout.flush()

    def close(self) -> None:
        self.flush()
