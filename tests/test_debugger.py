"""Tests for the step-by-step debugger."""

import io

from bfcore.sinks import BufferSink
from brainfuck_debugger import BrainfuckDebugger


def trace(code, input_data=b"", **kwargs):
    stream = io.StringIO()
    sink = BufferSink(input_data)
    debugger = BrainfuckDebugger(stream=stream, **kwargs)
    outcome = debugger.debug_run(code, sink)
    return outcome, sink, stream.getvalue()


class TestBrainfuckDebugger:

    def test_doubling_trace(self):
        outcome, sink, text = trace(",[>++<-]>.", bytes([3]), show_memory_range=6)
        assert outcome.ok
        assert sink.output == bytes([6])
        assert "Step 1: Execute ',' at position 0" in text
        assert f"Halted after {outcome.steps} steps" in text
        assert "Output:   b'\\x06' → [6]" in text

    def test_pointer_caret_and_addresses(self):
        _, _, text = trace(">+", show_memory_range=4)
        assert "Memory:   [  0|  1|  0|  0]" in text
        assert "Pointer:         ^        " in text
        assert "Address:     0   1   2   3" in text

    def test_program_marker(self):
        _, _, text = trace("+-")
        assert "Program:  '+[-]'" in text
        assert "Program:  '+-[END]'" in text

    def test_jump_is_labelled(self):
        _, _, text = trace("[+]-")
        assert "Step 1: Execute '[' at position 0 (jump)" in text
        _, _, text = trace("+[-]-")
        assert "Step 2: Execute '[' at position 1" in text

    def test_failure_is_reported(self):
        outcome, _, text = trace("<")
        assert not outcome.ok
        assert "Failed after 0 steps" in text

    def test_caret_sits_under_pointed_cell(self):
        _, _, text = trace(">>>+", show_memory_range=6)
        lines = text.splitlines()
        memory_line = [l for l in lines if l.startswith("Memory:")][-1]
        pointer_line = [l for l in lines if l.startswith("Pointer:")][-1]
        address_line = [l for l in lines if l.startswith("Address:")][-1]
        column = pointer_line.index("^")
        assert address_line[column] == "3"
        assert memory_line[column] == "1"
