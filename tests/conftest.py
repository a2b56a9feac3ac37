import pytest

from bfcore.sinks import BufferSink


@pytest.fixture
def sink():
    return BufferSink()


@pytest.fixture(autouse=True)
def _clean_bf_env(monkeypatch):
    for name in ("BF_STEP_LIMIT", "BF_LOG_LEVEL", "BF_TRACE_WINDOW"):
        monkeypatch.delenv(name, raising=False)
