import pytest
from src.test.fakes import CapturingLog

@pytest.fixture
def capture_log():
    return CapturingLog()

@pytest.fixture(autouse=True)
def default_log_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
