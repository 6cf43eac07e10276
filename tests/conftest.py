import stat

import pytest
from fastapi.testclient import TestClient

from core.config import settings
from main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    path = tmp_path / "work"
    monkeypatch.setattr(settings, "WORK_DIR", str(path))
    monkeypatch.setattr(settings, "COMPILER_TIMEOUT_SECONDS", None)
    monkeypatch.setattr(settings, "MAX_CONCURRENT_RUNS", 0)
    return path


@pytest.fixture
def use_compiler(tmp_path, monkeypatch, work_dir):
    """Install a shell script as the compiler and return its path."""

    def _use_compiler(body: str, name: str = "compii"):
        script = tmp_path / name
        script.write_text("#!/bin/sh\n" + body + "\n")
        script.chmod(script.stat().st_mode | stat.S_IEXEC)
        monkeypatch.setattr(settings, "COMPILER_PATH", str(script))
        return script

    return _use_compiler


@pytest.fixture
def client(work_dir):
    return TestClient(app)
