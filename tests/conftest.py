from __future__ import annotations

import io

import pytest
from rich.console import Console


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def out():
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in ("TFO_API_URL", "TFO_API_LOG_TOKEN", "TIMEOUT_S", "RUNNING_INTERVAL_S",
                 "COMPLETED_INTERVAL_S", "EXIT_ON_COMPLETE"):
        monkeypatch.delenv(name, raising=False)
    # keep a stray .env in the working tree out of Settings()
    monkeypatch.chdir(tmp_path)
