from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test without deployment-mode variables or a stray .env."""
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.chdir(str(tmp_path))
    return tmp_path


@pytest.fixture
def write_env_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write a .env file into the working directory."""

    def factory(content: str) -> Path:
        env = tmp_path / ".env"
        env.write_text(content)
        return env

    return factory
