from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from javacomp.core.config import get_settings
from javacomp.main import create_app

from tests.fake_toolchain import FakeToolchain, install_fake_toolchain


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def fake_toolchain(tmp_path: Path) -> FakeToolchain:
    return install_fake_toolchain(tmp_path / "toolchain")


@pytest.fixture
def client(
    monkeypatch: pytest.MonkeyPatch, fake_toolchain: FakeToolchain, scratch_root: Path
) -> TestClient:
    monkeypatch.setenv("JAVACOMP_SCRATCH_ROOT", str(scratch_root))
    monkeypatch.setenv("JAVAC_COMMAND", str(fake_toolchain.javac))
    monkeypatch.setenv("JAVA_COMMAND", str(fake_toolchain.java))
    monkeypatch.setenv("RUN_TIMEOUT_MS", "1000")
    get_settings.cache_clear()
    return TestClient(create_app())
