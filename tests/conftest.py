"""Shared test fixtures for heat-reporter."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from heat_reporter.config import reset_settings

SOURCE_CODE = """\
class Invoice:
    def __init__(self, lines):
        self.lines = lines

    def total(self):
        return sum(line.amount for line in self.lines)

    def average(self):
        return self.total() / len(self.lines)
"""

TEST_CODE = """\
from lib.invoice import Invoice


def test_total():
    assert Invoice([]).total() == 0


def test_average():
    assert Invoice([]).average() == 0
"""


@pytest.fixture(autouse=True)
def reset_heat_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from default settings, ignoring any HEAT_* environment."""
    for name in list(os.environ):
        if name.startswith("HEAT_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary project root, made the working directory for the test."""
    (tmp_path / "lib").mkdir()
    (tmp_path / "tests").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_file(project_dir: Path) -> Callable[[str, str], Path]:
    """Factory writing a file relative to the project root."""

    def _write(relative_path: str, content: str) -> Path:
        path = project_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def source_file(write_file: Callable[[str, str], Path]) -> Path:
    """Project source code: ``lib/invoice.py``."""
    return write_file("lib/invoice.py", SOURCE_CODE)


@pytest.fixture
def test_file(write_file: Callable[[str, str], Path]) -> Path:
    """Project test code: ``tests/test_invoice.py``."""
    return write_file("tests/test_invoice.py", TEST_CODE)


@pytest.fixture
def vendored_file(write_file: Callable[[str, str], Path]) -> Path:
    """Third-party code installed inside the project."""
    return write_file(".venv/lib/python3.12/site-packages/money/core.py", "def add():\n    pass\n")
