from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def templates_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures" / "templates"


@pytest.fixture(scope="session")
def read_template(templates_dir: Path) -> Callable[[str], str]:
    def _read(name: str) -> str:
        return (templates_dir / name).read_text(encoding="utf-8")

    return _read


class RecordingSink:
    """Collects `(start, end, message)` reports in call order."""

    __slots__ = ("reports",)

    def __init__(self) -> None:
        self.reports: list[tuple[int, int, str]] = []

    def __call__(self, start: int, end: int, message: str) -> None:
        self.reports.append((start, end, message))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def console_output() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    console = Console(file=buf, width=400, color_system=None, soft_wrap=True)
    return console, buf
