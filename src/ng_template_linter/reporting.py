"""
Presentation of located diagnostics.

Text output goes through rich (old names red, new names green, context bold).
JSON output goes through pydantic models so reports can be read back.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from ._typing import override
from .template_syntax.position import line_text
from .types import LocatedDiagnostic
from .types import MessageSlot
from .types import SlotRole

T = TypeVar("T", bound=BaseModel)

_ROLE_STYLES: dict[SlotRole, str] = {
    SlotRole.OLD: "red",
    SlotRole.NEW: "green",
    SlotRole.CONTEXT: "bold",
}


def rich_style(slot: MessageSlot) -> str:
    style = _ROLE_STYLES[slot.role]
    return f"[{style}]{escape(slot.value)}[/{style}]"


class DiagnosticModel(BaseModel):
    rule: str
    path: str | None = None
    start: int
    end: int
    line: int | None = None
    column: int | None = None
    message: str


class ScanReport(BaseModel):
    files: int = 0
    diagnostics: list[DiagnosticModel] = []

    @property
    def has_diagnostics(self) -> bool:
        return bool(self.diagnostics)


def diagnostic_model(
    diagnostic: LocatedDiagnostic,
    source: str | None = None,
) -> DiagnosticModel:
    line = column = None
    if source is not None:
        line, column = diagnostic.position(source)
    return DiagnosticModel(
        rule=diagnostic.rule,
        path=diagnostic.path,
        start=diagnostic.start,
        end=diagnostic.end,
        line=line,
        column=column,
        message=diagnostic.message.render(),
    )


class Serializer(ABC, Generic[T]):
    @abstractmethod
    def encode(self, message: BaseModel) -> bytes: ...

    @abstractmethod
    def decode(self, data: bytes, model_type: type[T]) -> T: ...


class JsonSerializer(Serializer[T]):
    @override
    def encode(self, message: BaseModel) -> bytes:
        return message.model_dump_json(exclude_none=True, indent=2).encode()

    @override
    def decode(self, data: bytes, model_type: type[T]) -> T:
        return model_type.model_validate_json(data)


def print_diagnostics(
    console: Console,
    diagnostics: Iterable[LocatedDiagnostic],
    source: str | None = None,
    *,
    show_source: bool = False,
) -> int:
    """
    Print one line per diagnostic: `path:line:col: [rule] message`.

    Without `source`, raw offsets are shown instead of line/column. With
    `show_source`, the offending source line follows, the match underlined.
    """
    count = 0
    for diagnostic in diagnostics:
        loc = escape(diagnostic.path or "<template>")
        if source is not None:
            line, column = diagnostic.position(source)
            loc = f"{loc}:{line}:{column}"
        else:
            loc = f"{loc}@{diagnostic.start}"
        rule = f"[dim]\\[{diagnostic.rule}][/dim]"
        message = diagnostic.message.render(rich_style)
        console.print(f"[cyan]{loc}[/cyan]: {rule} {message}")
        if show_source and source is not None:
            _print_excerpt(console, diagnostic, source)
        count += 1
    return count


def _print_excerpt(
    console: Console,
    diagnostic: LocatedDiagnostic,
    source: str,
) -> None:
    text = line_text(source, diagnostic.start)
    _line, column = diagnostic.position(source)
    # Matches never span lines, but clamp in case the line ends early.
    width = max(1, min(diagnostic.end - diagnostic.start, len(text) - column + 1))
    console.print(
        f"    {text}", markup=False, highlight=False, emoji=False, soft_wrap=True
    )
    console.print(f"    {' ' * (column - 1)}[red]{'^' * width}[/red]", soft_wrap=True)
