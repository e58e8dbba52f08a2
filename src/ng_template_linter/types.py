"""
Shared types for scanning and diagnostics.

Fragments go in, located diagnostics come out. Everything in between works on
offsets relative to `Fragment.text`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from enum import auto
from typing import Callable

from .template_syntax.position import line_and_column


class InvalidArgumentError(ValueError):
    """Raised for programmer errors such as an empty needle or rule token."""


class FragmentKind(Enum):
    """Where a fragment's text came from."""

    INLINE = auto()  # string literal inside a component source
    EXTERNAL = auto()  # separate template file


class BindingKind(Enum):
    """How an attribute participates in template bindings."""

    PLAIN = auto()  # selected="x"
    INPUT = auto()  # [selected]="x", bind-selected="x", [(selected)]="x"
    OUTPUT = auto()  # (selectedChanged)="f()", on-selectedChanged="f()"


class SlotRole(Enum):
    """What a message slot refers to, so consumers can style it."""

    OLD = auto()
    NEW = auto()
    CONTEXT = auto()


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    A unit of template text to scan.

    `base_offset` is the absolute position of `text[0]` in the enclosing source
    buffer. For inline templates that is the start of the string literal
    (quotes included); external templates are their own buffer, so it is 0.
    """

    text: str
    base_offset: int = 0
    kind: FragmentKind = FragmentKind.INLINE
    path: str | None = None

    @classmethod
    def inline(
        cls,
        source: str,
        start: int,
        end: int,
        path: str | None = None,
    ) -> Fragment:
        if start < 0 or end < start or end > len(source):
            raise InvalidArgumentError(
                f"Invalid literal span [{start}, {end}) "
                f"for source of length {len(source)}"
            )
        return cls(
            text=source[start:end],
            base_offset=start,
            kind=FragmentKind.INLINE,
            path=path,
        )

    @classmethod
    def external(cls, text: str, path: str | None = None) -> Fragment:
        return cls(text=text, base_offset=0, kind=FragmentKind.EXTERNAL, path=path)


@dataclass(frozen=True, slots=True)
class AttributeSpan:
    """
    One attribute inside a start tag.

    `name_start`/`name_end` cover the name as written (decoration included);
    `logical_start`/`logical_end` cover only the bound property/event name.
    """

    raw_name: str
    logical_name: str
    binding_kind: BindingKind
    name_start: int
    name_end: int
    logical_start: int
    logical_end: int
    value: str | None = None
    value_start: int | None = None
    value_end: int | None = None


@dataclass(frozen=True, slots=True)
class TagOccurrence:
    """A matched start tag. `tag_end` is the offset just past its `>`."""

    tag_name: str
    attributes: tuple[AttributeSpan, ...]
    tag_start: int
    tag_end: int
    self_closing: bool = False


@dataclass(frozen=True, slots=True)
class MessageSlot:
    name: str
    value: str
    role: SlotRole


SlotStyle = Callable[[MessageSlot], str]


@dataclass(frozen=True, slots=True)
class Message:
    """
    A remediation message with named slots.

    `template` uses `str.format` placeholders, one per slot. Rendering without
    a style yields plain text; consumers pass a style to colour slot values.
    """

    template: str
    slots: tuple[MessageSlot, ...]

    def render(self, style: SlotStyle | None = None) -> str:
        values = {
            slot.name: style(slot) if style is not None else slot.value
            for slot in self.slots
        }
        return self.template.format(**values)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A deprecation match, relative to the fragment it was found in."""

    rule: str
    start: int
    end: int
    message: Message

    def locate(self, fragment: Fragment) -> LocatedDiagnostic:
        return LocatedDiagnostic(
            rule=self.rule,
            start=fragment.base_offset + self.start,
            end=fragment.base_offset + self.end,
            message=self.message,
            path=fragment.path,
        )


@dataclass(frozen=True, slots=True)
class LocatedDiagnostic:
    """A diagnostic whose offsets are absolute positions in the source buffer."""

    rule: str
    start: int
    end: int
    message: Message
    path: str | None = None

    def position(self, source: str) -> tuple[int, int]:
        """1-based (line, column) of `start` within `source`."""
        return line_and_column(source, self.start)


ReportSink = Callable[[int, int, str], object]
