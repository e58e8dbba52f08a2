"""
Angular binding syntax classification.

Recognized forms:
- `[name]` and `bind-name`: property (input) binding
- `[(name)]` and `bindon-name`: two-way binding, classified by its input half
- `(name)` and `on-name`: event (output) binding

Everything else is a plain attribute. Structural directives (`*ngIf`),
template references (`#ref`) and animation triggers (`@fade`) are plain too.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..types import BindingKind

# Longest prefix first: "bindon-" must win over "bind-".
_PREFIXES: tuple[tuple[str, BindingKind], ...] = (
    ("bindon-", BindingKind.INPUT),
    ("bind-", BindingKind.INPUT),
    ("on-", BindingKind.OUTPUT),
)

_WRAPPERS: tuple[tuple[str, str, BindingKind], ...] = (
    ("[(", ")]", BindingKind.INPUT),
    ("[", "]", BindingKind.INPUT),
    ("(", ")", BindingKind.OUTPUT),
)


@dataclass(frozen=True, slots=True)
class Binding:
    """
    Result of classifying a raw attribute name.

    `offset` is where `logical_name` starts inside the raw name.
    """

    kind: BindingKind
    logical_name: str
    offset: int = 0


def classify_binding(raw_name: str) -> Binding:
    for opening, closing, kind in _WRAPPERS:
        if (
            raw_name.startswith(opening)
            and raw_name.endswith(closing)
            and len(raw_name) > len(opening) + len(closing)
        ):
            return Binding(
                kind=kind,
                logical_name=raw_name[len(opening) : -len(closing)],
                offset=len(opening),
            )

    lowered = raw_name.lower()
    for prefix, kind in _PREFIXES:
        if lowered.startswith(prefix) and len(raw_name) > len(prefix):
            return Binding(
                kind=kind,
                logical_name=raw_name[len(prefix) :],
                offset=len(prefix),
            )

    return Binding(kind=BindingKind.PLAIN, logical_name=raw_name)
