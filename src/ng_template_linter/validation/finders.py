"""
Deprecation finders.

Each finder returns fragment-relative offsets in document order: tags in the
order they appear, attributes in the order they are written inside a tag. The
offset points at the logical name, never at binding decoration, so the
matched length is always the length of the queried name.
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator

from ..template_syntax.literal import find_all_substring_indices
from ..template_syntax.tokenization import iter_start_tags
from ..types import AttributeSpan
from ..types import BindingKind
from ..types import InvalidArgumentError


def find_selector_occurrences(text: str, selector: str) -> list[int]:
    """Offsets of a literal selector, e.g. an element name used as a directive."""
    return find_all_substring_indices(text, selector)


def find_outputs_on_tags(
    text: str,
    event_name: str,
    tag_names: Iterable[str],
) -> list[int]:
    """Offsets of `(event_name)` / `on-event_name` bindings on the given tags."""
    return [
        attr.logical_start
        for attr in _iter_matching_attributes(
            text, event_name, tag_names, kinds=(BindingKind.OUTPUT,)
        )
    ]


def find_inputs_on_tags(
    text: str,
    property_name: str,
    tag_names: Iterable[str],
) -> list[int]:
    """
    Offsets of `property_name` inputs on the given tags.

    Plain attributes count as inputs: `<x selected>` initializes the
    `selected` input just like `<x [selected]="true">` does.
    """
    return [
        attr.logical_start
        for attr in _iter_matching_attributes(
            text,
            property_name,
            tag_names,
            kinds=(BindingKind.INPUT, BindingKind.PLAIN),
        )
    ]


def _iter_matching_attributes(
    text: str,
    name: str,
    tag_names: Iterable[str],
    *,
    kinds: tuple[BindingKind, ...],
) -> Iterator[AttributeSpan]:
    if not name:
        raise InvalidArgumentError("Binding name must not be empty")
    if isinstance(tag_names, str):
        tag_names = [tag_names]
    tags = [tag for tag in tag_names if tag]
    if not tags:
        raise InvalidArgumentError(f"No tag names given to match {name!r} against")

    # HTML attribute names are case-insensitive.
    wanted = name.lower()
    for tag in iter_start_tags(text, tags):
        for attr in tag.attributes:
            if attr.binding_kind in kinds and attr.logical_name.lower() == wanted:
                yield attr
