"""
Deprecation rule table.

Each rule pairs a finder invocation with the token it matches and the
remediation message to show. Rules run in table order.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable

from ..types import InvalidArgumentError
from ..types import Message
from ..types import MessageSlot
from ..types import SlotRole
from .finders import find_inputs_on_tags
from .finders import find_outputs_on_tags
from .finders import find_selector_occurrences

Finder = Callable[[str], list[int]]


@dataclass(frozen=True, slots=True)
class DeprecationRule:
    """
    A single deprecated API usage to look for.

    `find` maps fragment text to offsets of `token`; each match spans
    `len(token)` characters.
    """

    name: str
    token: str
    find: Finder
    message: Message

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidArgumentError("Deprecation rule needs a name")
        if not self.token:
            raise InvalidArgumentError(
                f"Deprecation rule {self.name!r} has an empty token"
            )


def _slots(**slots: tuple[str, SlotRole]) -> tuple[MessageSlot, ...]:
    return tuple(
        MessageSlot(name=name, value=value, role=role)
        for name, (value, role) in slots.items()
    )


def selector_rule(name: str, selector: str, message: Message) -> DeprecationRule:
    return DeprecationRule(
        name=name,
        token=selector,
        find=partial(find_selector_occurrences, selector=selector),
        message=message,
    )


def output_rule(
    name: str,
    event_name: str,
    tag_names: tuple[str, ...],
    message: Message,
) -> DeprecationRule:
    return DeprecationRule(
        name=name,
        token=event_name,
        find=partial(find_outputs_on_tags, event_name=event_name, tag_names=tag_names),
        message=message,
    )


def input_rule(
    name: str,
    property_name: str,
    tag_names: tuple[str, ...],
    message: Message,
) -> DeprecationRule:
    return DeprecationRule(
        name=name,
        token=property_name,
        find=partial(
            find_inputs_on_tags, property_name=property_name, tag_names=tag_names
        ),
        message=message,
    )


DEPRECATION_RULES: tuple[DeprecationRule, ...] = (
    selector_rule(
        "cdk-focus-trap-selector",
        "cdk-focus-trap",
        Message(
            template=(
                'Found deprecated element selector "{old}" which has been '
                'changed to an attribute selector "{new}".'
            ),
            slots=_slots(
                old=("cdk-focus-trap", SlotRole.OLD),
                new=("[cdkTrapFocus]", SlotRole.NEW),
            ),
        ),
    ),
    output_rule(
        "mat-list-option-selection-change",
        "selectionChange",
        ("mat-list-option",),
        Message(
            template=(
                'Found deprecated @Output() "{old}" on "{context}". '
                'Use "{new}" on "{new_context}" instead.'
            ),
            slots=_slots(
                old=("selectionChange", SlotRole.OLD),
                context=("mat-list-option", SlotRole.CONTEXT),
                new=("selectionChange", SlotRole.NEW),
                new_context=("mat-selection-list", SlotRole.CONTEXT),
            ),
        ),
    ),
    output_rule(
        "mat-datepicker-selected-changed",
        "selectedChanged",
        ("mat-datepicker",),
        Message(
            template=(
                'Found deprecated @Output() "{old}" on "{context}". '
                'Use "{new}" or "{new_alt}" on "{new_context}" instead.'
            ),
            slots=_slots(
                old=("selectedChanged", SlotRole.OLD),
                context=("mat-datepicker", SlotRole.CONTEXT),
                new=("dateChange", SlotRole.NEW),
                new_alt=("dateInput", SlotRole.NEW),
                new_context=("<input [matDatepicker]>", SlotRole.CONTEXT),
            ),
        ),
    ),
    input_rule(
        "mat-button-toggle-group-selected",
        "selected",
        ("mat-button-toggle-group",),
        Message(
            template=(
                'Found deprecated @Input() "{old}" on "{context}". '
                'Use "{new}" instead.'
            ),
            slots=_slots(
                old=("selected", SlotRole.OLD),
                context=("mat-button-toggle-group", SlotRole.CONTEXT),
                new=("value", SlotRole.NEW),
            ),
        ),
    ),
)


def rule_names(rules: tuple[DeprecationRule, ...] = DEPRECATION_RULES) -> list[str]:
    return [rule.name for rule in rules]
