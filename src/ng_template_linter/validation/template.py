"""
Deprecation scanning for a single template fragment.

Ordering: diagnostics come out in rule-table order, and in document order
within each rule. Matches of different rules are not interleaved.
"""

from __future__ import annotations

import logging

from ..types import Diagnostic
from ..types import Fragment
from ..types import InvalidArgumentError
from ..types import LocatedDiagnostic
from ..types import ReportSink
from ..types import SlotStyle
from .rules import DEPRECATION_RULES
from .rules import DeprecationRule

logger = logging.getLogger(__name__)


def find_deprecations(
    text: str,
    rules: tuple[DeprecationRule, ...] = DEPRECATION_RULES,
) -> list[Diagnostic]:
    """
    Run every rule against `text` and return fragment-relative diagnostics.

    A rule that fails unexpectedly is logged and skipped; the others still
    run. Rule-table defects (`InvalidArgumentError`) are not caught.
    """
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        try:
            offsets = rule.find(text)
        except InvalidArgumentError:
            raise
        except Exception:
            logger.exception("Rule %s failed; skipping it for this fragment", rule.name)
            continue

        for offset in offsets:
            diagnostics.append(
                Diagnostic(
                    rule=rule.name,
                    start=offset,
                    end=offset + len(rule.token),
                    message=rule.message,
                )
            )
    return diagnostics


def scan(
    fragment: Fragment,
    rules: tuple[DeprecationRule, ...] = DEPRECATION_RULES,
) -> list[LocatedDiagnostic]:
    """Scan a fragment and return diagnostics in absolute source coordinates."""
    located = [d.locate(fragment) for d in find_deprecations(fragment.text, rules)]
    if located:
        logger.debug(
            "%d deprecation(s) in %s fragment %s",
            len(located),
            fragment.kind.name.lower(),
            fragment.path or "<unnamed>",
        )
    return located


def scan_into(
    fragment: Fragment,
    sink: ReportSink,
    rules: tuple[DeprecationRule, ...] = DEPRECATION_RULES,
    style: SlotStyle | None = None,
) -> int:
    """
    Push each located diagnostic to `sink(start, end, message)`.

    Returns the number of diagnostics reported.
    """
    located = scan(fragment, rules)
    for diagnostic in located:
        sink(diagnostic.start, diagnostic.end, diagnostic.message.render(style))
    return len(located)
