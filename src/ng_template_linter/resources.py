"""
Template resource helpers.

Turns files on disk into fragments. Template files become external fragments.
Component sources are searched for `template:` string literals, which become
inline fragments over the component source, and for `templateUrl:` entries,
which are loaded as external fragments.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .types import Fragment

TEMPLATE_SUFFIXES: tuple[str, ...] = (".html",)
COMPONENT_SUFFIXES: tuple[str, ...] = (".ts",)

_INLINE_TEMPLATE = re.compile(
    r"\btemplate\s*:\s*"
    r"(?P<literal>(?P<quote>['\"`])(?:\\.|(?!(?P=quote))[^\\])*(?P=quote))",
    re.DOTALL,
)
_TEMPLATE_URL = re.compile(
    r"\btemplateUrl\s*:\s*(?P<quote>['\"`])(?P<url>.*?)(?P=quote)"
)


@dataclass(frozen=True, slots=True)
class TemplateSource:
    """A fragment and the buffer its absolute offsets refer to."""

    fragment: Fragment
    source: str


def load_external_template(path: Path) -> Fragment:
    """Read a template file. Offsets of the fragment are relative to the file."""
    return Fragment.external(path.read_text(encoding="utf-8"), path=str(path))


def resolve_template_url(component_path: Path, template_url: str) -> Path:
    """Resolve a component's `templateUrl` against the component file's directory."""
    return (component_path.parent / template_url).resolve()


def load_component_templates(component_path: Path) -> list[TemplateSource]:
    """
    Every template a component source declares, in document order.

    Inline fragments keep the literal's quotes, so their offsets point into
    the component source. External templates are read from disk; a missing
    `templateUrl` target raises `OSError`.
    """
    source = component_path.read_text(encoding="utf-8")
    found: list[tuple[int, TemplateSource]] = []

    for match in _INLINE_TEMPLATE.finditer(source):
        fragment = Fragment.inline(
            source,
            match.start("literal"),
            match.end("literal"),
            path=str(component_path),
        )
        found.append((match.start(), TemplateSource(fragment, source)))

    for match in _TEMPLATE_URL.finditer(source):
        path = resolve_template_url(component_path, match.group("url"))
        fragment = load_external_template(path)
        found.append((match.start(), TemplateSource(fragment, fragment.text)))

    found.sort(key=lambda item: item[0])
    return [template for _start, template in found]


def iter_template_files(
    root: Path,
    suffixes: Iterable[str] = TEMPLATE_SUFFIXES,
) -> Iterator[Path]:
    """
    Yield template files under `root`, sorted.

    A file path is yielded as-is regardless of its suffix, so callers can
    point at a single template with an unusual extension.
    """
    if root.is_file():
        yield root
        return
    wanted = {suffix.lower() for suffix in suffixes}
    yield from sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in wanted
    )
