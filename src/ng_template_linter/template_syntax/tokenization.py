"""
Start tag scanning.

This is a best-effort lexical scan, not an HTML parser. It works on arbitrary
template fragments (partial markup, interpolations, unclosed elements) and
only needs to answer: which start tags are here, and where exactly are their
attribute names?

Every start tag is scanned, not just the requested ones, so a `<` inside a
quoted attribute value is never mistaken for the start of a tag.

Scanning stays linear on malformed input. No tag can start after the last
`>` of the text, and a scan that runs off the end remembers where it was
between attributes so later scans reaching the same spot give up at once.
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from enum import Enum
from enum import auto

from ..types import AttributeSpan
from ..types import TagOccurrence
from .bindings import classify_binding


class _State(Enum):
    BEFORE_ATTRIBUTE_NAME = auto()
    ATTRIBUTE_NAME = auto()
    AFTER_ATTRIBUTE_NAME = auto()
    BEFORE_ATTRIBUTE_VALUE = auto()
    ATTRIBUTE_VALUE_QUOTED = auto()
    ATTRIBUTE_VALUE_UNQUOTED = auto()


def iter_start_tags(
    text: str,
    tag_names: Iterable[str] | None = None,
) -> Iterator[TagOccurrence]:
    """
    Yield start tags in document order, restricted to `tag_names` if given.

    Tag names compare case-insensitively. Malformed tags (unterminated quote,
    missing `>`) are skipped and scanning resumes right after their `<`.
    """
    candidates = {name.lower() for name in tag_names} if tag_names is not None else None
    scanner = _StartTagScanner(text)
    pos = 0
    length = len(text)

    while True:
        lt = text.find("<", pos)
        if lt == -1 or lt > scanner.last_gt:
            return

        if text.startswith("<!--", lt):
            end = text.find("-->", lt + 4)
            if end == -1:
                # Unterminated comment swallows the rest of the fragment.
                return
            pos = end + 3
            continue

        nxt = text[lt + 1] if lt + 1 < length else ""
        if nxt in ("/", "!", "?"):
            pos = text.find(">", lt + 2) + 1
            continue

        if not (nxt.isascii() and nxt.isalpha()):
            pos = lt + 1
            continue

        tag = scanner.scan(lt)
        if tag is None:
            pos = lt + 1
            continue

        pos = tag.tag_end
        if candidates is None or tag.tag_name in candidates:
            yield tag


def scan_start_tags(
    text: str,
    tag_names: Iterable[str] | None = None,
) -> list[TagOccurrence]:
    return list(iter_start_tags(text, tag_names))


class _StartTagScanner:
    """
    Scans the start tags of one text.

    What happens after a scan reaches the before-attribute-name state depends
    only on the position, so positions from which a scan ran off the end are
    kept in `dead` and shared by every later scan of the same text.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.last_gt = text.rfind(">")
        self.dead: set[int] = set()
        self.tag_name_stop = -1

    def _tag_name_end(self, start: int) -> int:
        """Offset of the first whitespace, `/` or `>` after the `<` at `start`."""
        # Scans start in increasing order, and a later `<` that sits inside the
        # previous tag name shares its end.
        if start < self.tag_name_stop:
            return self.tag_name_stop
        text = self.text
        i = start + 1
        while i <= self.last_gt and not (text[i].isspace() or text[i] in "/>"):
            i += 1
        self.tag_name_stop = i
        return i

    def scan(self, start: int) -> TagOccurrence | None:
        """
        Scan the start tag whose `<` is at `start`.

        Returns None if the tag never closes or a quoted value is unterminated.
        """
        text = self.text
        i = self._tag_name_end(start)
        if i > self.last_gt:
            return None

        state = _State.BEFORE_ATTRIBUTE_NAME
        tag_name = text[start + 1 : i].lower()
        attributes: list[AttributeSpan] = []
        name_start = name_end = start
        value_start = 0
        quote = ""
        last_slash = -1
        checkpoints: list[int] = []

        while i <= self.last_gt:
            ch = text[i]

            if state is _State.BEFORE_ATTRIBUTE_NAME:
                if i in self.dead:
                    break
                checkpoints.append(i)
                if ch == ">":
                    return _finish(tag_name, attributes, start, i, last_slash)
                if ch == "/":
                    last_slash = i
                elif not ch.isspace():
                    last_slash = -1
                    name_start = i
                    state = _State.ATTRIBUTE_NAME

            elif state is _State.ATTRIBUTE_NAME:
                if ch.isspace() or ch in "/>=":
                    name_end = i
                    state = _State.AFTER_ATTRIBUTE_NAME
                    continue

            elif state is _State.AFTER_ATTRIBUTE_NAME:
                if ch == "=":
                    state = _State.BEFORE_ATTRIBUTE_VALUE
                elif not ch.isspace():
                    attributes.append(_attribute(text, name_start, name_end))
                    state = _State.BEFORE_ATTRIBUTE_NAME
                    continue

            elif state is _State.BEFORE_ATTRIBUTE_VALUE:
                if ch in ("'", '"'):
                    quote = ch
                    value_start = i + 1
                    state = _State.ATTRIBUTE_VALUE_QUOTED
                elif ch == ">":
                    # `name=>`: treat as an empty value.
                    attributes.append(_attribute(text, name_start, name_end, (i, i)))
                    state = _State.BEFORE_ATTRIBUTE_NAME
                    continue
                elif not ch.isspace():
                    value_start = i
                    state = _State.ATTRIBUTE_VALUE_UNQUOTED

            elif state is _State.ATTRIBUTE_VALUE_QUOTED:
                close = text.find(quote, i)
                if close == -1:
                    break
                attributes.append(
                    _attribute(text, name_start, name_end, (value_start, close))
                )
                state = _State.BEFORE_ATTRIBUTE_NAME
                i = close + 1
                continue

            elif state is _State.ATTRIBUTE_VALUE_UNQUOTED:
                if ch.isspace() or ch == ">":
                    attributes.append(
                        _attribute(text, name_start, name_end, (value_start, i))
                    )
                    state = _State.BEFORE_ATTRIBUTE_NAME
                    continue

            i += 1

        self.dead.update(checkpoints)
        return None


def _attribute(
    text: str,
    name_start: int,
    name_end: int,
    value_span: tuple[int, int] | None = None,
) -> AttributeSpan:
    raw_name = text[name_start:name_end]
    binding = classify_binding(raw_name)
    logical_start = name_start + binding.offset
    value_start, value_end = value_span if value_span is not None else (None, None)
    return AttributeSpan(
        raw_name=raw_name,
        logical_name=binding.logical_name,
        binding_kind=binding.kind,
        name_start=name_start,
        name_end=name_end,
        logical_start=logical_start,
        logical_end=logical_start + len(binding.logical_name),
        value=text[value_start:value_end] if value_span is not None else None,
        value_start=value_start,
        value_end=value_end,
    )


def _finish(
    tag_name: str,
    attributes: list[AttributeSpan],
    start: int,
    close: int,
    last_slash: int,
) -> TagOccurrence:
    return TagOccurrence(
        tag_name=tag_name,
        attributes=tuple(attributes),
        tag_start=start,
        tag_end=close + 1,
        self_closing=last_slash != -1,
    )
