"""TTML transcript parser.

Podcast transcripts come in several TTML flavours. Three strategies are tried
in order and the first one that yields any lines wins:

1. Sentence spans, Apple Podcasts style, ``<p ttm:agent>`` containing
   ``<span podcasts:unit="sentence">`` with nested ``podcasts:unit="word"`` spans.
2. Timed blocks, standard TTML ``<p begin end>``, optionally with timed spans.
3. Untimed fallback, every ``<p>``, text only.

Names are matched on their local part, so a prefix that is missing its
namespace declaration still matches. The parser never raises on bad markup;
an unreadable document simply yields no lines.
"""

from __future__ import annotations

import re
from typing import Callable

from lxml import etree

from tshelf.core.models import Line
from tshelf.core.timecode import parse_seconds

_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")

_SPEAKER_ATTRS = ("agent", "role")


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        recover=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
    )


def _local(name: str) -> str:
    """Strip ``{namespace}`` or ``prefix:`` from an element/attribute name."""
    return name.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _attr(el: etree._Element, *names: str) -> str | None:
    """Return the first non-empty attribute matching any of the local names."""
    by_local = {_local(key): value for key, value in el.attrib.items()}
    for name in names:
        value = by_local.get(name)
        if value:
            return value
    return None


def _elements(root: etree._Element, tag: str) -> list[etree._Element]:
    return [el for el in root.iter(etree.Element) if _local(el.tag) == tag]


def _text(el: etree._Element) -> str:
    return " ".join("".join(el.itertext()).split())


def _join(elements: list[etree._Element]) -> str:
    return " ".join(text for text in (_text(el) for el in elements) if text)


def _line(el: etree._Element, text: str, speaker: str | None) -> Line:
    begin = _attr(el, "begin") or ""
    end = _attr(el, "end") or ""
    return Line(
        text=text,
        begin=begin,
        end=end,
        start_seconds=parse_seconds(begin),
        end_seconds=parse_seconds(end),
        speaker=speaker,
    )


def _sentence_spans(root: etree._Element) -> list[Line]:
    lines = []
    for sentence in _elements(root, "span"):
        if _attr(sentence, "unit") != "sentence":
            continue

        words = [
            span
            for span in _elements(sentence, "span")
            if span is not sentence and _attr(span, "unit") == "word"
        ]
        text = _join(words) if words else _text(sentence)

        speaker = None
        for ancestor in sentence.iterancestors(etree.Element):
            if _local(ancestor.tag) == "p":
                speaker = _attr(ancestor, *_SPEAKER_ATTRS)
                break

        if text:
            lines.append(_line(sentence, text, speaker))
    return lines


def _timed_blocks(root: etree._Element) -> list[Line]:
    lines = []
    for block in _elements(root, "p"):
        if not _attr(block, "begin"):
            continue

        spans = [
            span
            for span in _elements(block, "span")
            if _attr(span, "begin")
        ]
        text = _join(spans) if spans else _text(block)

        if text:
            lines.append(_line(block, text, _attr(block, *_SPEAKER_ATTRS)))
    return lines


def _untimed_paragraphs(root: etree._Element) -> list[Line]:
    lines = []
    for block in _elements(root, "p"):
        text = _text(block)
        if text:
            lines.append(Line(text=text))
    return lines


# Tried in order; an empty list means "no match, try the next one".
STRATEGIES: tuple[tuple[str, Callable[[etree._Element], list[Line]]], ...] = (
    ("sentence-spans", _sentence_spans),
    ("timed-blocks", _timed_blocks),
    ("untimed", _untimed_paragraphs),
)


def _load(raw: str | bytes) -> etree._Element | None:
    if isinstance(raw, str):
        # lxml refuses str input that still carries an encoding declaration
        raw = _DECLARATION_RE.sub("", raw.lstrip("\ufeff"), count=1)
    if not raw.strip():
        return None
    try:
        return etree.fromstring(raw, _make_parser())
    except (etree.LxmlError, ValueError):
        return None


def parse_with_strategy(raw: str | bytes) -> tuple[str | None, list[Line]]:
    """Parse markup and report which strategy produced the lines.

    Returns:
        ``(strategy_name, lines)``, or ``(None, [])`` when no strategy found
        any content.
    """
    root = _load(raw)
    if root is None:
        return None, []

    for name, strategy in STRATEGIES:
        lines = strategy(root)
        if lines:
            return name, lines
    return None, []


def parse(raw: str | bytes) -> list[Line]:
    """Parse TTML markup into an ordered list of lines.

    Args:
        raw: Markup as text, or as bytes to let the XML declaration pick
            the encoding.

    Returns:
        Lines in document order; empty if the markup has no usable content.
    """
    return parse_with_strategy(raw)[1]
