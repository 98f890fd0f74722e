"""Markup parser — <tag> / &code markup → native § color codes.

Supported markup:
  &a §a              standard codes (0-9 a-f k-o r, either case)
  <gold> <bold>      shorthand: marker + first letter of the word
  <#FF8800>          fixed hex color
  <gradient#5:#F00:#00FF00:loop>text</gradient>   (also <g ...>...</g>)
  <rainbow#2:0.8:0.9:l>text</rainbow>             (also <r ...>...</r>)

Unrecognized or unterminated tags are left as literal text.
"""

from __future__ import annotations

import logging
import re

from mythcolor.color import MARKER, from_hex, to_escape
from mythcolor.effects import GradientSpec, RainbowSpec, TaggedSpan

log = logging.getLogger(__name__)

ALT_MARKERS = "&"

# Characters accepted after a marker for a standard code
CODE_CHARS = frozenset("0123456789abcdefABCDEFklmnoKLMNOrR")

_HEX = r"[0-9A-Fa-f]"
# Unambiguous form of \d*\.?\d+ (no overlapping repeats)
_FLOAT = r"\d+(?:\.\d+)?|\.\d+"
_LOOP = r"(?::(?P<loop>loop|l|L))?"

_GRADIENT_HEAD_RE = re.compile(
    rf"<(?:gradient|g)(?:#(?P<speed>\d+))?"
    rf"(?P<stops>(?::#(?:{_HEX}{{6}}|{_HEX}{{3}})){{2,}}){_LOOP}>"
)
_RAINBOW_HEAD_RE = re.compile(
    rf"<(?:rainbow|r)(?:#(?P<speed>\d+))?"
    rf"(?::(?P<saturation>{_FLOAT}))?(?::(?P<brightness>{_FLOAT}))?{_LOOP}>"
)
_GRADIENT_CLOSE_RE = re.compile(r"</(?:gradient|g)>")
_RAINBOW_CLOSE_RE = re.compile(r"</(?:rainbow|r)>")
_STOP_RE = re.compile(rf":#({_HEX}{{6}}|{_HEX}{{3}})")
_HEX_TAG_RE = re.compile(rf"<#({_HEX}{{6}})>")
_SHORTHAND_RE = re.compile(r"<([A-Za-z0-9]+)>")

# Speeds above a signed 32-bit int fall back to the default
_MAX_SPEED = 2**31 - 1


def _parse_speed(digits: str | None) -> int:
    digits = (digits or "").lstrip("0")
    if not digits:
        return 0
    if len(digits) > len(str(_MAX_SPEED)):
        return 0
    speed = int(digits)
    return speed if speed <= _MAX_SPEED else 0


def _parse_unit(value: str | None, default: float = 1.0) -> float:
    if value is None:
        return default
    return max(0.0, min(1.0, float(value)))


class MarkupParser:
    """Single-pass markup scanner bound to one native marker.

    Holds only precompiled, read-only state; one instance can be shared
    between threads.
    """

    def __init__(self, marker: str = MARKER, alt_markers: str = ALT_MARKERS) -> None:
        if len(marker) != 1:
            raise ValueError(f"marker must be a single character: {marker!r}")
        self.marker = marker
        self.escape_markers = frozenset(alt_markers + marker)
        self._trigger_re = re.compile(
            "[" + re.escape("<" + "".join(sorted(self.escape_markers))) + "]"
        )

    # ── Public API ───────────────────────────────────────────────

    def transform(self, text: str) -> str:
        """Convert markup to native codes. Never raises for str input."""
        if not text:
            return text
        parts: list[str] = []
        closers: dict[str, re.Match | None] = {}
        pos = 0
        while True:
            m = self._trigger_re.search(text, pos)
            if m is None:
                parts.append(text[pos:])
                break
            start = m.start()
            parts.append(text[pos:start])
            replacement, end = self._read_tag(text, start, closers)
            if replacement is None:
                parts.append(text[start])
                pos = start + 1
            else:
                parts.append(replacement)
                pos = end
        return "".join(parts)

    # ── Tag recognition ──────────────────────────────────────────

    def _read_tag(
        self, text: str, pos: int, closers: dict[str, re.Match | None],
    ) -> tuple[str | None, int]:
        """Try every grammar at ``pos``; return (replacement, end) or (None, pos)."""
        ch = text[pos]
        if ch != "<":
            nxt = text[pos + 1:pos + 2]
            if nxt and nxt in CODE_CHARS:
                return self.marker + nxt, pos + 2
            return None, pos

        head = _GRADIENT_HEAD_RE.match(text, pos)
        if head:
            close = self._find_close(_GRADIENT_CLOSE_RE, text, head.end(), closers, "gradient")
            if close:
                span = self._gradient_span(head, text[head.end():close.start()])
                return self._render(span), close.end()

        head = _RAINBOW_HEAD_RE.match(text, pos)
        if head:
            close = self._find_close(_RAINBOW_CLOSE_RE, text, head.end(), closers, "rainbow")
            if close:
                span = self._rainbow_span(head, text[head.end():close.start()])
                return self._render(span), close.end()

        m = _HEX_TAG_RE.match(text, pos)
        if m:
            return to_escape(from_hex(m.group(1)), self.marker), m.end()

        m = _SHORTHAND_RE.match(text, pos)
        if m:
            return self.marker + m.group(1)[0].lower(), m.end()

        return None, pos

    @staticmethod
    def _find_close(
        pattern: re.Pattern,
        text: str,
        pos: int,
        closers: dict[str, re.Match | None],
        key: str,
    ) -> re.Match | None:
        """First closing tag at or after ``pos``.

        Scan positions only grow during one transform, so an earlier result
        is still valid when it lies ahead of ``pos`` or when nothing was found.
        """
        if key in closers:
            hit = closers[key]
            if hit is None or hit.start() >= pos:
                return hit
        hit = pattern.search(text, pos)
        closers[key] = hit
        return hit

    @staticmethod
    def _gradient_span(head: re.Match, body: str) -> TaggedSpan:
        stops = tuple(from_hex(code) for code in _STOP_RE.findall(head.group("stops")))
        spec = GradientSpec(
            stops=stops,
            speed=_parse_speed(head.group("speed")),
            loop=head.group("loop") is not None,
        )
        return TaggedSpan(spec, body)

    @staticmethod
    def _rainbow_span(head: re.Match, body: str) -> TaggedSpan:
        spec = RainbowSpec(
            speed=_parse_speed(head.group("speed")),
            saturation=_parse_unit(head.group("saturation")),
            brightness=_parse_unit(head.group("brightness")),
            loop=head.group("loop") is not None,
        )
        return TaggedSpan(spec, body)

    def _render(self, span: TaggedSpan) -> str:
        if log.isEnabledFor(logging.DEBUG):
            log.debug("Rendering %s over %d chars", span.spec.describe(), len(span.text))
        return span.render(self.marker)


_DEFAULT_PARSER = MarkupParser()


def transform(text: str) -> str:
    """Convert markup to § codes using the default markers (§ and &)."""
    return _DEFAULT_PARSER.transform(text)


# Name used by host code written against the plugin API
parse_colors = transform
