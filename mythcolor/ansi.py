"""Native § code → ANSI escape converter for terminal output.

Supports: 16 legacy colors (§0-§f), formats (§k-§o), reset (§r),
extended hex colors (§x§R§R§G§G§B§B → 24-bit truecolor).
"""

from __future__ import annotations

import re
from functools import lru_cache

from mythcolor.color import MARKER

# Legacy palette → ANSI foreground
_FG = {
    "0": "30", "1": "34", "2": "32", "3": "36",
    "4": "31", "5": "35", "6": "33", "7": "37",
    "8": "90", "9": "94", "a": "92", "b": "96",
    "c": "91", "d": "95", "e": "93", "f": "97",
}

# Format codes
_FMT = {
    "k": "5",   # obfuscated → blink
    "l": "1",   # bold
    "m": "9",   # strikethrough
    "n": "4",   # underline
    "o": "3",   # italic
    "r": "0",   # reset
}

_ESC = "\033["

_CODE_MAP: dict[str, str] = {}
for _code, _sgr in {**_FG, **_FMT}.items():
    _CODE_MAP[_code] = f"{_ESC}{_sgr}m"

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


@lru_cache(maxsize=8)
def _code_re(marker: str) -> re.Pattern:
    """Hex run or single code for ``marker``; hex runs are tried first."""
    m = re.escape(marker)
    return re.compile(
        rf"{m}[xX](?P<hex>(?:{m}[0-9A-Fa-f]){{6}})|{m}(?P<code>[0-9A-Fa-fK-Ok-oRr])"
    )


def _resolve(match: re.Match, marker: str) -> str:
    hex_run = match.group("hex")
    if hex_run is not None:
        digits = hex_run.replace(marker, "")
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        return f"{_ESC}38;2;{r};{g};{b}m"
    return _CODE_MAP[match.group("code").lower()]


def to_ansi(text: str, marker: str = MARKER) -> str:
    """Convert native codes to ANSI escape sequences."""
    return _code_re(marker).sub(lambda m: _resolve(m, marker), text)


def strip_codes(text: str, marker: str = MARKER) -> str:
    """Remove all native codes from text."""
    return _code_re(marker).sub("", text)


def strip_ansi(text: str) -> str:
    """Remove all ANSI escape sequences from text."""
    return _ANSI_RE.sub("", text)
