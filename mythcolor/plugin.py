"""Host-facing color plugin — config, enable/disable lifecycle, message rendering."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mythcolor.ansi import strip_ansi, strip_codes, to_ansi
from mythcolor.config import DEFAULT_CONFIG_PATH, DEFAULTS, load_config, log_level, validate
from mythcolor.markup import MarkupParser

log = logging.getLogger(__name__)


class ColorPlugin:
    """Owns the configured parser; hosts call parse()/render() per message."""

    name = "mythcolor"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        config_path: str | Path | None = None,
    ) -> None:
        if config is not None:
            self.config = validate({**DEFAULTS, **config})
        elif config_path is not None:
            self.config = load_config(config_path)
        elif DEFAULT_CONFIG_PATH.is_file():
            self.config = load_config(DEFAULT_CONFIG_PATH)
        else:
            self.config = dict(DEFAULTS)

        self.marker: str = self.config["marker"]
        self.debug: bool = self.config["debug"]
        self.parser = MarkupParser(self.marker, self.config["alt_markers"])
        self.enabled = False
        # Level only; handlers belong to the host
        logging.getLogger(self.name).setLevel(log_level(self.config))

    # ── Lifecycle ────────────────────────────────────────────────

    def enable(self) -> None:
        if self.enabled:
            return
        self.enabled = True
        log.info("%s successfully enabled!", self.name)

    def disable(self) -> None:
        if not self.enabled:
            return
        self.enabled = False
        log.info("%s successfully disabled!", self.name)

    # ── Rendering ────────────────────────────────────────────────

    def parse(self, text: str) -> str:
        """Markup → native codes."""
        result = self.parser.transform(text)
        if self.debug:
            log.debug("Parsed %d chars → %d chars", len(text), len(result))
        return result

    def render(self, text: str) -> str:
        """Markup → ANSI escapes, for terminal hosts."""
        return to_ansi(self.parse(text), self.marker)

    def strip(self, text: str) -> str:
        """Markup → plain text, for sinks without color support.

        Raw ANSI sequences already present in the message are dropped too.
        """
        return strip_ansi(strip_codes(self.parse(text), self.marker))
