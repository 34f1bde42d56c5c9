"""
Runtime configuration for the command-line front end and hex output.

The cryptographic core takes no configuration; these settings only control
how keys are rendered and how much gets logged.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from stealth_pki.core.codec import format_hex

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false), got {raw!r}")


@dataclass
class PkiConfig:
    """
    Output and logging settings.

    Args:
        log_level:      Level for the root logger when configure_logging() runs
        hex_uppercase:  Render key hex in upper case
        hex_prefix:     Prefix rendered key hex with 0x
    """
    log_level: str = "WARNING"
    hex_uppercase: bool = False
    hex_prefix: bool = False

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in _LEVELS:
            raise ValueError(f"log_level must be one of {_LEVELS}, got {self.log_level!r}")

    @classmethod
    def from_env(cls) -> PkiConfig:
        """
        Load settings from STEALTH_PKI_LOG_LEVEL, STEALTH_PKI_HEX_UPPERCASE
        and STEALTH_PKI_HEX_PREFIX, falling back to defaults for unset variables.
        """
        return cls(
            log_level=os.getenv("STEALTH_PKI_LOG_LEVEL", "WARNING"),
            hex_uppercase=_parse_bool(
                "STEALTH_PKI_HEX_UPPERCASE", os.getenv("STEALTH_PKI_HEX_UPPERCASE", "0")
            ),
            hex_prefix=_parse_bool(
                "STEALTH_PKI_HEX_PREFIX", os.getenv("STEALTH_PKI_HEX_PREFIX", "0")
            ),
        )

    def render(self, data: bytes) -> str:
        """Render bytes as hex according to hex_uppercase / hex_prefix."""
        return format_hex(data, uppercase=self.hex_uppercase, prefix=self.hex_prefix)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
