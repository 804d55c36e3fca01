"""
ANSI color codes for terminal output.
"""

import os
import sys
from typing import TextIO

ANSI_CODES: dict[str, str] = {
    "RED": "\033[91m",
    "GREEN": "\033[92m",
    "YELLOW": "\033[93m",
    "BLUE": "\033[94m",
    "CYAN": "\033[96m",
    "GRAY": "\033[90m",
    "BOLD": "\033[1m",
    "DIM": "\033[2m",
    "RESET": "\033[0m",
}


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = ANSI_CODES["RED"]
    GREEN = ANSI_CODES["GREEN"]
    YELLOW = ANSI_CODES["YELLOW"]
    BLUE = ANSI_CODES["BLUE"]
    CYAN = ANSI_CODES["CYAN"]
    GRAY = ANSI_CODES["GRAY"]
    BOLD = ANSI_CODES["BOLD"]
    DIM = ANSI_CODES["DIM"]
    RESET = ANSI_CODES["RESET"]

    enabled = True

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        for attr in ANSI_CODES:
            setattr(cls, attr, "")
        cls.enabled = False


def supports_color(stream: TextIO) -> bool:
    """True when escape codes may be written to ``stream``."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def init_colors() -> None:
    """Disable colors if stdout is not a TTY or NO_COLOR is set."""
    if not supports_color(sys.stdout):
        Colors.disable()


init_colors()
