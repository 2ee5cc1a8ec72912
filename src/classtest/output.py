"""Sink helpers: ANSI colors and terminal detection."""

from typing import Optional, TextIO

ANSI_RESET = "\x1b[0m"
ANSI_ERROR = "\x1b[31m"
ANSI_GOOD = "\x1b[32m"

MSG_GOOD = "ok"
SEPARATOR = " ... "


def paint(text: str, code: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI color code when enabled."""
    if not enabled:
        return text
    return f"{code}{text}{ANSI_RESET}"


def supports_color(sink: TextIO) -> bool:
    """Check whether the sink is an interactive terminal."""
    isatty = getattr(sink, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def resolve_color(mode: str, sink: TextIO, override: Optional[bool] = None) -> bool:
    """Decide whether diagnostics written to the sink get colored.

    Args:
        mode: Configured color mode ("auto", "always" or "never")
        sink: The text stream receiving run lines
        override: Explicit on/off from the caller, wins over the mode

    Returns:
        True if ANSI escapes should be emitted
    """
    if override is not None:
        return override
    if mode == "always":
        return True
    if mode == "never":
        return False
    return supports_color(sink)
