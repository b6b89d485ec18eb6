"""
Message Colors

Command messages and help output carry inline color codes that are turned
into ANSI escapes just before delivery, or stripped for senders that can't
render them.

    {r ... {x    letter codes: lower case regular, upper case bright
    {error       semantic codes, resolved through the active theme
    {{           a literal brace
"""

import re
from enum import Enum
from typing import Dict


class ANSICode(str, Enum):
    """ANSI escape codes used by the themes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    UNDERLINE = "\033[4m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_BLACK = "\033[90m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_WHITE = "\033[97m"


# Letter -> SGR foreground number; the upper case letter adds 60 (bright)
_LETTERS = {"d": 30, "r": 31, "g": 32, "y": 33, "b": 34, "m": 35, "c": 36, "w": 37}


def _build_codes() -> Dict[str, str]:
    codes = {
        "{x": ANSICode.RESET.value,
        "{X": ANSICode.RESET.value,
        "{*": ANSICode.BOLD.value,
        "{-": ANSICode.DIM.value,
        "{_": ANSICode.UNDERLINE.value,
        "{{": "{",
    }
    for letter, number in _LETTERS.items():
        codes["{" + letter] = f"\033[{number}m"
        codes["{" + letter.upper()] = f"\033[{number + 60}m"
    return codes


COLOR_CODES: Dict[str, str] = _build_codes()

THEMES: Dict[str, Dict[str, ANSICode]] = {
    "classic": {
        "header": ANSICode.BRIGHT_YELLOW,
        "command": ANSICode.BRIGHT_CYAN,
        "syntax": ANSICode.WHITE,
        "description": ANSICode.BRIGHT_BLACK,
        "error": ANSICode.BRIGHT_RED,
        "success": ANSICode.BRIGHT_GREEN,
        "info": ANSICode.BRIGHT_CYAN,
    },
    "dark": {
        "header": ANSICode.BRIGHT_WHITE,
        "command": ANSICode.BRIGHT_GREEN,
        "syntax": ANSICode.BRIGHT_BLACK,
        "description": ANSICode.DIM,
        "error": ANSICode.RED,
        "success": ANSICode.GREEN,
        "info": ANSICode.BRIGHT_WHITE,
    },
}

# Semantic names are tried first so "{command" isn't read as "{c" + "ommand"
COLOR_PATTERN = re.compile(
    r"\{(?:(?P<name>"
    + "|".join(sorted(THEMES["classic"], key=len, reverse=True))
    + r")|[a-zA-Z*_\-{])"
)


def colorize(text: str, theme: str = "classic", enabled: bool = True) -> str:
    """
    Convert color codes to ANSI escapes.

    Unknown themes fall back to classic. With ``enabled`` False every code
    is removed instead, leaving plain text.
    """
    if not text:
        return text

    palette = THEMES.get(theme, THEMES["classic"])

    def replace(match: re.Match) -> str:
        code = match.group(0)
        name = match.group("name")
        if name:
            return palette[name].value if enabled else ""
        if code not in COLOR_CODES:
            # Not a color code, e.g. "{optional}" in a syntax string
            return code
        if not enabled:
            return "{" if code == "{{" else ""
        return COLOR_CODES[code]

    result = COLOR_PATTERN.sub(replace, text)

    if enabled and "\033[" in result and not result.endswith(ANSICode.RESET.value):
        result += ANSICode.RESET.value
    return result


def strip_colors(text: str) -> str:
    """Remove all color codes from text."""
    return colorize(text, enabled=False)
