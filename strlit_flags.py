#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Escape flags and dialect presets.

A dialect is any union of EscapeFlag bits. The bit values are stable: a
dialect stored as an integer must keep meaning the same escapes.
"""

from enum import IntFlag
from typing import List, Optional


class EscapeFlag(IntFlag):
    BEL = 1 << 0  # \a, 0x07
    BACKSPACE = 1 << 1  # \b, 0x08
    FORM_FEED = 1 << 2  # \f, 0x0C
    NEWLINE = 1 << 3  # \n, 0x0A
    CARRIAGE_RETURN = 1 << 4  # \r, 0x0D
    TAB = 1 << 5  # \t, 0x09
    UNICODE = 1 << 6  # \uXXXX
    VERTICAL_TAB = 1 << 7  # \v, 0x0B
    HEX = 1 << 8  # \xXX

    BACKSLASH = 1 << 9
    SINGLE_QUOTE = 1 << 10
    DOUBLE_QUOTE = 1 << 11
    QUESTION_MARK = 1 << 12
    OCTAL = 1 << 13  # \o, \oo, \ooo

    ESCAPE_LOWER = 1 << 14  # gcc extension, \e, 0x1B
    ESCAPE_UPPER = 1 << 15  # gcc extension, \E, 0x1B


NO_FLAGS = EscapeFlag(0)

C_FLAGS = (
    EscapeFlag.BEL | EscapeFlag.BACKSPACE | EscapeFlag.FORM_FEED | EscapeFlag.NEWLINE
    | EscapeFlag.CARRIAGE_RETURN | EscapeFlag.TAB | EscapeFlag.VERTICAL_TAB | EscapeFlag.HEX
    | EscapeFlag.BACKSLASH | EscapeFlag.SINGLE_QUOTE | EscapeFlag.DOUBLE_QUOTE
    | EscapeFlag.QUESTION_MARK | EscapeFlag.OCTAL
)

GCC_FLAGS = C_FLAGS | EscapeFlag.ESCAPE_LOWER | EscapeFlag.ESCAPE_UPPER

JAVA_FLAGS = (
    EscapeFlag.BACKSPACE | EscapeFlag.FORM_FEED | EscapeFlag.NEWLINE | EscapeFlag.CARRIAGE_RETURN
    | EscapeFlag.TAB | EscapeFlag.UNICODE | EscapeFlag.BACKSLASH | EscapeFlag.SINGLE_QUOTE
    | EscapeFlag.DOUBLE_QUOTE | EscapeFlag.OCTAL
)

SCALA_FLAGS = JAVA_FLAGS

PERMISSIVE_FLAGS = GCC_FLAGS | EscapeFlag.UNICODE

# Insertion order decides which name preset_name() reports for shared masks.
PRESETS = {
    "c": C_FLAGS,
    "gcc": GCC_FLAGS,
    "java": JAVA_FLAGS,
    "scala": SCALA_FLAGS,
    "permissive": PERMISSIVE_FLAGS,
}


def has_flag(dialect: int, flag: EscapeFlag) -> bool:
    return (dialect & flag) != 0


def flag_names(dialect: int) -> List[str]:
    """Names of the flags set in `dialect`, lowercase, in bit order."""
    return [flag.name.lower() for flag in EscapeFlag if has_flag(dialect, flag)]


def preset_name(dialect: int) -> Optional[str]:
    for name, flags in PRESETS.items():
        if int(flags) == int(dialect):
            return name
    return None


def dialect_from_spec(text: str) -> EscapeFlag:
    """
    Build a dialect from a textual spec such as "c+escape_lower" or
    "newline,tab,octal".

    Items are preset names or flag names (case-insensitive), separated by
    commas or plus signs, and are unioned. An empty spec is the empty dialect.

    Raises ValueError on an unknown name.
    """
    dialect = NO_FLAGS
    for raw in text.replace("+", ",").split(","):
        name = raw.strip().lower()
        if not name:
            continue
        if name in PRESETS:
            dialect |= PRESETS[name]
            continue
        member = EscapeFlag.__members__.get(name.upper())
        if member is None:
            raise ValueError(f"unknown escape flag or dialect preset '{raw.strip()}'")
        dialect |= member
    return dialect
