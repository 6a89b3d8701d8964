#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Quoted string literal formatter.

Encodes raw text into a double-quoted literal, escaping characters with the
forms the dialect enables. For every preset, the parser reads the output back
to the original text.
"""

from typing import List, Optional

from strlit_context import CodecContext
from strlit_errors import MalformedLiteral
from strlit_flags import (
    C_FLAGS,
    GCC_FLAGS,
    JAVA_FLAGS,
    PERMISSIVE_FLAGS,
    SCALA_FLAGS,
    EscapeFlag,
    has_flag,
)
from strlit_logger import is_tracing, log_debug


# code unit -> (enabling flag, selector), tried in order
REVERSE_ESCAPES = {
    0x07: [(EscapeFlag.BEL, "a")],
    0x08: [(EscapeFlag.BACKSPACE, "b")],
    0x0C: [(EscapeFlag.FORM_FEED, "f")],
    0x0A: [(EscapeFlag.NEWLINE, "n")],
    0x0D: [(EscapeFlag.CARRIAGE_RETURN, "r")],
    0x09: [(EscapeFlag.TAB, "t")],
    0x0B: [(EscapeFlag.VERTICAL_TAB, "v")],
    ord("\\"): [(EscapeFlag.BACKSLASH, "\\")],
    ord("'"): [(EscapeFlag.SINGLE_QUOTE, "'")],
    ord('"'): [(EscapeFlag.DOUBLE_QUOTE, '"')],
    ord("?"): [(EscapeFlag.QUESTION_MARK, "?")],
    # \e is canonical; \E only when the lowercase form is disabled
    0x1B: [(EscapeFlag.ESCAPE_LOWER, "e"), (EscapeFlag.ESCAPE_UPPER, "E")],
}

MAX_ASCII = 0x7F
MAX_CODE_UNIT = 0xFFFF


def is_iso_control(code: int) -> bool:
    return code <= 0x1F or code == 0x7F


def _mnemonic(dialect: int, code: int) -> Optional[str]:
    for flag, selector in REVERSE_ESCAPES.get(code, ()):
        if has_flag(dialect, flag):
            return "\\" + selector
    return None


def _escape_char(ascii_only: bool, dialect: int, raw: str, index: int) -> str:
    ch = raw[index]
    code = ord(ch)

    mnemonic = _mnemonic(dialect, code)
    if mnemonic is not None:
        return mnemonic

    if ascii_only and code > MAX_ASCII:
        if has_flag(dialect, EscapeFlag.UNICODE) and code <= MAX_CODE_UNIT:
            return f"\\u{code:04x}"
        raise MalformedLiteral(
            f"[STR-0050] cannot format {ch!r} (U+{code:04X}) as ASCII, no unicode escape available",
            ch, raw, index, "Format",
        )

    if is_iso_control(code):
        if has_flag(dialect, EscapeFlag.OCTAL):
            return f"\\{code:03o}"
        if has_flag(dialect, EscapeFlag.HEX):
            return f"\\x{code:02x}"
        if has_flag(dialect, EscapeFlag.UNICODE):
            return f"\\u{code:04x}"

    return ch


def format_string_literal(
        ascii_only: bool,
        dialect: int,
        raw: str,
        *,
        context: Optional[CodecContext] = None,
) -> str:
    """
    Format `raw` as a double-quoted literal for `dialect`.

    With `ascii_only`, every character above 127 must be written as a \\u
    escape; MalformedLiteral is raised when the dialect has none (or the
    character lies outside the 16-bit range a single \\u escape covers).
    """
    tracing = is_tracing(context)
    parts: List[str] = ['"']
    for i in range(len(raw)):
        piece = _escape_char(ascii_only, dialect, raw, i)
        if tracing and piece != raw[i]:
            log_debug(context, f"{i}: {raw[i]!r} -> {piece}")
        parts.append(piece)
    parts.append('"')
    return "".join(parts)


def format_c_ascii_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(True, C_FLAGS, raw, context=context)


def format_gcc_ascii_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(True, GCC_FLAGS, raw, context=context)


def format_java_ascii_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(True, JAVA_FLAGS, raw, context=context)


def format_java_unicode_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(False, JAVA_FLAGS, raw, context=context)


def format_scala_ascii_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(True, SCALA_FLAGS, raw, context=context)


def format_scala_unicode_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(False, SCALA_FLAGS, raw, context=context)


def format_permissive_ascii_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(True, PERMISSIVE_FLAGS, raw, context=context)


def format_permissive_unicode_string_literal(raw: str, *, context: Optional[CodecContext] = None) -> str:
    return format_string_literal(False, PERMISSIVE_FLAGS, raw, context=context)
