#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Quoted string literal parser.

Decodes a double-quoted literal with backslash escapes, starting at a given
offset of a source string, into the characters it denotes. Which escapes are
recognized is decided by the dialect (a union of EscapeFlag bits).

The parser is an explicit state machine: each state is a small record and
`_transition` consumes (or, for octal escapes, peeks at) one character and
returns the next state together with the next index.

Every state after the opening quote carries the same `content` list, which
transitions append to in place. A state is only valid until the next
transition; do not keep one around expecting its buffer to stay unchanged.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple, Union

from strlit_context import CodecContext
from strlit_errors import InternalCodecError, MalformedLiteral
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


HEX_CHARS = "0123456789abcdefABCDEF"
OCT_CHARS = "01234567"

HEX_WIDTH = 2
UNICODE_WIDTH = 4
OCTAL_MAX_WIDTH = 3

# selector -> (enabling flag, decoded code unit)
SIMPLE_ESCAPES = {
    "a": (EscapeFlag.BEL, 0x07),
    "b": (EscapeFlag.BACKSPACE, 0x08),
    "f": (EscapeFlag.FORM_FEED, 0x0C),
    "n": (EscapeFlag.NEWLINE, 0x0A),
    "r": (EscapeFlag.CARRIAGE_RETURN, 0x0D),
    "t": (EscapeFlag.TAB, 0x09),
    "v": (EscapeFlag.VERTICAL_TAB, 0x0B),
    "\\": (EscapeFlag.BACKSLASH, ord("\\")),
    "'": (EscapeFlag.SINGLE_QUOTE, ord("'")),
    '"': (EscapeFlag.DOUBLE_QUOTE, ord('"')),
    "?": (EscapeFlag.QUESTION_MARK, ord("?")),
    "e": (EscapeFlag.ESCAPE_LOWER, 0x1B),
    "E": (EscapeFlag.ESCAPE_UPPER, 0x1B),
}


class ParseResult(NamedTuple):
    end_index: int  # index of the closing quote in the source
    content: str


# ==========================
# Quote states
# ==========================

@dataclass
class NoQuote:
    pass


@dataclass
class InQuote:
    content: List[str] = field(default_factory=list)


@dataclass
class AfterSlash:
    content: List[str]


@dataclass
class AtOctal:
    content: List[str]
    digits: str = ""


@dataclass
class AtHex:
    content: List[str]
    digits: str = ""


@dataclass
class AtUnicode:
    content: List[str]
    digits: str = ""


QuoteState = Union[NoQuote, InQuote, AfterSlash, AtOctal, AtHex, AtUnicode]


def _state_name(state: QuoteState) -> str:
    return type(state).__name__


def _malformed(message: str, source: str, index: int, state: QuoteState) -> MalformedLiteral:
    char = source[index] if 0 <= index < len(source) else None
    return MalformedLiteral(message, char, source, index, _state_name(state))


# ==========================
# Transitions
# ==========================

def _fixed_width_digit(
        state: Union[AtHex, AtUnicode],
        width: int,
        code: str,
        kind: str,
        source: str,
        index: int,
) -> Tuple[QuoteState, int]:
    current = source[index]
    if current not in HEX_CHARS:
        raise _malformed(
            f"[{code}] bad character found in {kind} escape, not a hex digit: {current!r}",
            source, index, state,
        )
    digits = state.digits + current
    if len(digits) < width:
        return type(state)(state.content, digits), index + 1
    state.content.append(chr(int(digits, 16)))
    return InQuote(state.content), index + 1


def _transition(dialect: int, source: str, index: int, state: QuoteState) -> Tuple[QuoteState, int]:
    current = source[index]

    if isinstance(state, NoQuote):
        if current == '"':
            return InQuote(), index + 1
        raise _malformed(
            f"[STR-0010] a string literal must begin with '\"', not {current!r}",
            source, index, state,
        )

    if isinstance(state, InQuote):
        # the closing quote is handled by the caller, which owns the result
        if current == "\\":
            return AfterSlash(state.content), index + 1
        state.content.append(current)
        return state, index + 1

    if isinstance(state, AfterSlash):
        simple = SIMPLE_ESCAPES.get(current)
        if simple is not None and has_flag(dialect, simple[0]):
            state.content.append(chr(simple[1]))
            return InQuote(state.content), index + 1
        if current == "u" and has_flag(dialect, EscapeFlag.UNICODE):
            return AtUnicode(state.content), index + 1
        if current == "x" and has_flag(dialect, EscapeFlag.HEX):
            return AtHex(state.content), index + 1
        if current in OCT_CHARS and has_flag(dialect, EscapeFlag.OCTAL):
            # not consumed: the digit is reread as the first octal digit
            return AtOctal(state.content), index
        raise _malformed(
            f"[STR-0030] unsupported escape character: {current!r}",
            source, index, state,
        )

    if isinstance(state, AtHex):
        return _fixed_width_digit(state, HEX_WIDTH, "STR-0040", "hex", source, index)

    if isinstance(state, AtUnicode):
        return _fixed_width_digit(state, UNICODE_WIDTH, "STR-0041", "unicode", source, index)

    if isinstance(state, AtOctal):
        if current in OCT_CHARS:
            digits = state.digits + current
            if len(digits) < OCTAL_MAX_WIDTH:
                return AtOctal(state.content, digits), index + 1
            state.content.append(chr(int(digits, 8)))
            return InQuote(state.content), index + 1
        if not state.digits:
            raise InternalCodecError(
                f"[ICE-0010] octal escape entered at index {index} without an octal digit",
                _state_name(state),
            )
        # short octal escape: decode what we have and reread `current` as content
        state.content.append(chr(int(state.digits, 8)))
        return InQuote(state.content), index

    raise InternalCodecError(f"[ICE-0020] unknown quote state {state!r}")


# ==========================
# Public API
# ==========================

def parse_string_literal(
        dialect: int,
        source: str,
        index: int = 0,
        *,
        context: Optional[CodecContext] = None,
) -> ParseResult:
    """
    Parse the double-quoted literal that starts at `source[index]`.

    Returns the index of the closing quote and the decoded content, so a
    caller can resume scanning right after the literal.

    Raises MalformedLiteral if the literal does not start with a quote, uses
    an escape the dialect does not enable, has a bad digit in a fixed-width
    escape, or is not terminated before the end of `source`.
    """
    state: QuoteState = NoQuote()
    if index < 0 or index >= len(source):
        raise MalformedLiteral(
            f"[STR-0010] a string literal must begin with '\"', but index {index} is outside the source",
            None, source, index, _state_name(state),
        )

    tracing = is_tracing(context)
    while True:
        if index >= len(source):
            raise MalformedLiteral(
                "[STR-0020] unterminated string literal",
                None, source, index, _state_name(state),
            )
        if isinstance(state, InQuote) and source[index] == '"':
            content = "".join(state.content)
            log_debug(context, f"closing quote at {index}, decoded {len(content)} character(s)")
            return ParseResult(index, content)

        next_state, next_index = _transition(dialect, source, index, state)
        if tracing:
            log_debug(
                context,
                f"{index}: {source[index]!r} {_state_name(state)} -> {_state_name(next_state)}"
                + ("" if next_index > index else " (reread)"),
            )
        state, index = next_state, next_index


def parse_c_string_literal(source: str, index: int = 0, *, context: Optional[CodecContext] = None) -> ParseResult:
    return parse_string_literal(C_FLAGS, source, index, context=context)


def parse_gcc_string_literal(source: str, index: int = 0, *, context: Optional[CodecContext] = None) -> ParseResult:
    return parse_string_literal(GCC_FLAGS, source, index, context=context)


def parse_java_string_literal(source: str, index: int = 0, *, context: Optional[CodecContext] = None) -> ParseResult:
    return parse_string_literal(JAVA_FLAGS, source, index, context=context)


def parse_scala_string_literal(source: str, index: int = 0, *, context: Optional[CodecContext] = None) -> ParseResult:
    return parse_string_literal(SCALA_FLAGS, source, index, context=context)


def parse_permissive_string_literal(
        source: str,
        index: int = 0,
        *,
        context: Optional[CodecContext] = None,
) -> ParseResult:
    return parse_string_literal(PERMISSIVE_FLAGS, source, index, context=context)
