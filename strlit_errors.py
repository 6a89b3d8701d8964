#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Optional


DIAGNOSTIC_CODES = {
    "STR-0010": "string literal does not begin with a double quote",
    "STR-0020": "unterminated string literal",
    "STR-0030": "unsupported escape character",
    "STR-0040": "bad character in hex escape",
    "STR-0041": "bad character in unicode escape",
    "STR-0050": "cannot format as ASCII, no unicode escape available",
}


@dataclass
class MalformedLiteral(Exception):
    """
    A literal could not be parsed, or a raw string could not be formatted.

    `char` is the offending character (None when the input ran out), `source`
    the whole input, `index` the offending position in it and `state` the name
    of the codec state that rejected it.
    """
    message: str
    char: Optional[str]
    source: str
    index: int
    state: str

    def format(self) -> str:
        return f"{self.message} [source={self.source!r}, index={self.index}, state={self.state}]"

    def __str__(self) -> str:
        return self.format()


class InternalCodecError(RuntimeError):
    """
    ICE = codec bug / violated state machine invariant.
    Not for malformed input (that is MalformedLiteral).
    """

    def __init__(self, message: str, state: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.state = state

    def format(self) -> str:
        message = self.message
        if "[ICE-" not in message:
            message = f"[ICE-9999] {message}"
        if self.state:
            return f"internal codec error in state {self.state}: {message}"
        return f"internal codec error: {message}"
