"""
Codec context for cross-cutting options.

This module defines the CodecContext dataclass which holds options shared by
the parser, the formatter and the command line (logging, default dialect).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import IntEnum

from strlit_flags import C_FLAGS


class LogLevel(IntEnum):
    """Hierarchical logging levels for strlit."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # State machine tracing (-vvv)


@dataclass
class CodecContext:
    """
    Holds options that affect both directions of the codec.

    Attributes:
        dialect:            Escape flags used when the caller does not name a dialect.
        ascii_only:         If True, the formatter escapes every character above 127.
        log_rich_format:    If True, emit logs in rich format: timestamps and levels.
        log_level:          Current logging level.
    """
    dialect: int = C_FLAGS
    ascii_only: bool = True
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING

    @staticmethod
    def default() -> 'CodecContext':
        """Create a CodecContext with default settings."""
        return CodecContext(log_level=LogLevel.WARNING)
