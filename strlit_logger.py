"""
Logging utilities for strlit.

This module provides logging functions that respect the CodecContext
flags (log level and rich format).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from strlit_context import CodecContext, LogLevel


def log(context: Optional[CodecContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's logging level admits it.

    A missing context logs with the default settings (WARNING and above).

    Args:
        context:    The codec context containing the logging level, or None.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        context = CodecContext.default()
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    if context.log_level >= log_level:
        print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[CodecContext], message: str) -> None:
    """
    Log an error-level message if logging level is ERROR or higher.

    Args:
        context: The codec context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[CodecContext], message: str) -> None:
    """
    Log a warning-level message if logging level is WARNING or higher.

    Args:
        context: The codec context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[CodecContext], message: str) -> None:
    """
    Log an info-level message if logging level is INFO or higher.

    Args:
        context: The codec context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[CodecContext], message: str) -> None:
    """
    Log a debug-level message if logging level is DEBUG or higher.

    Args:
        context: The codec context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.DEBUG, message)


def is_tracing(context: Optional[CodecContext]) -> bool:
    """True when per-character DEBUG tracing would be printed."""
    return context is not None and context.log_level >= LogLevel.DEBUG
