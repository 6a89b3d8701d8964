#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from strlit_context import CodecContext, LogLevel
from strlit_flags import PRESETS
from strlit_formatter import format_string_literal
from strlit_parser import parse_string_literal


@pytest.fixture
def repo_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def debug_context() -> CodecContext:
    return CodecContext(log_level=LogLevel.DEBUG)


@pytest.fixture(params=sorted(PRESETS))
def preset(request):
    """Each preset as a (name, flags) pair."""
    return request.param, PRESETS[request.param]


def round_trip(dialect: int, raw: str, ascii_only: bool = True) -> str:
    """Format `raw` and parse the literal back, returning the decoded content.

    Usage:
        def test_something():
            assert round_trip(C_FLAGS, "a\\tb") == "a\\tb"
    """
    literal = format_string_literal(ascii_only, dialect, raw)
    result = parse_string_literal(dialect, literal)
    assert result.end_index == len(literal) - 1
    return result.content
