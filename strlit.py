#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
import os
import sys
from typing import Optional

from strlit_context import CodecContext, LogLevel
from strlit_errors import InternalCodecError, MalformedLiteral
from strlit_flags import PRESETS, dialect_from_spec, flag_names, preset_name
from strlit_formatter import format_string_literal
from strlit_logger import log_error, log_info
from strlit_parser import parse_string_literal


DEFAULT_DIALECT = "c"
FALSE_VALUES = ("0", "false", "no", "off")


def _env_dialect_spec() -> str:
    return os.getenv("STRLIT_DIALECT") or DEFAULT_DIALECT


def _env_ascii_only() -> bool:
    value = os.getenv("STRLIT_ASCII")
    if value is None:
        return True
    return value.strip().lower() not in FALSE_VALUES


def _dialect_spec(args: argparse.Namespace) -> str:
    # an explicit empty spec is the empty dialect, not "unset"
    spec = getattr(args, 'dialect', None)
    if spec is None:
        return _env_dialect_spec()
    return spec


def build_codec_context(args: argparse.Namespace) -> CodecContext:
    """Build a CodecContext from command-line arguments and the environment."""
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    spec = _dialect_spec(args)
    return CodecContext(
        dialect=dialect_from_spec(spec),
        ascii_only=_env_ascii_only(),
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
    )


def _read_input(value: Optional[str], strip_newline: bool) -> str:
    if value is not None:
        return value
    text = sys.stdin.read()
    if strip_newline and text.endswith("\n"):
        text = text[:-1]
    return text


def _print_text(text: str) -> None:
    # lone surrogates are valid decoded content but cannot be encoded as-is
    encoding = sys.stdout.encoding or "utf-8"
    print(text.encode(encoding, "backslashreplace").decode(encoding))


def _describe(spec_name: str, dialect: int) -> str:
    names = " ".join(flag_names(dialect)) or "<none>"
    return f"{spec_name}: {int(dialect):#06x} {names}"


def cmd_parse(args: argparse.Namespace) -> int:
    """Decode a quoted literal and print its content."""
    context = build_codec_context(args)
    source = _read_input(args.literal, strip_newline=False)
    log_info(context, f"Parsing with dialect {preset_name(context.dialect) or int(context.dialect)}")

    try:
        result = parse_string_literal(context.dialect, source, args.index, context=context)
    except MalformedLiteral as e:
        log_error(context, f"error: {e.format()}")
        return 1
    except InternalCodecError as e:
        log_error(context, e.format())
        return 1

    if args.show_index:
        print(result.end_index)
    _print_text(result.content)
    return 0


def cmd_format(args: argparse.Namespace) -> int:
    """Encode raw text as a quoted literal and print it."""
    context = build_codec_context(args)
    raw = _read_input(args.text, strip_newline=True)
    ascii_only = context.ascii_only and not args.unicode
    log_info(context, f"Formatting {len(raw)} character(s), ascii_only={ascii_only}")

    try:
        literal = format_string_literal(ascii_only, context.dialect, raw, context=context)
    except MalformedLiteral as e:
        log_error(context, f"error: {e.format()}")
        return 1

    _print_text(literal)
    return 0


def cmd_flags(args: argparse.Namespace) -> int:
    """
    Describe dialects.

    With a spec, prints the mask and flag names it resolves to.
    Without one, lists every preset.
    """
    context = build_codec_context(args)
    if args.spec is None:
        for name, dialect in PRESETS.items():
            print(_describe(name, dialect))
        return 0

    try:
        dialect = dialect_from_spec(args.spec)
    except ValueError as e:
        log_error(context, f"error: {e}")
        return 2
    print(_describe(preset_name(dialect) or args.spec, dialect))
    return 0


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="strlit", description="Quoted string literal codec")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")
    parser.add_argument(
        "-d", "--dialect",
        help="Dialect spec: presets and/or flag names joined by ',' or '+' "
             "(default: $STRLIT_DIALECT or 'c')",
    )

    ###########################
    # parse command
    ###########################
    p_parse = subparsers.add_parser("parse", help="Decode a quoted literal", aliases=["decode"])
    p_parse.add_argument("--index", "-i", type=int, default=0,
                         help="Offset of the opening quote (default: 0)")
    p_parse.add_argument("--show-index", action="store_true",
                         help="Print the closing quote index before the content")
    p_parse.add_argument("literal", nargs="?", help="Quoted literal (default: read stdin)")
    p_parse.set_defaults(func=cmd_parse)

    ###########################
    # format command
    ###########################
    p_format = subparsers.add_parser("format", help="Encode text as a quoted literal", aliases=["encode"])
    p_format.add_argument("--unicode", "-u", action="store_true",
                          help="Emit non-ASCII characters verbatim (default: $STRLIT_ASCII, ASCII only)")
    p_format.add_argument("text", nargs="?",
                          help="Raw text (default: stdin, minus one trailing newline)")
    p_format.set_defaults(func=cmd_format)

    ###########################
    # flags command
    ###########################
    p_flags = subparsers.add_parser("flags", help="Describe a dialect or list presets")
    p_flags.add_argument("spec", nargs="?", help="Dialect spec to describe")
    p_flags.set_defaults(func=cmd_flags)

    args = parser.parse_args(argv)

    try:
        dialect_from_spec(_dialect_spec(args))
    except ValueError as e:
        parser.error(str(e))

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
