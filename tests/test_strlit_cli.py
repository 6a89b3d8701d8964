#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io

import pytest

import strlit
from strlit_context import LogLevel
from strlit_flags import GCC_FLAGS, JAVA_FLAGS


def _run_main(argv):
    with pytest.raises(SystemExit) as exc:
        strlit.main(argv)
    return exc.value.code


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("STRLIT_DIALECT", raising=False)
    monkeypatch.delenv("STRLIT_ASCII", raising=False)


def test_parse_prints_content(capsys):
    rc = _run_main(["parse", r'"a\101\tb"'])

    assert rc == 0
    assert capsys.readouterr().out == "aA\tb\n"


def test_parse_with_index_and_show_index(capsys):
    rc = _run_main(["parse", "--index", "4", "--show-index", 'x = "hi";'])

    assert rc == 0
    assert capsys.readouterr().out == "7\nhi\n"


def test_parse_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('"from\\x20stdin"\n'))

    rc = _run_main(["decode"])

    assert rc == 0
    assert capsys.readouterr().out == "from stdin\n"


def test_parse_error_exits_1_and_reports(capsys):
    rc = _run_main(["parse", r'"\q"'])

    assert rc == 1
    err = capsys.readouterr().err
    assert "error: [STR-0030] unsupported escape character: 'q'" in err


def test_parse_uses_dialect_option(capsys):
    assert _run_main(["parse", r'"\e"']) == 1
    capsys.readouterr()

    assert _run_main(["-d", "gcc", "parse", r'"\e"']) == 0
    assert capsys.readouterr().out == "\x1b\n"


def test_dialect_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("STRLIT_DIALECT", "java")

    rc = _run_main(["format", "caf\xe9"])

    assert rc == 0
    assert capsys.readouterr().out == '"caf\\u00e9"\n'


def test_format_ascii_failure_in_c(capsys):
    rc = _run_main(["format", "caf\xe9"])

    assert rc == 1
    assert "[STR-0050]" in capsys.readouterr().err


def test_format_unicode_flag_emits_verbatim(capsys):
    rc = _run_main(["encode", "--unicode", "caf\xe9\n"])

    assert rc == 0
    assert capsys.readouterr().out == '"caf\xe9\\n"\n'


def test_ascii_disabled_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("STRLIT_ASCII", "no")

    rc = _run_main(["format", "\xe9"])

    assert rc == 0
    assert capsys.readouterr().out == '"\xe9"\n'


def test_format_reads_stdin_without_trailing_newline(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("tab\there\n"))

    rc = _run_main(["format"])

    assert rc == 0
    assert capsys.readouterr().out == '"tab\\there"\n'


def test_flags_lists_presets(capsys):
    rc = _run_main(["flags"])

    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split(":")[0] for line in lines] == ["c", "gcc", "java", "scala", "permissive"]
    assert lines[2].startswith(f"java: {int(JAVA_FLAGS):#06x} backspace ")


def test_flags_describes_spec(capsys):
    rc = _run_main(["flags", "c+escape_lower+escape_upper"])

    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith(f"gcc: {int(GCC_FLAGS):#06x} ")
    assert "escape_lower escape_upper" in out


def test_flags_unknown_name_exits_2(capsys):
    rc = _run_main(["flags", "bogus"])

    assert rc == 2
    assert "unknown escape flag or dialect preset 'bogus'" in capsys.readouterr().err


def test_bad_dialect_option_is_usage_error(capsys):
    rc = _run_main(["-d", "klingon", "parse", '""'])

    assert rc == 2
    assert "unknown escape flag or dialect preset 'klingon'" in capsys.readouterr().err


def test_empty_dialect_option_is_not_the_default(monkeypatch, capsys):
    monkeypatch.setenv("STRLIT_DIALECT", "gcc")

    rc = _run_main(["-d", "", "parse", r'"\n"'])

    assert rc == 1
    assert "[STR-0030]" in capsys.readouterr().err


def test_empty_dialect_option_parses_plain_literal(capsys):
    rc = _run_main(["-d", "", "parse", '"plain"'])

    assert rc == 0
    assert capsys.readouterr().out == "plain\n"


def test_parse_prints_lone_surrogate_escaped(capsys):
    rc = _run_main(["-d", "java", "parse", r'"\ud800"'])

    assert rc == 0
    assert capsys.readouterr().out == "\\ud800\n"


def test_format_prints_lone_surrogate_escaped(capsys):
    rc = _run_main(["-d", "java", "format", "--unicode", chr(0xD800)])

    assert rc == 0
    assert capsys.readouterr().out == '"\\ud800"\n'


def test_build_codec_context_verbosity():
    import argparse

    ctx = strlit.build_codec_context(argparse.Namespace(verbosity=0))
    assert ctx.log_level == LogLevel.ERROR
    ctx = strlit.build_codec_context(argparse.Namespace(verbosity=1))
    assert ctx.log_level == LogLevel.INFO
    ctx = strlit.build_codec_context(argparse.Namespace(verbosity=3, dialect="java"))
    assert ctx.log_level == LogLevel.DEBUG
    assert ctx.dialect == JAVA_FLAGS
    assert ctx.ascii_only is True


def test_verbose_debug_traces_to_stderr(capsys):
    rc = _run_main(["-vvv", "parse", r'"\1x"'])

    assert rc == 0
    captured = capsys.readouterr()
    assert captured.out == "\x01x\n"
    assert "AtOctal -> InQuote (reread)" in captured.err
    assert "Parsing with dialect c" in captured.err
