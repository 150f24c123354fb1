"""Tests for showenv.cli — argument parsing and the printed usage help."""

import argparse
import subprocess
import sys

import pytest

from showenv.cli import (
    DEFAULT_ENVIRONMENT,
    EXIT_CODES,
    _extract_global_flags,
    build_environment,
    build_parser,
    main,
    parse_env_assignment,
)
from showenv.envsection import SECTION_KEY_ENV_DETAILS, SECTION_KEY_ENV_HEADER


def _settings(**overrides):
    settings = {
        "usage_width": 80,
        "adjust_cjk": True,
        "color": False,
        "environment": {},
        "project_config": None,
    }
    settings.update(overrides)
    return settings


class TestGlobalFlagExtraction:
    """The two-pass global flag parsing."""

    def test_flags_anywhere(self):
        global_args, remaining = _extract_global_flags(
            ["-h", "--width", "100", "-vv"])
        assert global_args.width == 100
        assert global_args.verbose == 2
        assert remaining == ["-h"]

    def test_env_collected(self):
        global_args, _ = _extract_global_flags(
            ["--env", "A=alpha", "--env", "B=beta"])
        assert global_args.env == [("A", "alpha"), ("B", "beta")]

    def test_cjk_tristate(self):
        assert _extract_global_flags([])[0].cjk is None
        assert _extract_global_flags(["--cjk"])[0].cjk is True
        assert _extract_global_flags(["--no-cjk"])[0].cjk is False

    def test_bare_show(self):
        global_args, _ = _extract_global_flags(["--show"])
        assert global_args.show == [None]

    def test_show_with_spec(self):
        global_args, _ = _extract_global_flags(["--show", "help:2"])
        assert global_args.show == ["help:2"]

    def test_empty_argv(self):
        global_args, remaining = _extract_global_flags([])
        assert global_args.verbose == 0
        assert global_args.no_color is False
        assert global_args.config is None
        assert remaining == []


class TestParseEnvAssignment:
    """--env NAME=DESCRIPTION values."""

    def test_valid(self):
        assert parse_env_assignment("HOME=Home dir") == ("HOME", "Home dir")

    def test_description_may_contain_equals(self):
        assert parse_env_assignment("OPTS=a=b") == ("OPTS", "a=b")

    def test_empty_description(self):
        assert parse_env_assignment("X=") == ("X", "")

    @pytest.mark.parametrize("text", ["NOEQUALS", "=desc", "  =desc"])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_env_assignment(text)


class TestBuildParser:
    """The showenv parser and its section order."""

    def test_environment_section_before_footer(self):
        keys = build_parser(_settings()).help_sections.keys
        header = keys.index(SECTION_KEY_ENV_HEADER)
        assert keys[header + 1] == SECTION_KEY_ENV_DETAILS
        assert keys[header + 2] == "footerHeading"
        assert keys[header - 1] == "exitCodeList"

    def test_context_from_settings(self):
        parser = build_parser(_settings(usage_width=100, adjust_cjk=False))
        ctx = parser.help_context()
        assert ctx.width == 100
        assert ctx.adjust_cjk is False

    def test_environment_order(self):
        env = build_environment({"environment": {"EXTRA": "More"}})
        names = list(env)
        assert names[:3] == list(DEFAULT_ENVIRONMENT)
        assert names[-1] == "EXTRA"

    def test_config_overrides_description(self):
        env = build_environment({"environment": {"XYZ": "Overridden"}})
        assert env["XYZ"] == "Overridden"
        assert list(env).index("XYZ") == 2

    def test_help_layout(self):
        text = build_parser(_settings()).format_help()
        assert text.startswith("usage: showenv")
        assert ("Demonstrates a usage help message with an additional\n"
                "section for environment variables.") in text
        assert text.index("options:") < text.index("Exit Codes:")
        assert text.index("Exit Codes:") < text.index("Environment Variables:")
        assert text.index("Environment Variables:") < text.index("showenv --show")
        assert "  FOO_CREATOR" + " " * 11 + "The foo's creator\n" in text


class TestMain:
    """End-to-end runs of main()."""

    def test_prints_help(self, clean_environ, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "Environment Variables:\n" in out
        assert out.index("FOO_CREATOR") < out.index("BAR_CREATOR") < out.index("XYZ")
        for code in EXIT_CODES:
            assert f"  {code} " in out

    def test_help_flag(self, clean_environ, capsys):
        assert main(["--help"]) == 0
        assert "Environment Variables:" in capsys.readouterr().out

    def test_version(self, clean_environ, capsys):
        assert main(["--version"]) == 0
        assert "showenv 1.0.0" in capsys.readouterr().out

    def test_show_lists_channels(self, clean_environ, capsys):
        assert main(["--show"]) == 0
        out = capsys.readouterr().out
        assert "Available channels:" in out
        assert "help" in out and "table" in out

    def test_env_flag_adds_row(self, clean_environ, capsys):
        assert main(["--env", "NEW_VAR=A new variable"]) == 0
        assert "NEW_VAR" in capsys.readouterr().out

    def test_bad_env_flag(self, clean_environ, capsys):
        assert main(["--env", "bad"]) == 2
        assert "NAME=DESCRIPTION" in capsys.readouterr().err

    def test_unknown_argument(self, clean_environ, capsys):
        assert main(["--bogus"]) == 2
        assert "unrecognized arguments" in capsys.readouterr().err

    def test_bad_show_spec(self, clean_environ, capsys):
        assert main(["--show", "help:loud"]) == 2

    def test_width_flag(self, clean_environ, capsys):
        description = "word " * 40
        assert main(["--width", "120", "--env", f"LONG={description}"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert max(len(line) for line in lines) <= 120

    def test_narrow_width_clamped(self, clean_environ, capsys):
        assert main(["--width", "30"]) == 0
        captured = capsys.readouterr()
        assert "below the minimum" in captured.err
        assert "Environment Variables:" in captured.out

    def test_width_from_environment(self, clean_environ, monkeypatch, capsys):
        monkeypatch.setenv("SHOWENV_USAGE_WIDTH", "60")
        assert main(["--env", "LONG=" + "word " * 30]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert max(len(line) for line in lines) <= 60

    def test_bad_environment_width(self, clean_environ, monkeypatch, capsys):
        monkeypatch.setenv("SHOWENV_USAGE_WIDTH", "abc")
        assert main([]) == 1
        captured = capsys.readouterr()
        assert "SHOWENV_USAGE_WIDTH" in captured.err
        assert captured.out == ""

    def test_project_config_adds_variables(self, clean_environ, capsys):
        (clean_environ / ".showenv.json").write_text(
            '{"environment": {"PROJECT_VAR": "From the project"}}')
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "PROJECT_VAR" in out
        assert out.index("PROJECT_VAR") > out.index("Environment Variables:")

    def test_verbose_config_diagnostics(self, clean_environ, capsys):
        assert main(["--show", "config:2"]) == 0
        assert "Usage width=None" in capsys.readouterr().err

    def test_no_color_when_not_a_tty(self, clean_environ, capsys):
        assert main([]) == 0
        assert "\033[" not in capsys.readouterr().out

    def test_missing_footer_heading(self, clean_environ, monkeypatch, capsys):
        """Without a footerHeading key the section cannot be placed."""
        from showenv.lib.help_lib import core

        keys = [k for k in core.DEFAULT_SECTION_KEYS if k != "footerHeading"]
        monkeypatch.setattr(core, "DEFAULT_SECTION_KEYS", keys)
        assert main([]) == 1
        captured = capsys.readouterr()
        assert "ERROR: Section key 'footerHeading' not found" in captured.err
        assert captured.out == ""


@pytest.mark.slow
class TestSubprocess:
    """Run showenv as a module in a child interpreter."""

    def test_module_version(self):
        result = subprocess.run(
            [sys.executable, "-m", "showenv", "--version"],
            capture_output=True, text=True, timeout=30,
        )
        assert result.returncode == 0
        assert "showenv" in result.stdout

    def test_module_help(self):
        result = subprocess.run(
            [sys.executable, "-m", "showenv", "--width", "80"],
            capture_output=True, text=True, timeout=30,
        )
        assert result.returncode == 0
        assert "Environment Variables:" in result.stdout
