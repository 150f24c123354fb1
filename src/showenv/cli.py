"""Main CLI entry point for showenv.

Prints a usage help message that carries an extra "Environment
Variables" section just above the footer.

Two-pass argument parsing:
  1. First pass: extract global flags (--verbose, --width, --env, ...)
     from anywhere in argv. These shape the help, so they must be known
     before -h/--help prints it.
  2. Second pass: the full parser, with the environment section
     installed, handles -h/--help, -V/--version and usage errors.
"""

import argparse
import sys

from showenv._version import BASE_VERSION
from showenv.lib.help_lib import AnchorNotFoundError, SectionedArgumentParser


EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_INTERRUPTED = 130

EXIT_CODES = {
    EXIT_OK: "Usage help printed",
    EXIT_CONFIG_ERROR: "Invalid configuration (width, config file, sections)",
    EXIT_USAGE_ERROR: "Invalid command line arguments",
    EXIT_INTERRUPTED: "Interrupted",
}

# Demonstration variables, in display order
DEFAULT_ENVIRONMENT = {
    "FOO_CREATOR": "The foo's creator",
    "BAR_CREATOR": "The bar's creator",
    "XYZ": "xxxx yyyy zzz",
}

# Variables showenv itself reads
SETTINGS_ENVIRONMENT = {
    "SHOWENV_USAGE_WIDTH": "Usage help width in columns (minimum 55)",
    "SHOWENV_CJK": "Count wide CJK characters as two columns when "
                   "wrapping (1/0, default 1)",
    "NO_COLOR": "Disable bold section headings when set",
}


def parse_env_assignment(text):
    """argparse type for --env NAME=DESCRIPTION."""
    name, sep, description = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(
            f"expected NAME=DESCRIPTION, got {text!r}")
    return name, description.strip()


# ---------------------------------------------------------------------------
# Global flags (can appear anywhere in argv)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "Increase diagnostic verbosity (-v, -vv, -vvv)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Decrease verbosity (-Q, -QQ, -QQQ, -QQQQ=silent)"},
    "--show": {"nargs": "?", "action": "append", "metavar": "CHANNEL[:LEVEL]",
               "help": "Show diagnostic channel (bare --show lists channels)"},
    "--width": {"type": int, "metavar": "N", "default": None,
                "help": "Usage help width (default: terminal width)"},
    "--cjk": {"action": argparse.BooleanOptionalAction, "default": None,
              "help": "Count wide CJK characters as two columns"},
    "--env": {"action": "append", "type": parse_env_assignment,
              "metavar": "NAME=DESC", "default": None,
              "help": "Add a variable to the Environment Variables section"},
    "--no-color": {"action": "store_true", "default": False,
                   "help": "Disable bold section headings"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Path to config file (default: ~/.showenv/config.json)"},
}


def _add_global_flags(parser):
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(prog="showenv", add_help=False)
    _add_global_flags(global_parser)
    return global_parser.parse_known_args(argv)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
def build_environment(settings):
    """Variables for the help section: demo set, showenv's own, then config."""
    env = dict(DEFAULT_ENVIRONMENT)
    env.update(SETTINGS_ENVIRONMENT)
    env.update(settings.get("environment") or {})
    return env


def build_parser(settings):
    """Build the showenv parser with the environment section installed."""
    from showenv.envsection import install_renderers

    parser = SectionedArgumentParser(
        prog="showenv",
        description=(
            "Demonstrates a usage help message with an additional\n"
            "section for environment variables."
        ),
        epilog="Run 'showenv --show' to list diagnostic channels.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage_width=settings.get("usage_width"),
        adjust_cjk=settings.get("adjust_cjk", True),
        help_color=settings.get("color", False),
        exit_codes=EXIT_CODES,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"showenv {BASE_VERSION}",
    )
    _add_global_flags(parser)

    install_renderers(parser.help_sections, build_environment(settings))
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def _exit_code(exc):
    """Map a SystemExit raised by argparse to a return code."""
    if exc.code is None:
        return EXIT_OK
    return exc.code if isinstance(exc.code, int) else EXIT_USAGE_ERROR


def main(argv=None):
    """Main entry point for showenv.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (see EXIT_CODES).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    try:
        global_args, remaining = _extract_global_flags(argv)
    except SystemExit as e:
        return _exit_code(e)

    from showenv.channels import configure_showenv_channels
    from showenv.lib.log_lib import format_channel_list, init_output
    from showenv.output import print_error
    configure_showenv_channels()

    # Bare --show lists channels and exits
    if global_args.show and None in global_args.show:
        print(format_channel_list())
        return EXIT_OK

    verbosity = (global_args.verbose or 0) - (global_args.quiet or 0)
    channels = [s for s in (global_args.show or []) if s is not None]
    try:
        out = init_output(verbosity=verbosity, channels=channels)
    except ValueError as e:
        print(f"showenv: error: --show: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    from showenv.config import ConfigError, resolve_settings
    try:
        settings = resolve_settings(global_args, config_path=global_args.config)
        if settings["project_config"]:
            out.emit(2, "Loaded project config {path}", channel='config',
                     path=settings["project_config"])
        settings["color"] = settings["color"] and sys.stdout.isatty()
        out.emit(2, "Usage width={w} cjk={cjk} color={color}",
                 channel='config', w=settings["usage_width"],
                 cjk=settings["adjust_cjk"], color=settings["color"])
        parser = build_parser(settings)
    except (ConfigError, AnchorNotFoundError) as e:
        print_error(str(e))
        return EXIT_CONFIG_ERROR

    # Pass 2: -h/--help and -V/--version exit from inside parse_args
    try:
        parser.parse_args(remaining)
        parser.print_help()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return EXIT_INTERRUPTED
    except SystemExit as e:
        return _exit_code(e)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
