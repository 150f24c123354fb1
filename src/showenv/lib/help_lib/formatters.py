"""
argparse integration for sectioned usage help.

SectionedArgumentParser renders its help by walking a SectionRegistry.
The default renderers reproduce argparse's own output, one section per
key, so a parser with the default keys prints the same help as a plain
ArgumentParser. Custom sections are added by inserting keys and
registering renderers.
"""

import argparse
import shutil
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from ..log_lib import get_output
from .core import (
    DEFAULT_USAGE_WIDTH, MINIMUM_USAGE_WIDTH,
    SECTION_KEY_COMMAND_LIST, SECTION_KEY_DESCRIPTION,
    SECTION_KEY_EXIT_CODE_LIST, SECTION_KEY_EXIT_CODE_LIST_HEADING,
    SECTION_KEY_FOOTER, SECTION_KEY_HEADER, SECTION_KEY_OPTION_LIST,
    SECTION_KEY_PARAMETER_LIST, SECTION_KEY_SYNOPSIS,
    FunctionRenderer, HelpContext, SectionRegistry, SectionRenderer,
)
from .table import Column, Overflow


# =============================================================================
# Reusable renderers
# =============================================================================

class HeadingRenderer(SectionRenderer):
    """Renders a fixed heading line."""

    def __init__(self, text: str):
        self.text = text

    def render(self, ctx: HelpContext) -> str:
        return ctx.emphasize(self.text) + "\n"

    def __repr__(self):
        return f"{type(self).__name__}({self.text!r})"


class DefinitionListRenderer(SectionRenderer):
    """
    Renders name/description pairs as an indented two-column table.

    Column 1 holds the names (indent 2, SPAN) and is three wider than the
    longest name. Column 2 takes the rest of the usage width (indent 2,
    WRAP). Rows keep the insertion order of the entries. No entries means
    an empty section.
    """

    indent = 2

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        # Own a private copy; callers cannot change what gets rendered
        self._entries = MappingProxyType(dict(entries or {}))

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def entries_for(self, ctx: HelpContext) -> Mapping[str, str]:
        """Entries to render for this context."""
        return self._entries

    @staticmethod
    def key_width(names) -> int:
        """Length of the longest name (0 for none)."""
        return max((len(name) for name in names), default=0)

    def columns(self, ctx: HelpContext, key_width: int):
        """The (name, description) columns for a given key width.

        The description column never drops below one character of text,
        even when a name is nearly as wide as the usage width.
        """
        first = key_width + 3
        second = max(ctx.width - first, self.indent + 1)
        return (Column(first, self.indent, Overflow.SPAN),
                Column(second, self.indent, Overflow.WRAP))

    def render(self, ctx: HelpContext) -> str:
        entries = self.entries_for(ctx)
        if not entries:
            return ""
        key_width = self.key_width(entries.keys())
        table = ctx.table(*self.columns(ctx, key_width))
        for name, description in entries.items():
            table.add_row(str(name), str(description))
        get_output().emit(3, "{cls}: key width {kw}, {rows} lines",
                          channel='table', cls=type(self).__name__,
                          kw=key_width, rows=table.row_count)
        return table.render()


class ExitCodeListRenderer(DefinitionListRenderer):
    """Renders the parser's ``exit_codes`` mapping."""

    def entries_for(self, ctx: HelpContext) -> Mapping[str, str]:
        codes = getattr(ctx.parser, 'exit_codes', None) or {}
        return {str(code): desc for code, desc in codes.items()}


class ExitCodeListHeadingRenderer(SectionRenderer):
    """Heading for the exit code list, shown only when there are exit codes."""

    def __init__(self, text: str = "Exit Codes:"):
        self.text = text

    def render(self, ctx: HelpContext) -> str:
        if not getattr(ctx.parser, 'exit_codes', None):
            return ""
        return "\n" + ctx.emphasize(self.text) + "\n"


# =============================================================================
# argparse-backed renderers
# =============================================================================

def _is_command_group(parser, group) -> bool:
    if group is parser._positionals:
        return False
    return any(isinstance(a, argparse._SubParsersAction)
               for a in group._group_actions)


def _make_formatter(ctx: HelpContext):
    parser = ctx.parser
    formatter = parser.formatter_class(prog=parser.prog, width=ctx.width)
    if hasattr(formatter, '_set_color'):
        formatter._set_color(getattr(parser, 'color', False))
    return formatter


def _action_max_length(ctx: HelpContext) -> int:
    # argparse aligns help text across every group, so measure them all
    formatter = _make_formatter(ctx)
    for group in ctx.parser._action_groups:
        formatter.start_section(group.title)
        formatter.add_arguments(group._group_actions)
        formatter.end_section()
    return formatter._action_max_length


def _format_groups(ctx: HelpContext, groups) -> str:
    parts = []
    max_length = _action_max_length(ctx)
    for group in groups:
        formatter = _make_formatter(ctx)
        formatter._action_max_length = max_length
        formatter.start_section(group.title)
        formatter.add_text(group.description)
        formatter.add_arguments(group._group_actions)
        formatter.end_section()
        text = formatter.format_help()
        if text.strip():
            parts.append("\n" + text)
    return "".join(parts)


def _format_paragraph(ctx: HelpContext, text: Optional[str]) -> str:
    if not text:
        return ""
    formatter = _make_formatter(ctx)
    formatter.add_text(text)
    return "\n" + formatter.format_help()


def render_header(ctx: HelpContext) -> str:
    header = getattr(ctx.parser, 'header', None)
    if not header:
        return ""
    return header.rstrip("\n") + "\n"


def render_synopsis(ctx: HelpContext) -> str:
    parser = ctx.parser
    formatter = _make_formatter(ctx)
    formatter.add_usage(parser.usage, parser._actions,
                        parser._mutually_exclusive_groups)
    return formatter.format_help()


def render_description(ctx: HelpContext) -> str:
    return _format_paragraph(ctx, ctx.parser.description)


def render_parameter_list(ctx: HelpContext) -> str:
    return _format_groups(ctx, [ctx.parser._positionals])


def render_option_list(ctx: HelpContext) -> str:
    parser = ctx.parser
    groups = [g for g in parser._action_groups
              if g is not parser._positionals
              and not _is_command_group(parser, g)]
    return _format_groups(ctx, groups)


def render_command_list(ctx: HelpContext) -> str:
    parser = ctx.parser
    groups = [g for g in parser._action_groups
              if _is_command_group(parser, g)]
    return _format_groups(ctx, groups)


def render_footer(ctx: HelpContext) -> str:
    return _format_paragraph(ctx, ctx.parser.epilog)


def default_renderers() -> Dict[str, SectionRenderer]:
    """Fresh renderers for the standard sections argparse knows about."""
    return {
        SECTION_KEY_HEADER: FunctionRenderer(render_header),
        SECTION_KEY_SYNOPSIS: FunctionRenderer(render_synopsis),
        SECTION_KEY_DESCRIPTION: FunctionRenderer(render_description),
        SECTION_KEY_PARAMETER_LIST: FunctionRenderer(render_parameter_list),
        SECTION_KEY_OPTION_LIST: FunctionRenderer(render_option_list),
        SECTION_KEY_COMMAND_LIST: FunctionRenderer(render_command_list),
        SECTION_KEY_EXIT_CODE_LIST_HEADING: ExitCodeListHeadingRenderer(),
        SECTION_KEY_EXIT_CODE_LIST: ExitCodeListRenderer(),
        SECTION_KEY_FOOTER: FunctionRenderer(render_footer),
    }


# =============================================================================
# Parser
# =============================================================================

def resolve_usage_width(width: Optional[int] = None) -> int:
    """Pick the usage width: explicit value, else the terminal, clamped to the minimum."""
    if width is None:
        width = shutil.get_terminal_size(
            (DEFAULT_USAGE_WIDTH, 24)).columns - 2
    if width < MINIMUM_USAGE_WIDTH:
        get_output().warn(
            "  Usage width {width} is below the minimum; using {minimum}",
            channel='help', width=width, minimum=MINIMUM_USAGE_WIDTH)
        width = MINIMUM_USAGE_WIDTH
    return width


class SectionedArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser whose help is assembled from a SectionRegistry.

    Extra keyword arguments:
        usage_width: Help width; None follows the terminal like argparse
        adjust_cjk: Count wide CJK characters as two columns when wrapping
        help_color: Allow bold emphasis in custom sections
        header: Text shown above the usage line
        exit_codes: Mapping of exit code -> description for the exit code list

    Usage::

        parser = SectionedArgumentParser(prog="app", exit_codes={0: "OK"})
        parser.help_sections.insert_before("footerHeading", "notes")
        parser.help_sections.put("notes", lambda ctx: "Notes:\\n  none\\n")
        print(parser.format_help())
    """

    def __init__(self, *args, usage_width: Optional[int] = None,
                 adjust_cjk: bool = True, help_color: bool = False,
                 header: Optional[str] = None,
                 exit_codes: Optional[Mapping] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.usage_width = usage_width
        self.adjust_cjk = adjust_cjk
        self.help_color = help_color
        self.header = header
        self.exit_codes = dict(exit_codes or {})
        self.help_sections = SectionRegistry(renderers=default_renderers())

    def help_context(self) -> HelpContext:
        """Build the HelpContext for rendering this parser's help."""
        return HelpContext(
            width=resolve_usage_width(self.usage_width),
            adjust_cjk=self.adjust_cjk,
            color=self.help_color,
            parser=self,
        )

    def format_help(self) -> str:
        return self.help_sections.render(self.help_context())
