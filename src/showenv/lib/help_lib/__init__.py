"""
Sectioned usage help for argparse applications.

Help output is a sequence of named sections. Each section key maps to a
renderer, and applications add their own sections by splicing keys into
the order relative to an existing anchor key.
"""

from .core import (
    AnchorNotFoundError, FunctionRenderer, HelpContext, SectionRegistry,
    SectionRenderer, DEFAULT_SECTION_KEYS, MINIMUM_USAGE_WIDTH,
    SECTION_KEY_EXIT_CODE_LIST, SECTION_KEY_FOOTER, SECTION_KEY_FOOTER_HEADING,
    SECTION_KEY_OPTION_LIST,
)
from .formatters import (
    DefinitionListRenderer, HeadingRenderer, SectionedArgumentParser,
)
from .table import Column, Overflow, TextTable

__all__ = [
    'AnchorNotFoundError',
    'FunctionRenderer',
    'HelpContext',
    'SectionRegistry',
    'SectionRenderer',
    'DEFAULT_SECTION_KEYS',
    'MINIMUM_USAGE_WIDTH',
    'SECTION_KEY_EXIT_CODE_LIST',
    'SECTION_KEY_FOOTER',
    'SECTION_KEY_FOOTER_HEADING',
    'SECTION_KEY_OPTION_LIST',
    'DefinitionListRenderer',
    'HeadingRenderer',
    'SectionedArgumentParser',
    'Column',
    'Overflow',
    'TextTable',
]
