"""Environment Variables section for usage help.

Adds two sections just above the footer of a parser's help: a heading
line and a table of variable names with their descriptions::

    Environment Variables:
      FOO_CREATOR   The foo's creator
      BAR_CREATOR   The bar's creator
      XYZ           xxxx yyyy zzz
"""

from typing import Mapping

from showenv.lib.help_lib import (
    DefinitionListRenderer, HeadingRenderer, SectionRegistry,
    SECTION_KEY_FOOTER_HEADING,
)
from showenv.lib.log_lib import get_output, trace


SECTION_KEY_ENV_HEADER = "environmentVariablesHeader"
SECTION_KEY_ENV_DETAILS = "environmentVariables"

ENV_HEADING = "Environment Variables:"


class EnvironmentHeaderRenderer(HeadingRenderer):
    """The fixed ``Environment Variables:`` heading line."""

    def __init__(self, text: str = ENV_HEADING):
        super().__init__(text)


class EnvironmentVariablesRenderer(DefinitionListRenderer):
    """Variable names and descriptions, in the order they were given.

    The renderer keeps its own read-only copy of the mapping, so later
    changes to the caller's dict do not show up in the help.
    """


@trace
def install_renderers(registry: SectionRegistry, env: Mapping[str, str],
                      anchor: str = SECTION_KEY_FOOTER_HEADING) -> None:
    """Register the environment sections directly before ``anchor``.

    Args:
        registry: The parser's help sections
        env: Variable name -> description, in display order
        anchor: Existing section key to insert before

    Raises:
        AnchorNotFoundError: if ``anchor`` is not one of the registry's keys
    """
    registry.insert_before(anchor, SECTION_KEY_ENV_HEADER,
                           SECTION_KEY_ENV_DETAILS)
    registry.put(SECTION_KEY_ENV_HEADER, EnvironmentHeaderRenderer())
    registry.put(SECTION_KEY_ENV_DETAILS, EnvironmentVariablesRenderer(env))
    get_output().emit(1, "Environment section lists {n} variable(s)",
                      channel='help', n=len(env))
