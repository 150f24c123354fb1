"""
Channel configuration and parsing for the THAC0 verbosity system.

Channels are named output categories. Each channel can carry its own
threshold that overrides the global verbosity.

Channel spec syntax:
    CHANNEL[:LEVEL]

    Examples:
        help        # level 0
        help:2      # level 2
        table:3     # show table layout decisions
"""

from dataclasses import dataclass
from typing import Dict


# Defaults for a bare log_lib; applications replace these at startup
KNOWN_CHANNELS = {
    'config',       # Configuration loading and overrides
    'general',      # Default channel
    'error',        # Error messages
    'trace',        # Function tracing (@trace decorator)
}

CHANNEL_DESCRIPTIONS: Dict[str, str] = {
    'config':  'Configuration loading and overrides',
    'general': 'General output',
    'error':   'Error messages',
    'trace':   'Function call tracing',
}

# Channels that are OFF unless explicitly enabled with --show.
# init_output() gives them an override of -1.
OPT_IN_CHANNELS = {
    'trace',
}


@dataclass
class ChannelConfig:
    """Configuration for a single output channel."""
    name: str
    level: int = 0


def parse_channel_spec(spec: str) -> ChannelConfig:
    """Parse a ``CHANNEL[:LEVEL]`` spec into a ChannelConfig.

    Raises:
        ValueError: if the name is empty or LEVEL is not an integer
    """
    name, _, level = spec.partition(':')
    name = name.strip()
    if not name:
        raise ValueError(f"Empty channel name in spec: {spec!r}")
    if level:
        try:
            return ChannelConfig(name=name, level=int(level))
        except ValueError:
            raise ValueError(
                f"Channel level must be an integer: {spec!r}") from None
    return ChannelConfig(name=name)


def format_channel_list() -> str:
    """Format the currently known channels for display."""
    lines = ["Available channels:"]
    max_name = max(len(name) for name in KNOWN_CHANNELS)
    for name in sorted(KNOWN_CHANNELS):
        desc = CHANNEL_DESCRIPTIONS.get(name, '')
        opt_in = " (opt-in)" if name in OPT_IN_CHANNELS else ""
        lines.append(f"  {name:<{max_name}}  {desc}{opt_in}")
    return "\n".join(lines)
