"""showenv channel definitions for the THAC0 verbosity system.

Configures the generic log_lib channel infrastructure with the channels
this application emits on, keeping log_lib itself project-agnostic.
"""

from showenv.lib.log_lib import channels as _ch


SHOWENV_CHANNELS = {
    'config',       # Configuration loading and resolution
    'help',         # Section registry changes and rendering
    'table',        # Text table layout
    'general',      # Default channel
    'error',        # Error messages
    'trace',        # Function tracing (@trace decorator)
}

SHOWENV_CHANNEL_DESCRIPTIONS = {
    'config':  'Configuration loading and resolution',
    'help':    'Help section registry and rendering',
    'table':   'Text table layout decisions',
    'general': 'General output',
    'error':   'Error messages',
    'trace':   'Function call tracing',
}

SHOWENV_OPT_IN_CHANNELS = {
    'trace',
}


def configure_showenv_channels():
    """Replace log_lib's default channels with the showenv set.

    Call once at startup before init_output().
    """
    _ch.KNOWN_CHANNELS = SHOWENV_CHANNELS
    _ch.CHANNEL_DESCRIPTIONS = SHOWENV_CHANNEL_DESCRIPTIONS
    _ch.OPT_IN_CHANNELS = SHOWENV_OPT_IN_CHANNELS
