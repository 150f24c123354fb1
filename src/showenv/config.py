"""Configuration for showenv usage help.

Layered resolution (highest priority wins):
  1. CLI flags — --width, --cjk/--no-cjk, --no-color, --env
  2. Environment — SHOWENV_USAGE_WIDTH, SHOWENV_CJK, NO_COLOR
  3. Project config — .showenv.json in the working directory or a parent
  4. Global config — ~/.showenv/config.json

The ``environment`` object in either config file adds variables to the
help's Environment Variables section. Project entries override global
ones; --env flags override both.
"""

import json
import os
from pathlib import Path


ENV_USAGE_WIDTH = "SHOWENV_USAGE_WIDTH"
ENV_CJK = "SHOWENV_CJK"
ENV_NO_COLOR = "NO_COLOR"

PROJECT_CONFIG_NAME = ".showenv.json"

DEFAULTS = {
    "usage_width": None,
    "adjust_cjk": True,
    "color": True,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """A configuration value could not be used."""


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.showenv/)."""
    return Path.home() / ".showenv"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .showenv.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object, returning an empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config():
    """Load the global config file."""
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .showenv.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------
def parse_bool(value, source):
    """Interpret a config or environment value as a boolean."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{source}: expected a boolean, got {value!r}")


def parse_width(value, source):
    """Interpret a config or environment value as a usage width."""
    if value is None or isinstance(value, bool):
        raise ConfigError(f"{source}: expected an integer width, got {value!r}")
    try:
        width = int(str(value).strip())
    except ValueError:
        raise ConfigError(
            f"{source}: expected an integer width, got {value!r}") from None
    if width <= 0:
        raise ConfigError(f"{source}: width must be positive, got {width}")
    return width


def _file_layer(cfg, source):
    """Pull recognized settings out of a config file dict."""
    layer = {}
    width = cfg.get("usage_width", cfg.get("usage-width"))
    if width is not None:
        layer["usage_width"] = parse_width(width, f"{source}: usage_width")
    cjk = cfg.get("adjust_cjk", cfg.get("adjust-cjk"))
    if cjk is not None:
        layer["adjust_cjk"] = parse_bool(cjk, f"{source}: adjust_cjk")
    color = cfg.get("color")
    if color is not None:
        layer["color"] = parse_bool(color, f"{source}: color")
    env = cfg.get("environment")
    if env is not None:
        if not isinstance(env, dict):
            raise ConfigError(f"{source}: 'environment' must be an object")
        layer["environment"] = {str(k): str(v) for k, v in env.items()}
    return layer


def settings_from_environ(environ=None):
    """Settings given through environment variables."""
    environ = os.environ if environ is None else environ
    layer = {}
    if environ.get(ENV_USAGE_WIDTH):
        layer["usage_width"] = parse_width(environ[ENV_USAGE_WIDTH],
                                           ENV_USAGE_WIDTH)
    if ENV_CJK in environ:
        layer["adjust_cjk"] = parse_bool(environ[ENV_CJK], ENV_CJK)
    # https://no-color.org: any non-empty value disables color
    if environ.get(ENV_NO_COLOR):
        layer["color"] = False
    return layer


def settings_from_args(args):
    """Settings given on the command line (None means not given)."""
    layer = {}
    if args is None:
        return layer
    if getattr(args, "width", None) is not None:
        layer["usage_width"] = args.width
    if getattr(args, "cjk", None) is not None:
        layer["adjust_cjk"] = args.cjk
    if getattr(args, "no_color", False):
        layer["color"] = False
    env = getattr(args, "env", None)
    if env:
        layer["environment"] = dict(env)
    return layer


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_settings(args=None, start_dir=None, environ=None,
                     config_path=None):
    """Resolve usage help settings across all layers.

    Args:
        args: argparse namespace from the CLI (may be None)
        start_dir: Where to start looking for .showenv.json
        environ: Environment mapping (default: os.environ)
        config_path: Explicit global config file (overrides ~/.showenv)

    Returns:
        Dict with usage_width, adjust_cjk, color, environment and
        project_config (path or None).

    Raises:
        ConfigError: if a value in any layer is unusable
    """
    if config_path:
        global_cfg = load_json(config_path)
        global_source = str(config_path)
    else:
        global_cfg = load_global_config()
        global_source = str(get_global_config_path())
    project_cfg, project_path = load_project_config(start_dir)

    layers = [
        _file_layer(global_cfg, global_source),
        _file_layer(project_cfg, str(project_path)),
        settings_from_environ(environ),
        settings_from_args(args),
    ]

    resolved = dict(DEFAULTS)
    environment = {}
    for layer in layers:
        environment.update(layer.pop("environment", {}))
        resolved.update(layer)
    resolved["environment"] = environment
    resolved["project_config"] = project_path
    return resolved
