"""Shared test fixtures for showenv test suite."""

import io
import os
from unittest.mock import patch

import pytest

from showenv.lib.help_lib import HelpContext
from showenv.lib.log_lib import OutputManager
from showenv.lib.log_lib import channels as _channels_mod
from showenv.lib.log_lib import manager as _manager_mod


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: runs showenv in a subprocess (python run_tests.py --all)")


# ---------------------------------------------------------------------------
# Output isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _isolate_output():
    """Reset the OutputManager singleton and channel tables around each test.

    main() calls configure_showenv_channels() and init_output(), which
    mutate module-level state.
    """
    saved = (
        _channels_mod.KNOWN_CHANNELS,
        _channels_mod.CHANNEL_DESCRIPTIONS,
        _channels_mod.OPT_IN_CHANNELS,
    )
    _manager_mod._manager = None
    yield
    _manager_mod._manager = None
    (_channels_mod.KNOWN_CHANNELS,
     _channels_mod.CHANNEL_DESCRIPTIONS,
     _channels_mod.OPT_IN_CHANNELS) = saved


@pytest.fixture
def log_buf():
    """Install an OutputManager at verbosity 3 writing to a buffer."""
    buf = io.StringIO()
    _manager_mod._manager = OutputManager(verbosity=3, file=buf)
    return buf


# ---------------------------------------------------------------------------
# Environment / config isolation
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.showenv/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def clean_environ(monkeypatch, tmp_config_home, tmp_path):
    """No showenv variables set, empty home, cwd without a project config."""
    for name in ("SHOWENV_USAGE_WIDTH", "SHOWENV_CJK", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("COLUMNS", "100")
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


# ---------------------------------------------------------------------------
# Help fixtures
# ---------------------------------------------------------------------------
SAMPLE_ENV = {
    "FOO_CREATOR": "The foo's creator",
    "BAR_CREATOR": "The bar's creator",
    "XYZ": "xxxx yyyy zzz",
}


@pytest.fixture
def sample_env():
    """The three demonstration variables, in display order."""
    return dict(SAMPLE_ENV)


@pytest.fixture
def ctx():
    """An 80-column HelpContext with CJK adjustment on."""
    return HelpContext(width=80, adjust_cjk=True)
