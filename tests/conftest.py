"""Shared fixtures for blogsite tests."""

import json
import textwrap

import pytest

from blogsite.config.loader import load_site_config
from blogsite.constants import BUNDLED_PLUGINS_DIR, PROJECT_ROOT
from blogsite.plugins.host import PluginHost

SITE_CONFIG_PATH = PROJECT_ROOT / "site_config.py"


@pytest.fixture
def site_config():
    """The shipped site declaration."""
    return load_site_config(SITE_CONFIG_PATH)


@pytest.fixture
def site_dict(site_config):
    """The shipped declaration as plain data."""
    return site_config.to_dict()


@pytest.fixture
def installed_dir(tmp_path):
    """An empty directory standing in for installed plugins."""
    path = tmp_path / "installed"
    path.mkdir()
    return path


@pytest.fixture
def make_host(installed_dir):
    """Build a PluginHost over the bundled plugins plus a temporary installed dir."""

    def _make(config):
        return PluginHost(
            config=config,
            bundled_dir=BUNDLED_PLUGINS_DIR,
            installed_dir=installed_dir,
        )

    return _make


@pytest.fixture
def write_plugin(installed_dir):
    """Write a minimal plugin (plugin.json + plugin.py) into the installed dir."""

    def _write(plugin_id, body=None, dirname=None, **manifest):
        plugin_dir = installed_dir / (dirname or plugin_id.replace("/", "-").lstrip("@"))
        plugin_dir.mkdir(parents=True)
        data = {
            "id": plugin_id,
            "name": plugin_id,
            "entry_point": "plugin:register",
        }
        data.update(manifest)
        (plugin_dir / "plugin.json").write_text(json.dumps(data), encoding="utf-8")
        if body is None:
            body = """
                class Recorder:
                    def __init__(self, api):
                        self.api = api

                    def describe(self):
                        return {"options": self.api.options}


                def register(api):
                    return Recorder(api)
            """
        (plugin_dir / "plugin.py").write_text(textwrap.dedent(body), encoding="utf-8")
        return plugin_dir

    return _write
