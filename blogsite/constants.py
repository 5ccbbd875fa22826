"""Global constants for the blog site configuration."""

import os
from pathlib import Path

# Directory paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Site declaration (supports SITE_CONFIG env var, relative paths resolve against PROJECT_ROOT)
_site_config_env = os.getenv("SITE_CONFIG", "")
if _site_config_env:
    _site_config_path = Path(_site_config_env)
    SITE_CONFIG_FILE = _site_config_path if _site_config_path.is_absolute() else (PROJECT_ROOT / _site_config_path).resolve()
else:
    SITE_CONFIG_FILE = PROJECT_ROOT / "site_config.py"

PLUGINS_DIR = PROJECT_ROOT / "plugins"
BUNDLED_PLUGINS_DIR = PLUGINS_DIR / "bundled"        # shipped with the repo
INSTALLED_PLUGINS_DIR = PLUGINS_DIR / "installed"    # site-local additions

# Extra plugin search paths, colon-separated
EXTRA_PLUGIN_PATHS = [
    Path(p.strip()) for p in os.getenv("PLUGIN_PATHS", "").split(":") if p.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
