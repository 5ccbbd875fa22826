"""Dependency injection container for the site config and plugin host."""

import logging

from blogsite.models.site import SiteConfig
from blogsite.plugins.host import PluginHost

logger = logging.getLogger(__name__)

# ============================================================================
# Global instances (singletons, exposed via functions for easier testing/mocking)
# ============================================================================

_site_config_instance = None
_plugin_host_instance = None


def get_site_config() -> SiteConfig:
    """Get the loaded site config (singleton)."""
    global _site_config_instance
    if _site_config_instance is None:
        from blogsite.config.loader import load_site_config
        from blogsite.constants import SITE_CONFIG_FILE

        _site_config_instance = load_site_config(SITE_CONFIG_FILE)
        logger.info(f"Loaded site config from {SITE_CONFIG_FILE}")
    return _site_config_instance


def get_plugin_host() -> PluginHost:
    """Get plugin host (singleton)."""
    global _plugin_host_instance
    if _plugin_host_instance is None:
        from blogsite.constants import BUNDLED_PLUGINS_DIR, EXTRA_PLUGIN_PATHS, INSTALLED_PLUGINS_DIR

        _plugin_host_instance = PluginHost(
            config=get_site_config(),
            bundled_dir=BUNDLED_PLUGINS_DIR,
            installed_dir=INSTALLED_PLUGINS_DIR,
            extra_paths=EXTRA_PLUGIN_PATHS,
        )
        logger.info("Created PluginHost instance")
    return _plugin_host_instance


# Test utility function (resets all singletons)
def reset_services(site_config: SiteConfig = None):
    """Reset all instances, optionally seeding a site config (only for testing)."""
    global _site_config_instance, _plugin_host_instance

    _site_config_instance = site_config
    _plugin_host_instance = None
    logger.info("Reset all service instances")
