"""Loading and exporting the site declaration."""

from .loader import dump_site_config, load_site_config

__all__ = ['dump_site_config', 'load_site_config']
