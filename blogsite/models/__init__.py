"""Typed models for the site declaration."""

from .site import (
    ContentSource,
    HeroBanner,
    PluginActivation,
    SiteConfig,
    SiteMetadata,
    SocialLink,
    is_absolute_url,
)

__all__ = [
    'ContentSource',
    'HeroBanner',
    'PluginActivation',
    'SiteConfig',
    'SiteMetadata',
    'SocialLink',
    'is_absolute_url',
]
