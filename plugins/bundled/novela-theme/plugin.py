"""Novela blog theme plugin entry point.

Only the theme's options are handled here; page templates are out of scope.
"""

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blogsite.models.site import ContentSource
from blogsite.plugins.api import PluginAPI

logger = logging.getLogger(__name__)


class ThemeOptions(BaseModel):
    """Novela theme options."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    content_posts: str = Field(default="content/posts", alias="contentPosts")
    content_authors: str = Field(default="content/authors", alias="contentAuthors")
    base_path: str = Field(default="/", alias="basePath")
    authors_page: bool = Field(default=False, alias="authorsPage")
    article_permalink_format: str = Field(default=":slug", alias="articlePermalinkFormat")
    sources: FrozenSet[ContentSource] = Field(
        default=frozenset({ContentSource.LOCAL}),
        description="Enabled content sources, declared as {name: bool} flags",
    )

    @field_validator("content_posts", "content_authors")
    @classmethod
    def _relative_dir(cls, value: str) -> str:
        if not value or PurePosixPath(value).is_absolute():
            raise ValueError(f"content directory must be a non-empty relative path, got {value!r}")
        return value

    @field_validator("base_path")
    @classmethod
    def _rooted(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"basePath must start with '/', got {value!r}")
        return value

    @field_validator("article_permalink_format")
    @classmethod
    def _has_slug(cls, value: str) -> str:
        if ":slug" not in value:
            raise ValueError(f"articlePermalinkFormat must contain ':slug', got {value!r}")
        return value

    @field_validator("sources", mode="before")
    @classmethod
    def _from_flags(cls, value: Any) -> Any:
        if isinstance(value, dict):
            value = ContentSource.from_flags(value)
        if not value:
            raise ValueError("at least one content source must be enabled")
        return value


class NovelaThemePlugin:
    """Holds the validated theme options and expands article permalinks."""

    def __init__(self, api: PluginAPI):
        self.api = api
        self.options = ThemeOptions(**api.options)

    def permalink(self, slug: str) -> str:
        """Expand the article permalink template for a slug, under basePath."""
        path = self.options.article_permalink_format.replace(":slug", slug.strip("/"))
        base = self.options.base_path.rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    def describe(self) -> Dict[str, Any]:
        return {
            "content_posts": self.options.content_posts,
            "content_authors": self.options.content_authors,
            "base_path": self.options.base_path,
            "authors_page": self.options.authors_page,
            "sources": sorted(s.value for s in self.options.sources),
        }

    async def on_start(self) -> None:
        self.api.get_logger().info(
            f"Theme reading posts from {self.options.content_posts}, "
            f"authors from {self.options.content_authors}"
        )


def register(api: PluginAPI) -> NovelaThemePlugin:
    """Plugin entry point - called by PluginLifecycle.register()."""
    plugin = NovelaThemePlugin(api)
    logger.info(f"Novela theme registered with sources: {plugin.describe()['sources']}")
    return plugin
