"""Site configuration models - the typed, read-only form of the site declaration."""

import json
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_serializer, model_validator
from pydantic.alias_generators import to_camel


def is_absolute_url(value: str) -> bool:
    """Check that value is an absolute http(s) URL with a host."""
    parts = urlsplit(value)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def freeze_options(value: Any) -> Any:
    """Recursively turn dicts into read-only mappings and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_options(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_options(item) for item in value)
    return value


def thaw_options(value: Any) -> Any:
    """Inverse of freeze_options: fresh, mutable dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw_options(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw_options(item) for item in value]
    return value


class _DeclarationModel(BaseModel):
    """Frozen model whose field names map to the camelCase keys of the declaration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ContentSource(str, Enum):
    """Named content sources a theme can read posts and authors from."""

    LOCAL = "local"
    CONTENTFUL = "contentful"

    @classmethod
    def from_flags(cls, flags: Mapping[str, bool]) -> FrozenSet["ContentSource"]:
        """Turn a ``{"local": True, "contentful": False}`` mapping into the set of enabled sources."""
        enabled = set()
        for name, on in flags.items():
            try:
                source = cls(name)
            except ValueError:
                raise ValueError(f"Unknown content source: {name!r}") from None
            if on:
                enabled.add(source)
        return frozenset(enabled)


class HeroBanner(_DeclarationModel):
    """Presentation hint for the landing banner."""

    heading: str = Field(..., min_length=1)
    max_width: int = Field(..., gt=0, description="Banner width in pixels")


class SocialLink(_DeclarationModel):
    """One social profile link, rendered in declaration order."""

    name: str = Field(..., min_length=1)
    url: str

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        if not is_absolute_url(value):
            raise ValueError(f"social url must be an absolute http(s) URL, got {value!r}")
        return value


class SiteMetadata(_DeclarationModel):
    """Site and author identity exposed verbatim to templates and queries."""

    title: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, description="Site owner's display name")
    site_url: str = Field(..., description="Canonical absolute URL, used for sitemap/SEO")
    description: str
    hero: HeroBanner
    social: Tuple[SocialLink, ...] = ()

    @field_validator("site_url")
    @classmethod
    def _absolute_site_url(cls, value: str) -> str:
        if not is_absolute_url(value):
            raise ValueError(f"siteUrl must be an absolute http(s) URL, got {value!r}")
        return value


class PluginActivation(_DeclarationModel):
    """A request to load a named plugin, optionally with an option bag.

    Accepts either a bare identifier string or ``{"resolve": ..., "options": {...}}``.
    Bare identifiers keep ``options=None`` and serialise back to a bare string.
    The option bag is opaque here; each plugin validates its own options. It is
    stored read-only (nested mappings and sequences included).
    """

    resolve: str = Field(..., min_length=1)
    options: Optional[Mapping[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _from_identifier(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"resolve": data}
        return data

    @field_validator("options")
    @classmethod
    def _freeze(cls, value: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
        return freeze_options(value) if value is not None else None

    @field_serializer("options")
    def _thaw(self, value: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        return thaw_options(value) if value is not None else None

    @model_serializer(mode="wrap")
    def _serialize(self, handler):
        if self.options is None:
            return self.resolve
        return handler(self)

    @property
    def is_bare(self) -> bool:
        return self.options is None

    def get_options(self) -> Dict[str, Any]:
        """Return a private, mutable copy of the option bag ({} for bare activations)."""
        return thaw_options(self.options) if self.options is not None else {}

    def __hash__(self) -> int:
        options = json.dumps(self.get_options(), sort_keys=True, default=repr)
        return hash((self.resolve, self.is_bare, options))


class SiteConfig(_DeclarationModel):
    """The whole site declaration: metadata plus ordered plugin activations."""

    site_metadata: SiteMetadata
    plugins: Tuple[PluginActivation, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SiteConfig":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise back to the declaration shape (camelCase keys, bare plugin ids kept)."""
        return self.model_dump(by_alias=True, mode="json")

    @property
    def plugin_ids(self) -> Tuple[str, ...]:
        return tuple(p.resolve for p in self.plugins)

    def get_activation(self, resolve: str) -> Optional[PluginActivation]:
        """Get the first activation for a plugin identifier."""
        return next((p for p in self.plugins if p.resolve == resolve), None)
