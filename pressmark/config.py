"""Site configuration models and loaders."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

CONFIG_FILENAME = "pressmark.yml"
DEFAULT_FEED_PATH = "/feed.rss"
DEFAULT_TAGS_PATH = "tags"


class SectionConfig(BaseModel):
    """A member of the site's fixed section enumeration."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable section identifier, also its URL segment.")
    title: str | None = Field(default=None, description="Navigation and index title.")
    description: str = Field(default="", description="Summary used for the section page metadata.")

    @field_validator("id")
    def _normalize_id(cls, value: str) -> str:
        cleaned = value.strip().strip("/")
        if not cleaned:
            raise ValueError("section id cannot be empty")
        return cleaned

    @property
    def display_title(self) -> str:
        if self.title and self.title.strip():
            return self.title.strip()
        return self.id.replace("-", " ").replace("_", " ").title()


class SiteConfig(BaseModel):
    """Global site metadata consumed by every template."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default="My Site", description="Display name used in the header and titles.")
    description: str = Field(default="", description="Site-wide description.")
    language: str = Field(default="en", description="Language tag emitted on <html lang>.")
    url: str | None = Field(default=None, description="Canonical base URL, e.g. 'https://example.com'.")
    sections: tuple[SectionConfig, ...] = Field(
        default=(),
        description="Ordered section enumeration; navigation follows this order.",
    )
    tags_path: str = Field(default=DEFAULT_TAGS_PATH, description="Path of the tag index page.")
    feed_path: str = Field(default=DEFAULT_FEED_PATH, description="Path of the syndication feed.")
    generate_tag_pages: bool = Field(
        default=True,
        description="Whether the tag index and tag detail pages are produced.",
    )

    @field_validator("sections", mode="before")
    def _coerce_sections(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple({"id": entry} if isinstance(entry, str) else entry for entry in value)
        return value

    @field_validator("tags_path")
    def _normalize_tags_path(cls, value: str) -> str:
        cleaned = value.strip().strip("/")
        return cleaned or DEFAULT_TAGS_PATH

    @field_validator("feed_path")
    def _normalize_feed_path(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            return DEFAULT_FEED_PATH
        return cleaned if cleaned.startswith("/") else f"/{cleaned}"

    @field_validator("url")
    def _strip_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().rstrip("/") or None

    @model_validator(mode="after")
    def _unique_sections(self) -> "SiteConfig":
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"duplicate section id '{section.id}'")
            seen.add(section.id)
        if self.tags_path in seen:
            raise ValueError(f"section id '{self.tags_path}' collides with tags_path")
        return self

    @property
    def section_ids(self) -> tuple[str, ...]:
        return tuple(section.id for section in self.sections)


def load_config(path: str | Path) -> SiteConfig:
    """Load site configuration from a YAML file.

    ``path`` may point at the file itself or at a directory holding
    ``pressmark.yml``. A top-level ``site:`` mapping is unwrapped so the same
    file can double as a content snapshot.
    """
    candidate = Path(path)
    config_path = candidate / CONFIG_FILENAME if candidate.is_dir() else candidate
    if not config_path.exists():
        raise FileNotFoundError(config_path)

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in config file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping.")
    site_data = data.get("site", data)
    if not isinstance(site_data, dict):
        raise ValueError(f"'site' in {config_path} must be a mapping.")

    try:
        return SiteConfig.model_validate(site_data)
    except ValidationError as exc:
        raise ValueError(f"Invalid site configuration in {config_path}: {exc}") from exc
