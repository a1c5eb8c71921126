"""Typed representations of the site's content entities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TAG_SEPARATOR_RE = re.compile(r"[\s_]+")
_TAG_INVALID_RE = re.compile(r"[^\w-]+", re.UNICODE)


@dataclass(frozen=True, order=True, slots=True)
class Tag:
    """Opaque label attached to items; ordered and hashed by its string."""

    string: str

    def __str__(self) -> str:
        return self.string

    def normalized(self) -> str:
        """Return the URL-safe form used when building tag paths."""
        text = _TAG_SEPARATOR_RE.sub("-", self.string.strip().lower())
        text = _TAG_INVALID_RE.sub("", text)
        text = re.sub(r"-{2,}", "-", text)
        return text.strip("-") or "tag"


def _coerce_tag(value: Any) -> Tag:
    if isinstance(value, Tag):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("tags cannot be empty")
        return Tag(cleaned)
    raise ValueError(f"unsupported tag value {value!r}")


class Item(BaseModel):
    """A single content page belonging to exactly one section."""

    model_config = ConfigDict(frozen=True)

    section_id: str = Field(description="Identifier of the owning section.")
    slug: str = Field(description="Path of the item relative to its section.")
    title: str = Field(description="Display title.")
    description: str = Field(default="", description="Short summary shown in listings.")
    date: datetime = Field(description="Publication timestamp.")
    body: str = Field(default="", description="Rendered HTML body.")
    tags: tuple[Tag, ...] = Field(default=(), description="Tags in authored order.")

    @field_validator("slug")
    def _normalize_slug(cls, value: str) -> str:
        cleaned = value.strip().strip("/")
        if not cleaned:
            raise ValueError("slug cannot be empty")
        return cleaned

    @field_validator("date", mode="before")
    def _promote_date(cls, value: Any) -> Any:
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value

    @field_validator("date")
    def _ensure_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("tags", mode="before")
    def _coerce_tags(cls, value: Any) -> tuple[Tag, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, Tag)):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(f"unsupported tags value {value!r}")
        unique: list[Tag] = []
        for entry in value:
            tag = _coerce_tag(entry)
            if tag not in unique:
                unique.append(tag)
        return tuple(unique)


class Section(BaseModel):
    """A named grouping of items with its own index page and nav entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    items: tuple[Item, ...] = ()


class Page(BaseModel):
    """A free-form page that does not belong to a section."""

    model_config = ConfigDict(frozen=True)

    path: str
    title: str = ""
    description: str = ""
    body: str = ""

    @field_validator("path")
    def _normalize_path(cls, value: str) -> str:
        cleaned = value.strip().strip("/")
        if not cleaned:
            raise ValueError("page path cannot be empty")
        return cleaned


class Index(BaseModel):
    """The home page."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""


class TagListPage(BaseModel):
    """Every tag known to the site."""

    model_config = ConfigDict(frozen=True)

    tags: frozenset[Tag] = frozenset()
    title: str = "Tags"
    description: str = ""


class TagDetailsPage(BaseModel):
    """One tag together with the items carrying it."""

    model_config = ConfigDict(frozen=True)

    tag: Tag
    items: tuple[Item, ...] = ()
    description: str = ""

    @property
    def title(self) -> str:
        return f"Tagged with {self.tag}"


Location = Index | Section | Item | Page | TagListPage | TagDetailsPage
