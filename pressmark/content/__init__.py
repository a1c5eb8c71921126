"""Content entities and the read-only query interface over them."""

from .models import (
    Index,
    Item,
    Location,
    Page,
    Section,
    Tag,
    TagDetailsPage,
    TagListPage,
)
from .query import ContentQuery, ContentQueryError, PublishingContext
from .snapshot import SnapshotError, build_context, load_snapshot

__all__ = [
    "ContentQuery",
    "ContentQueryError",
    "Index",
    "Item",
    "Location",
    "Page",
    "PublishingContext",
    "Section",
    "SnapshotError",
    "Tag",
    "TagDetailsPage",
    "TagListPage",
    "build_context",
    "load_snapshot",
]
