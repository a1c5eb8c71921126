"""Load a YAML content snapshot into a :class:`PublishingContext`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..config import SiteConfig
from ..markdown import MarkdownBody, parse_markdown
from .models import Index, Item, Page
from .query import PublishingContext

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file is malformed."""


def load_snapshot(path: str | Path) -> PublishingContext:
    """Read a snapshot file and build the content context it describes."""
    source_path = Path(path)
    with source_path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise SnapshotError(f"Invalid YAML in snapshot {source_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {source_path} must contain a mapping.")
    return build_context(data, source=str(source_path))


def build_context(data: dict[str, Any], *, source: str = "<snapshot>") -> PublishingContext:
    """Validate snapshot data and assemble the publishing context."""
    try:
        site = SiteConfig.model_validate(_mapping(data.get("site"), "site", source))
        index_data = _mapping(data.get("index"), "index", source)
        index = Index.model_validate(index_data) if index_data else None
        items = [_parse_item(entry) for entry in _entries(data.get("items"), "items", source)]
        pages = [_parse_page(entry) for entry in _entries(data.get("pages"), "pages", source)]
    except ValidationError as exc:
        raise SnapshotError(f"Invalid content in {source}: {exc}") from exc

    logger.debug("Loaded %d item(s) and %d page(s) from %s", len(items), len(pages), source)
    return PublishingContext(site, items=items, pages=pages, index=index)


def _parse_item(entry: dict[str, Any]) -> Item:
    data = dict(entry)
    if "section" in data and "section_id" not in data:
        data["section_id"] = data.pop("section")
    _apply_body(data, parse_markdown(str(data.get("body") or "")))
    return Item.model_validate(data)


def _parse_page(entry: dict[str, Any]) -> Page:
    data = dict(entry)
    _apply_body(data, parse_markdown(str(data.get("body") or "")))
    return Page.model_validate(data)


def _apply_body(data: dict[str, Any], body: MarkdownBody) -> None:
    """Store the rendered body; fill a missing title or description from it."""
    data["body"] = body.html
    if not data.get("title") and body.title:
        data["title"] = body.title
    if not data.get("description") and body.lead:
        data["description"] = body.lead


def _mapping(value: Any, key: str, source: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SnapshotError(f"'{key}' in {source} must be a mapping.")
    return value


def _entries(value: Any, key: str, source: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotError(f"'{key}' in {source} must be a list.")
    for entry in value:
        if not isinstance(entry, dict):
            raise SnapshotError(f"Entries of '{key}' in {source} must be mappings, got {type(entry)!r}")
    return value
