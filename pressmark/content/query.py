"""Read-only content queries used by templates and fragments."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from ..config import SiteConfig
from .models import Index, Item, Page, Section, Tag, TagDetailsPage, TagListPage

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
SORT_KEYS = frozenset({"date", "title"})


class ContentQueryError(LookupError):
    """Raised when content cannot be enumerated or an entity cannot be resolved."""


class ContentQuery(Protocol):
    """Interface the theme consumes instead of owning content storage."""

    @property
    def site(self) -> SiteConfig: ...

    @property
    def index(self) -> Index: ...

    def sections(self) -> list[Section]: ...

    def section(self, section_id: str) -> Section: ...

    def items(self, section: Section) -> list[Item]: ...

    def all_items(self, *, sorted_by: str = "date", descending: bool = True) -> list[Item]: ...

    def items_tagged(
        self, tag: Tag, *, sorted_by: str = "date", descending: bool = True
    ) -> list[Item]: ...

    def all_tags(self) -> set[Tag]: ...

    def pages(self) -> list[Page]: ...

    def tag_list_page(self) -> TagListPage: ...

    def tag_details_page(self, tag: Tag) -> TagDetailsPage: ...

    def path_for(self, entity: object) -> str: ...

    def tag_list_path(self) -> str: ...


class PublishingContext:
    """In-memory content snapshot implementing :class:`ContentQuery`.

    Sections are materialized for every identifier in the site's section
    enumeration, in enumeration order, whether or not any item belongs to
    them. Items keep the order in which they were supplied.
    """

    def __init__(
        self,
        site: SiteConfig,
        *,
        items: Iterable[Item] = (),
        pages: Iterable[Page] = (),
        index: Index | None = None,
    ) -> None:
        self._site = site
        self._items: tuple[Item, ...] = tuple(items)
        self._pages: tuple[Page, ...] = tuple(pages)
        self._index = index or Index(title=site.name, description=site.description)
        self._sections = self._build_sections()

    def _build_sections(self) -> dict[str, Section]:
        grouped: dict[str, list[Item]] = {section_id: [] for section_id in self._site.section_ids}
        for item in self._items:
            bucket = grouped.get(item.section_id)
            if bucket is None:
                logger.warning(
                    "Item '%s' references section '%s' which is not declared by the site.",
                    item.slug,
                    item.section_id,
                )
                continue
            bucket.append(item)
        return {
            section.id: Section(
                id=section.id,
                title=section.display_title,
                description=section.description,
                items=tuple(grouped[section.id]),
            )
            for section in self._site.sections
        }

    @property
    def site(self) -> SiteConfig:
        return self._site

    @property
    def index(self) -> Index:
        return self._index

    def sections(self) -> list[Section]:
        return list(self._sections.values())

    def section(self, section_id: str) -> Section:
        try:
            return self._sections[section_id]
        except KeyError:
            raise ContentQueryError(f"Unknown section '{section_id}'.") from None

    def items(self, section: Section) -> list[Item]:
        return list(self.section(section.id).items)

    def pages(self) -> list[Page]:
        return list(self._pages)

    def all_items(self, *, sorted_by: str = "date", descending: bool = True) -> list[Item]:
        return _sort_items(self._items, sorted_by=sorted_by, descending=descending)

    def items_tagged(
        self, tag: Tag, *, sorted_by: str = "date", descending: bool = True
    ) -> list[Item]:
        tagged = [item for item in self._items if tag in item.tags]
        return _sort_items(tagged, sorted_by=sorted_by, descending=descending)

    def all_tags(self) -> set[Tag]:
        return {tag for item in self._items for tag in item.tags}

    def tag_list_page(self) -> TagListPage:
        return TagListPage(tags=frozenset(self.all_tags()))

    def tag_details_page(self, tag: Tag) -> TagDetailsPage:
        return TagDetailsPage(tag=tag, items=tuple(self.items_tagged(tag)))

    def tag_list_path(self) -> str:
        return f"/{self._site.tags_path}"

    def path_for(self, entity: object) -> str:
        """Resolve the site-absolute path of any addressable entity."""
        if isinstance(entity, Index):
            return ROOT_PATH
        if isinstance(entity, Section):
            return f"/{entity.id}"
        if isinstance(entity, Item):
            return f"/{entity.section_id}/{entity.slug}"
        if isinstance(entity, Page):
            return f"/{entity.path}"
        if isinstance(entity, Tag):
            return f"{self.tag_list_path()}/{entity.normalized()}"
        if isinstance(entity, TagListPage):
            return self.tag_list_path()
        if isinstance(entity, TagDetailsPage):
            return self.path_for(entity.tag)
        raise ContentQueryError(f"Cannot resolve a path for {type(entity).__name__}.")


def _sort_items(items: Sequence[Item], *, sorted_by: str, descending: bool) -> list[Item]:
    if sorted_by not in SORT_KEYS:
        raise ContentQueryError(f"Unsupported sort key '{sorted_by}'.")
    # sorted() is stable and keeps tie order with reverse=True as well.
    return sorted(items, key=lambda item: getattr(item, sorted_by), reverse=descending)
