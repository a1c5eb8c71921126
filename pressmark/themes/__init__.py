"""Theme registration: which templates render which entities, plus static assets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..content.models import Index, Item, Page, Section, TagDetailsPage, TagListPage
from ..content.query import ContentQuery
from ..markup import Document
from ..templates import OptionalDocument, PrimaryHtmlFactory

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_THEME_NAME = "primary"


class ThemeError(RuntimeError):
    """Raised when a theme cannot be found or cannot render an entity."""


class HtmlFactory(Protocol):
    """The six page templates a theme must provide."""

    def make_index_html(self, index: Index, context: ContentQuery) -> Document: ...

    def make_section_html(self, section: Section, context: ContentQuery) -> Document: ...

    def make_item_html(self, item: Item, context: ContentQuery) -> Document: ...

    def make_page_html(self, page: Page, context: ContentQuery) -> Document: ...

    def make_tag_list_html(self, page: TagListPage, context: ContentQuery) -> OptionalDocument: ...

    def make_tag_details_html(self, page: TagDetailsPage, context: ContentQuery) -> OptionalDocument: ...


class ThemeAssets(BaseModel):
    """Static assets the build driver must copy to the site output root."""

    model_config = ConfigDict(frozen=True)

    styles: tuple[str, ...] = Field(default=())

    @property
    def stylesheet_hrefs(self) -> tuple[str, ...]:
        """Public hrefs of the stylesheets once copied to the output root."""
        return tuple(f"/{PurePosixPath(style).name}" for style in self.styles)


TEMPLATE_METHODS: dict[type, str] = {
    Index: "make_index_html",
    Section: "make_section_html",
    Item: "make_item_html",
    Page: "make_page_html",
    TagListPage: "make_tag_list_html",
    TagDetailsPage: "make_tag_details_html",
}


@dataclass(frozen=True, slots=True)
class Theme:
    """Bind an HTML factory to the assets it depends on."""

    name: str
    html_factory: HtmlFactory
    assets: ThemeAssets

    def template_for(self, entity: object) -> str:
        """Return the factory method name responsible for ``entity``."""
        for entity_type, method_name in TEMPLATE_METHODS.items():
            if isinstance(entity, entity_type):
                return method_name
        raise ThemeError(f"Theme '{self.name}' cannot render {type(entity).__name__}.")

    def bindings(self) -> list[tuple[str, str]]:
        """Pairs of entity kind and the factory method that renders it."""
        return [(entity_type.__name__, method_name) for entity_type, method_name in TEMPLATE_METHODS.items()]

    def render(self, entity: object, context: ContentQuery) -> OptionalDocument:
        """Render ``entity`` with the template registered for its kind."""
        method_name = self.template_for(entity)
        logger.debug("Rendering %s with %s.%s", context.path_for(entity), self.name, method_name)
        return getattr(self.html_factory, method_name)(entity, context)

    def resource_files(self) -> list[Path]:
        """Resolve declared asset paths against the package directory."""
        return [PACKAGE_ROOT / style for style in self.assets.styles]


def _primary_theme() -> Theme:
    assets = ThemeAssets(styles=("themes/primary/styles.css",))
    return Theme(
        name=DEFAULT_THEME_NAME,
        html_factory=PrimaryHtmlFactory(stylesheets=assets.stylesheet_hrefs),
        assets=assets,
    )


PRIMARY_THEME = _primary_theme()

_REGISTRY: dict[str, Theme] = {PRIMARY_THEME.name: PRIMARY_THEME}


def get_theme(name: str = DEFAULT_THEME_NAME) -> Theme:
    """Look up a registered theme by name."""
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        raise ThemeError(f"Unknown theme '{name}'. Available themes: {available}.") from None


def available_themes() -> list[str]:
    return sorted(_REGISTRY)


__all__ = [
    "DEFAULT_THEME_NAME",
    "HtmlFactory",
    "TEMPLATE_METHODS",
    "PRIMARY_THEME",
    "Theme",
    "ThemeAssets",
    "ThemeError",
    "available_themes",
    "get_theme",
]
