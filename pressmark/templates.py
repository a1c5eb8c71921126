"""Page templates for the six page kinds a site is made of."""

from __future__ import annotations

from typing import Sequence

from . import markup as m
from .content.models import Index, Item, Location, Page, Section, TagDetailsPage, TagListPage
from .content.query import ContentQuery
from .fragments import DEFAULT_STYLESHEETS, footer, head, header, item_list, tag_list, wrapper

OptionalDocument = m.Document | None


class PrimaryHtmlFactory:
    """Compose full documents for every page kind of the primary theme."""

    def __init__(self, stylesheets: Sequence[str] = DEFAULT_STYLESHEETS) -> None:
        self._stylesheets = tuple(stylesheets)

    def make_index_html(self, index: Index, context: ContentQuery) -> m.Document:
        return self._document(
            index,
            context,
            m.body(
                header(context),
                wrapper(
                    m.h1(m.text(index.title)),
                    m.p(m.text(context.site.description), class_="description"),
                    m.h2("Latest content"),
                    item_list(context.all_items(sorted_by="date", descending=True), context),
                ),
                footer(context),
            ),
        )

    def make_section_html(self, section: Section, context: ContentQuery) -> m.Document:
        return self._document(
            section,
            context,
            m.body(
                header(context, selected_section=section.id),
                wrapper(
                    m.h1(m.text(section.title)),
                    item_list(context.items(section), context),
                ),
                footer(context),
            ),
        )

    def make_item_html(self, item: Item, context: ContentQuery) -> m.Document:
        return self._document(
            item,
            context,
            m.body(
                header(context, selected_section=item.section_id),
                wrapper(
                    m.article(
                        m.div(m.raw(item.body), class_="content"),
                        m.span("Tagged with: "),
                        tag_list(item, context),
                    )
                ),
                footer(context),
                class_="item-page",
            ),
        )

    def make_page_html(self, page: Page, context: ContentQuery) -> m.Document:
        return self._document(
            page,
            context,
            m.body(
                header(context),
                wrapper(m.raw(page.body)),
                footer(context),
            ),
        )

    def make_tag_list_html(self, page: TagListPage, context: ContentQuery) -> OptionalDocument:
        if not context.site.generate_tag_pages:
            return None
        return self._document(
            page,
            context,
            m.body(
                header(context),
                wrapper(
                    m.h1("Browse all tags"),
                    m.ul(
                        m.for_each(
                            sorted(page.tags),
                            lambda tag: m.li(
                                m.a(m.text(tag), href=context.path_for(tag)),
                                class_="tag",
                            ),
                        ),
                        class_="all-tags",
                    ),
                ),
                footer(context),
            ),
        )

    def make_tag_details_html(self, page: TagDetailsPage, context: ContentQuery) -> OptionalDocument:
        if not context.site.generate_tag_pages:
            return None
        return self._document(
            page,
            context,
            m.body(
                header(context),
                wrapper(
                    m.h1("Tagged with ", m.span(m.text(page.tag), class_="tag")),
                    m.a(m.text("Browse all tags"), class_="browse-all", href=context.tag_list_path()),
                    item_list(
                        context.items_tagged(page.tag, sorted_by="date", descending=True),
                        context,
                    ),
                ),
                footer(context),
            ),
        )

    def _document(self, location: Location, context: ContentQuery, page_body: m.Element) -> m.Document:
        return m.Document(
            m.html(
                head(location, context, stylesheets=self._stylesheets),
                page_body,
                lang=context.site.language,
            )
        )
