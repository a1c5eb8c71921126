"""Reusable markup fragments shared by every page template."""

from __future__ import annotations

import logging
from typing import Sequence

from . import markup as m
from .content.models import Item, Location
from .content.query import ROOT_PATH, ContentQuery

logger = logging.getLogger(__name__)

DEFAULT_STYLESHEETS: tuple[str, ...] = ("/styles.css",)
GENERATOR_NAME = "pressmark"
SELECTED_CLASS = "selected"


def head(
    location: Location,
    context: ContentQuery,
    *,
    stylesheets: Sequence[str] = DEFAULT_STYLESHEETS,
) -> m.Element:
    """Render document metadata for the page being built."""
    site = context.site
    page_title = _page_title(location.title, site.name)
    description = location.description or site.description
    canonical = f"{site.url}{context.path_for(location)}" if site.url else None

    return m.head(
        m.meta(charset="UTF-8"),
        m.meta(property="og:site_name", content=site.name),
        m.title(page_title),
        m.meta(property="og:title", content=page_title),
        m.if_(bool(description), m.meta(name="description", content=description)),
        m.if_(bool(description), m.meta(property="og:description", content=description)),
        m.if_(canonical is not None, m.meta(property="og:url", content=canonical)),
        m.meta(name="viewport", content="width=device-width, initial-scale=1.0"),
        m.for_each(stylesheets, lambda href: m.link(rel="stylesheet", href=href, type="text/css")),
        m.link(
            rel="alternate",
            href=site.feed_path,
            type="application/rss+xml",
            title=f"Subscribe to {site.name}",
        ),
    )


def _page_title(location_title: str, site_name: str) -> str:
    cleaned = location_title.strip()
    if not cleaned or cleaned == site_name:
        return site_name
    return f"{cleaned} | {site_name}"


def header(context: ContentQuery, selected_section: str | None = None) -> m.Element:
    """Render the site name and, for multi-section sites, the section navigation.

    Entries follow the site's declared section order. Only the entry whose id
    equals ``selected_section`` carries the ``selected`` class.
    """
    section_ids = context.site.section_ids
    if selected_section is not None and selected_section not in section_ids:
        logger.debug("Selected section '%s' is not declared; no nav entry selected.", selected_section)

    def nav_entry(section_id: str) -> m.Element:
        section = context.section(section_id)
        return m.li(
            m.a(
                m.text(section.title),
                class_=SELECTED_CLASS if section_id == selected_section else None,
                href=context.path_for(section),
            )
        )

    return m.header(
        wrapper(
            m.a(m.text(context.site.name), class_="site-name", href=ROOT_PATH),
            m.if_(
                len(section_ids) > 1,
                m.nav(m.ul(m.for_each(section_ids, nav_entry))),
            ),
        )
    )


def wrapper(*children: m.Child) -> m.Element:
    return m.div(*children, class_="wrapper")


def item_list(items: Sequence[Item], context: ContentQuery) -> m.Element:
    """List items in the order given; an empty sequence yields an empty list."""
    return m.ul(
        m.for_each(
            items,
            lambda item: m.li(
                m.article(
                    m.h1(m.a(m.text(item.title), href=context.path_for(item))),
                    tag_list(item, context),
                    m.p(m.text(item.description)),
                )
            ),
        ),
        class_="item-list",
    )


def tag_list(item: Item, context: ContentQuery) -> m.Element:
    """List an item's tags in authored order."""
    return m.ul(
        m.for_each(
            item.tags,
            lambda tag: m.li(m.a(m.text(tag), href=context.path_for(tag))),
        ),
        class_="tag-list",
    )


def footer(context: ContentQuery) -> m.Element:
    return m.footer(
        m.p(m.text(f"Generated using {GENERATOR_NAME}")),
        m.p(m.a(m.text("RSS feed"), href=context.site.feed_path)),
    )
