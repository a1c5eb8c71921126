from __future__ import annotations

from datetime import UTC, datetime

from pressmark import markup as m
from pressmark.config import SiteConfig
from pressmark.content import Item, Page, PublishingContext, Tag
from pressmark.templates import PrimaryHtmlFactory


def _make_item(section_id: str, slug: str, day: datetime, tags: list[str] | None = None) -> Item:
    return Item(
        section_id=section_id,
        slug=slug,
        title=slug.replace("-", " ").title(),
        description=f"About {slug}",
        date=day,
        body=f"<p>Body of {slug}</p>",
        tags=tags or [],
    )


def _make_context(*, generate_tag_pages: bool = True) -> PublishingContext:
    site = SiteConfig(
        name="Test Site",
        description="A test site.",
        sections=["posts", "about"],
        generate_tag_pages=generate_tag_pages,
    )
    items = [
        _make_item("posts", "first", datetime(2021, 1, 1, tzinfo=UTC), ["T1", "T2"]),
        _make_item("posts", "second", datetime(2022, 6, 1, tzinfo=UTC), ["T1"]),
        _make_item("about", "team", datetime(2021, 3, 15, tzinfo=UTC)),
    ]
    pages = [Page(path="colophon", title="Colophon", body="<p>Set in Georgia.</p>")]
    return PublishingContext(site, items=items, pages=pages)


def _selected_nav(document: m.Document) -> list[str]:
    nav = document.body.find("nav")
    assert nav is not None
    return [link.text_content() for link in nav.find_all("a", class_="selected")]


def _item_titles(document: m.Document) -> list[str]:
    listing = document.body.find("ul", class_="item-list")
    assert listing is not None
    return [article.find("h1").text_content() for article in listing.find_all("article")]


def test_index_lists_all_items_newest_first() -> None:
    context = _make_context()

    document = PrimaryHtmlFactory().make_index_html(context.index, context)

    assert document.root.attribute("lang") == "en"
    assert document.head.find("title").text_content() == "Test Site"
    assert document.body.find("h1").text_content() == "Test Site"
    assert document.body.find("p", class_="description").text_content() == "A test site."
    assert _item_titles(document) == ["Second", "Team", "First"]
    assert _selected_nav(document) == []
    assert document.render().startswith("<!DOCTYPE html><html lang=\"en\"><head>")


def test_section_page_selects_its_nav_entry() -> None:
    context = _make_context()
    section = context.section("posts")

    document = PrimaryHtmlFactory().make_section_html(section, context)

    assert _selected_nav(document) == ["Posts"]
    assert document.body.find("h1").text_content() == "Posts"
    assert _item_titles(document) == ["First", "Second"]
    assert document.head.find("title").text_content() == "Posts | Test Site"


def test_empty_section_renders_empty_listing() -> None:
    site = SiteConfig(name="Test Site", sections=["posts", "about"])
    context = PublishingContext(site)

    document = PrimaryHtmlFactory().make_section_html(context.section("about"), context)

    assert '<ul class="item-list"></ul>' in document.render()


def test_item_page_embeds_body_and_tags() -> None:
    context = _make_context()
    item = context.items(context.section("posts"))[0]

    document = PrimaryHtmlFactory().make_item_html(item, context)

    assert document.body.classes == ("item-page",)
    assert _selected_nav(document) == ["Posts"]
    assert '<div class="content"><p>Body of first</p></div>' in document.render()
    tag_links = document.body.find("ul", class_="tag-list").find_all("a")
    assert [link.text_content() for link in tag_links] == ["T1", "T2"]
    assert [link.attribute("href") for link in tag_links] == ["/tags/t1", "/tags/t2"]


def test_item_in_undeclared_section_selects_nothing() -> None:
    context = _make_context()
    stray = _make_item("drafts", "stray", datetime(2021, 1, 1, tzinfo=UTC))

    document = PrimaryHtmlFactory().make_item_html(stray, context)

    assert _selected_nav(document) == []


def test_page_renders_body_verbatim() -> None:
    context = _make_context()
    page = context.pages()[0]

    document = PrimaryHtmlFactory().make_page_html(page, context)

    assert '<div class="wrapper"><p>Set in Georgia.</p></div>' in document.render()
    assert document.head.find("title").text_content() == "Colophon | Test Site"
    assert _selected_nav(document) == []


def test_tag_list_page_sorts_tags() -> None:
    context = _make_context()

    document = PrimaryHtmlFactory().make_tag_list_html(context.tag_list_page(), context)

    assert document is not None
    assert document.body.find("h1").text_content() == "Browse all tags"
    listing = document.body.find("ul", class_="all-tags")
    links = listing.find_all("a")
    assert [link.text_content() for link in links] == ["T1", "T2"]
    assert [link.attribute("href") for link in links] == [
        context.path_for(Tag("T1")),
        context.path_for(Tag("T2")),
    ]
    assert document.head.find("title").text_content() == "Tags | Test Site"


def test_tag_details_page_lists_newest_first() -> None:
    context = _make_context()

    document = PrimaryHtmlFactory().make_tag_details_html(context.tag_details_page(Tag("T1")), context)

    assert document is not None
    assert document.body.find("h1").text_content() == "Tagged with T1"
    browse = document.body.find("a", class_="browse-all")
    assert browse.attribute("href") == "/tags"
    assert _item_titles(document) == ["Second", "First"]
    assert document.head.find("title").text_content() == "Tagged with T1 | Test Site"


def test_tag_pages_are_skipped_when_disabled() -> None:
    context = _make_context(generate_tag_pages=False)
    factory = PrimaryHtmlFactory()

    assert factory.make_tag_list_html(context.tag_list_page(), context) is None
    assert factory.make_tag_details_html(context.tag_details_page(Tag("T1")), context) is None


def test_custom_stylesheets_are_linked() -> None:
    context = _make_context()

    document = PrimaryHtmlFactory(stylesheets=("/theme.css",)).make_index_html(context.index, context)

    hrefs = [link.attribute("href") for link in document.head.find_all("link")]
    assert hrefs == ["/theme.css", "/feed.rss"]


def test_every_internal_link_resolves_through_path_for() -> None:
    context = _make_context()
    factory = PrimaryHtmlFactory()
    known = {"/", "/tags", "/feed.rss"}
    known.update(context.path_for(section) for section in context.sections())
    known.update(context.path_for(item) for item in context.all_items())
    known.update(context.path_for(tag) for tag in context.all_tags())

    documents = [
        factory.make_index_html(context.index, context),
        factory.make_section_html(context.section("posts"), context),
        factory.make_item_html(context.all_items()[0], context),
        factory.make_tag_list_html(context.tag_list_page(), context),
        factory.make_tag_details_html(context.tag_details_page(Tag("T2")), context),
    ]

    for document in documents:
        assert document is not None
        for anchor in document.body.find_all("a"):
            assert anchor.attribute("href") in known
