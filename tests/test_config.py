from __future__ import annotations

from pathlib import Path

import pytest

from pressmark.config import SiteConfig, load_config


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_site_mapping_from_snapshot_file(tmp_path: Path) -> None:
    config_path = _write(
        tmp_path / "site.yml",
        (
            "site:\n"
            "  name: Writer's Guide\n"
            "  description: Notes on writing.\n"
            "  language: en-GB\n"
            "  url: https://example.com/\n"
            "  sections:\n"
            "    - id: posts\n"
            "      title: Posts\n"
            "    - about\n"
            "items: []\n"
        ),
    )

    config = load_config(config_path)

    assert config.name == "Writer's Guide"
    assert config.language == "en-GB"
    assert config.url == "https://example.com"
    assert config.section_ids == ("posts", "about")
    assert [section.display_title for section in config.sections] == ["Posts", "About"]


def test_load_config_accepts_directory_with_default_filename(tmp_path: Path) -> None:
    _write(tmp_path / "pressmark.yml", "name: Directory Site\nsections: [posts]\n")

    config = load_config(tmp_path)

    assert config.name == "Directory Site"
    assert config.section_ids == ("posts",)


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "site.yml", "- just\n- a list\n")

    with pytest.raises(ValueError, match="must contain a mapping"):
        load_config(config_path)


def test_duplicate_section_ids_are_rejected() -> None:
    with pytest.raises(ValueError, match="duplicate section id"):
        SiteConfig(sections=["posts", "posts"])


def test_empty_section_id_is_rejected() -> None:
    with pytest.raises(ValueError):
        SiteConfig(sections=[{"id": "  "}])


def test_paths_are_normalized() -> None:
    config = SiteConfig(tags_path="/labels/", feed_path="feed.xml")

    assert config.tags_path == "labels"
    assert config.feed_path == "/feed.xml"


def test_defaults() -> None:
    config = SiteConfig()

    assert config.language == "en"
    assert config.tags_path == "tags"
    assert config.feed_path == "/feed.rss"
    assert config.generate_tag_pages is True
    assert config.section_ids == ()


def test_section_id_colliding_with_tags_path_is_rejected() -> None:
    with pytest.raises(ValueError, match="collides with tags_path"):
        SiteConfig(sections=["posts", "tags"])

    with pytest.raises(ValueError, match="collides with tags_path"):
        SiteConfig(sections=["posts", "labels"], tags_path="/labels/")

    assert SiteConfig(sections=["posts", "tags"], tags_path="labels").section_ids == ("posts", "tags")
