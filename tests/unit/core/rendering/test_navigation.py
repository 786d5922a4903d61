from __future__ import annotations

"""
Unit tests for the Navigation Renderer.

The produced markup is parsed back with BeautifulSoup so that assertions do
not depend on pretty-printing details.
"""

import pytest
from bs4 import BeautifulSoup

from compendium.core.indexing.document_index import DocumentIndex
from compendium.core.rendering.navigation import render_navigation
from compendium.domain.errors import IndexNotSealedError


def _soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def test_open_index_is_rejected(make_index) -> None:
    index = make_index([("file", "1 A.txt", None)], finalize=False)
    with pytest.raises(IndexNotSealedError):
        render_navigation(index, "/docs/1 A.txt")


def test_index_without_root_renders_nothing() -> None:
    index = DocumentIndex()
    index.finalize()
    assert render_navigation(index, "/anywhere/doc.txt") == ""


def test_root_group_lists_documents_with_relative_links(make_index) -> None:
    index = make_index([("file", "1 A.txt", None), ("file", "2 B.txt", None)])
    soup = _soup(render_navigation(index, "/docs/1 A.txt"))

    groups = soup.select("div.navigation > ul.nav-group")
    assert len(groups) == 1

    links = [(a["href"], a.get_text(strip=True)) for a in soup.select("li.nav-item a")]
    assert links == [("1 A.html", "1. A"), ("2 B.html", "2. B")]


def test_links_are_relative_to_the_current_document(make_index) -> None:
    index = make_index([
        ("file", "1 A.txt", None),
        ("dir", "2 sub", None),
        ("file", "2 sub/1 x.txt", None),
    ])
    soup = _soup(render_navigation(index, "/docs/2 sub/1 x.txt"))

    hrefs = [a["href"] for a in soup.find_all("a")]
    assert hrefs == ["../1 A.html", "1 x.html"]


def test_directories_render_as_label_and_nested_group(make_index) -> None:
    index = make_index([
        ("dir", "1 guide", None),
        ("file", "1 guide/1 start.txt", None),
    ])
    soup = _soup(render_navigation(index, "/docs/1 guide/1 start.txt"))

    root_group = soup.select_one("div.navigation > ul.nav-group")
    folder_item = root_group.find("li", recursive=False)
    assert folder_item.label.get_text(strip=True) == "1. Guide"
    assert folder_item.find("a") is None

    nested = folder_item.find_next_sibling("ul")
    assert [a.get_text(strip=True) for a in nested.find_all("a")] == ["1. Start"]


def test_promoted_documents_link_to_themselves_and_nest_subsections(make_index) -> None:
    index = make_index([("file", "1 A.txt", None), ("file", "1.1 B.txt", None)])
    soup = _soup(render_navigation(index, "/docs/1 A.txt"))

    root_group = soup.select_one("div.navigation > ul.nav-group")
    item = root_group.find("li", recursive=False)
    assert item.a["href"] == "1 A.html"

    nested = item.find_next_sibling("ul")
    assert nested.a["href"] == "1.1 B.html"


def test_excluded_folders_are_left_out(make_index) -> None:
    index = make_index(
        [("dir", "assets", None), ("file", "1 A.txt", None)],
        skipped=["/docs/assets/logo.png"],
    )
    markup = render_navigation(index, "/docs/1 A.txt")
    assert "Assets" not in markup
    assert "1. A" in markup


def test_empty_folders_render_as_inert_items(make_index) -> None:
    index = make_index([("dir", "drafts", None)])
    soup = _soup(render_navigation(index, "/docs/x.txt"))

    labels = [label.get_text(strip=True) for label in soup.find_all("label")]
    assert labels == ["Drafts"]
    assert soup.find("a") is None
    assert len(soup.find_all("ul")) == 1


def test_titles_are_escaped(make_index) -> None:
    index = make_index([("file", "q&a.txt", None)])
    markup = render_navigation(index, "/docs/q&a.txt")

    assert "Q&amp;A" in markup
    assert _soup(markup).a.get_text(strip=True) == "Q&A"


def test_rendering_is_deterministic(make_index) -> None:
    index = make_index([
        ("file", "1 A.txt", None),
        ("file", "1.1 B.txt", None),
        ("dir", "2 sub", None),
        ("file", "2 sub/1 x.txt", None),
    ])
    assert render_navigation(index, "/docs/1 A.txt") == render_navigation(index, "/docs/1 A.txt")
