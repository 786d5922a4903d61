from __future__ import annotations

"""
Unit tests for the markup builder nodes and their memoizing registry.
"""

import pytest

from compendium.core.rendering.markup import MarkupNode, MarkupRegistry


def test_node_renders_data_into_template() -> None:
    node = MarkupNode('<a href="%s">%s</a>', ["x.html", "X"])
    assert node.render() == '<a href="x.html">X</a>'


def test_missing_values_render_empty_and_extra_values_are_ignored() -> None:
    assert MarkupNode("<li>%s</li>").render() == "<li></li>"
    assert MarkupNode("<b>%s</b>", ["one", "two"]).render() == "<b>one</b>"


def test_children_are_joined_after_data() -> None:
    group = MarkupNode("<ul>%s</ul>")
    group.add_child(MarkupNode("<li>%s</li>", ["a"]))
    group.add_child(MarkupNode("<li>%s</li>", ["b"]))

    assert group.render() == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"


def test_children_fill_the_slot_following_data() -> None:
    node = MarkupNode("<div title=\"%s\">%s</div>", ["t"])
    node.add_child(MarkupNode("<p>%s</p>", ["body"]))
    assert node.render() == '<div title="t">\n<p>body</p>\n</div>'


def test_registry_memoizes_nodes() -> None:
    registry = MarkupRegistry()
    first = registry.get("n1", "<ul>%s</ul>")
    again = registry.get("n1", "<ol>%s</ol>", ["ignored"])

    assert first is again
    assert again.template == "<ul>%s</ul>"
    assert len(registry) == 1


def test_registry_lookup_without_template_requires_existing_node() -> None:
    registry = MarkupRegistry()
    with pytest.raises(KeyError):
        registry.get("missing")
