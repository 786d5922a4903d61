from __future__ import annotations

"""
Navigation Renderer.

Builds the "$$navigation" markup for one compiled document out of a sealed
DocumentIndex. Links are made relative to the document the navigation is
rendered for, so every output file gets its own rendition.
"""

import html
import logging
from typing import List

from bs4 import BeautifulSoup

from compendium.core.indexing.document_index import DocumentIndex
from compendium.core.indexing.links import relative_link
from compendium.core.rendering.markup import MarkupNode, MarkupRegistry
from compendium.domain.constants import (
    DEFAULT_OUTPUT_EXTENSION,
    LINK_TEMPLATE,
    NAV_GROUP_TEMPLATE,
    NAV_ITEM_CONTENT_TEMPLATE,
    NAV_ITEM_TEMPLATE,
    NAV_ROOT_TEMPLATE,
)
from compendium.domain.errors import IndexNotSealedError
from compendium.domain.index_models import Unit

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_navigation(index: DocumentIndex, document_id: str) -> str:
    """
    Render the navigation tree as seen from a given document.

    Folders with visible content become list items followed by a nested
    group; folders without it become inert list items. Documents with
    sub-sections behave like folders, but also link to themselves.

    Args:
        index: A finalized document index.
        document_id: Path of the document the markup will be embedded into.

    Returns:
        str: Pretty-printed HTML, or "" when the index has no root (single
        document compilations).

    Raises:
        IndexNotSealedError: If the index was not finalized yet.
    """
    if not index.is_sealed:
        raise IndexNotSealedError("Navigation can only be rendered from a finalized index.")

    registry = MarkupRegistry()
    root_container = None

    for unit, parent in index.walk():
        if parent is None:
            root_container = registry.get(f"{unit.id}#container", NAV_ROOT_TEMPLATE)
            root_container.add_child(registry.get(unit.id, NAV_GROUP_TEMPLATE))
            continue

        parent_group = registry.get(parent.id)
        if unit.is_container and _has_visible_children(unit):
            _add_node(registry, parent_group, unit, document_id)
        elif unit.is_directory:
            _add_inert_item(registry, parent_group, unit)
        else:
            _add_leaf(registry, parent_group, unit, document_id)

    if root_container is None:
        return ""

    markup = BeautifulSoup(root_container.render(), "html.parser").prettify()
    logger.debug(f"Navigation rendered for {document_id} ({len(registry)} markup nodes)")
    return markup

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _has_visible_children(unit: Unit) -> bool:
    return any(not child.excluded for child in unit.children)


def _link_for(unit: Unit, document_id: str) -> List[str]:
    href = relative_link(document_id, unit.id, DEFAULT_OUTPUT_EXTENSION)
    return [html.escape(href, quote=True), html.escape(unit.display_title)]


def _add_node(registry: MarkupRegistry, parent_group: MarkupNode, unit: Unit, document_id: str) -> None:
    item = registry.get(f"{unit.id}#node_item", NAV_ITEM_TEMPLATE)
    if unit.is_directory:
        content = registry.get(
            f"{unit.id}#node_item_content", NAV_ITEM_CONTENT_TEMPLATE, [html.escape(unit.display_title)]
        )
    else:
        content = registry.get(f"{unit.id}#node_item_content", NAV_ITEM_CONTENT_TEMPLATE)
        content.add_child(registry.get(f"{unit.id}#node_content_link", LINK_TEMPLATE, _link_for(unit, document_id)))

    item.add_child(content)
    parent_group.add_child(item)
    parent_group.add_child(registry.get(unit.id, NAV_GROUP_TEMPLATE))


def _add_inert_item(registry: MarkupRegistry, parent_group: MarkupNode, unit: Unit) -> None:
    item = registry.get(f"{unit.id}#node_item", NAV_ITEM_TEMPLATE)
    item.add_child(registry.get(
        f"{unit.id}#node_item_content", NAV_ITEM_CONTENT_TEMPLATE, [html.escape(unit.display_title)]
    ))
    parent_group.add_child(item)


def _add_leaf(registry: MarkupRegistry, parent_group: MarkupNode, unit: Unit, document_id: str) -> None:
    item = registry.get(unit.id, NAV_ITEM_TEMPLATE)
    content = registry.get(f"{unit.id}#leaf_item_content", NAV_ITEM_CONTENT_TEMPLATE)
    content.add_child(registry.get(f"{unit.id}#leaf_content_link", LINK_TEMPLATE, _link_for(unit, document_id)))
    item.add_child(content)
    parent_group.add_child(item)
