from __future__ import annotations

"""
Markup Builder Nodes.

Lightweight nodes that wrap a printf-style HTML template and a list of child
nodes. A registry memoizes nodes by id so that a container created early in
a tree walk can keep receiving children later in the same walk.
"""

from typing import Dict, List, Optional, Sequence

_PLACEHOLDER = "%s"


class MarkupNode:
    """
    One HTML element to be rendered from a template.

    The template receives the node's data values followed by the rendered
    children, in that order; values beyond the template's placeholders are
    ignored.
    """

    def __init__(self, template: str, data: Optional[Sequence[str]] = None) -> None:
        self.template = template
        self.data: List[str] = list(data or [])
        self.children: List[MarkupNode] = []

    def add_child(self, child: MarkupNode) -> None:
        self.children.append(child)

    def render(self) -> str:
        values = list(self.data)
        if self.children:
            values.append("\n" + "\n".join(child.render() for child in self.children) + "\n")

        slots = self.template.count(_PLACEHOLDER)
        values = (values + [""] * slots)[:slots]
        return self.template % tuple(values)


class MarkupRegistry:
    """Memoizing factory of MarkupNode instances, scoped to one rendering pass."""

    def __init__(self) -> None:
        self._nodes: Dict[str, MarkupNode] = {}

    def get(self, node_id: str, template: Optional[str] = None,
            data: Optional[Sequence[str]] = None) -> MarkupNode:
        """
        Return the node registered under 'node_id', creating it on first use.

        Args:
            node_id: Unique id of the node within the pass.
            template: Template for a new node; ignored when the node exists.
            data: Data values for a new node; ignored when the node exists.

        Returns:
            MarkupNode: The memoized node.

        Raises:
            KeyError: If the node does not exist and no template was given.
        """
        node = self._nodes.get(node_id)
        if node is None:
            if template is None:
                raise KeyError(f"No markup node registered under '{node_id}'")
            node = MarkupNode(template, data)
            self._nodes[node_id] = node
        return node

    def __len__(self) -> int:
        return len(self._nodes)
