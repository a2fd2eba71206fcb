from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic

from .models import GraphSnapshot, Link, Node, Position, PropsT

logger = logging.getLogger(__name__)

# ============================================================================
# Graph store -- node/link collections keyed by id
# ============================================================================


class ReferentialError(ValueError):
    """A link refers to a node id that is not in the store."""

    def __init__(self, link_id: str, missing: list[str]) -> None:
        self.link_id = link_id
        self.missing = missing
        super().__init__(
            f"Link {link_id!r} references missing node(s): {', '.join(missing)}"
        )


class GraphStore(Generic[PropsT]):
    """In-memory flowchart graph.

    Inserting a node or link whose id is already present replaces the old
    entry. ``add_link`` refuses links with unknown endpoints, but
    ``import_data`` loads whatever it is given, so the compositor still has to
    cope with dangling links.
    """

    def __init__(self, data: GraphSnapshot | Mapping[str, Any] | None = None) -> None:
        self._nodes: dict[str, Node[PropsT]] = {}
        self._links: dict[str, Link[PropsT]] = {}
        if data is not None:
            self.import_data(data)

    # -- nodes ---------------------------------------------------------------

    def add_node(self, node: Node[PropsT]) -> None:
        self._nodes[node.id] = node

    def remove_node(self, node_id: str) -> None:
        """Remove a node and every link attached to it. Unknown ids are ignored."""
        self._nodes.pop(node_id, None)
        attached = [
            link_id
            for link_id, link in self._links.items()
            if link.source == node_id or link.target == node_id
        ]
        for link_id in attached:
            del self._links[link_id]
        if attached:
            logger.debug("Removed node %s and %d attached link(s)", node_id, len(attached))

    def get_node(self, node_id: str) -> Node[PropsT] | None:
        return self._nodes.get(node_id)

    def get_nodes(self) -> list[Node[PropsT]]:
        return list(self._nodes.values())

    def update_node_position(self, node_id: str, x: float, y: float) -> None:
        """Move a node, e.g. after a drag. Unknown ids are ignored."""
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug("Ignoring position update for unknown node %s", node_id)
            return
        node.position = Position(x=x, y=y)

    # -- links ---------------------------------------------------------------

    def add_link(self, link: Link[PropsT]) -> None:
        missing = [
            node_id
            for node_id in dict.fromkeys((link.source, link.target))
            if node_id not in self._nodes
        ]
        if missing:
            raise ReferentialError(link.id, missing)
        self._links[link.id] = link

    def remove_link(self, link_id: str) -> None:
        self._links.pop(link_id, None)

    def get_link(self, link_id: str) -> Link[PropsT] | None:
        return self._links.get(link_id)

    def get_links(self) -> list[Link[PropsT]]:
        return list(self._links.values())

    def dangling_links(self) -> list[Link[PropsT]]:
        """Links whose source or target is not a node in this store."""
        return [
            link
            for link in self._links.values()
            if link.source not in self._nodes or link.target not in self._nodes
        ]

    # -- bulk ----------------------------------------------------------------

    def clear(self) -> None:
        self._nodes.clear()
        self._links.clear()

    def export_data(self) -> GraphSnapshot:
        """Deep copy of the current nodes and links."""
        return GraphSnapshot(
            nodes=[node.model_copy(deep=True) for node in self._nodes.values()],
            links=[link.model_copy(deep=True) for link in self._links.values()],
        )

    def import_data(self, data: GraphSnapshot | Mapping[str, Any]) -> None:
        """Replace the whole graph. Link endpoints are not checked."""
        if isinstance(data, GraphSnapshot):
            snapshot = data.model_copy(deep=True)
        else:
            snapshot = GraphSnapshot.model_validate(data)

        self.clear()
        for node in snapshot.nodes:
            self._nodes[node.id] = node
        for link in snapshot.links:
            self._links[link.id] = link

        logger.debug(
            "Imported %d node(s) and %d link(s)", len(self._nodes), len(self._links)
        )

    def to_dict(self) -> dict[str, Any]:
        return self.export_data().to_dict()

    def to_json(self, indent: int | None = None) -> str:
        return self.export_data().to_json(indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "GraphStore":
        return cls(GraphSnapshot.from_json(text))
