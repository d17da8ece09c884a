"""
Graph State
===========

Editing operations over a graph that keep the node/edge invariants:
unique ids, no self-loops, at most one edge per ordered pair, and node
removal cascading to its edges.
"""

import uuid
from typing import Any, Dict, Optional

from infragraph.exceptions import GraphEditError
from infragraph.models import Edge, EdgeRelationship, Graph, Node, Position, ResourceKind
from infragraph.registry import PluginRegistry, build_default_registry
from infragraph.utils.logging import get_logger
from infragraph.utils.naming import default_node_name


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class GraphState:
    """
    Mutable holder of the current graph.

    Every mutation replaces the node and edge lists rather than editing them in
    place, so a graph returned by ``graph`` or ``snapshot()`` never changes
    afterwards.
    """

    def __init__(self, registry: Optional[PluginRegistry] = None, graph: Optional[Graph] = None):
        self.registry = registry or build_default_registry()
        self._graph = graph.model_copy(deep=True) if graph is not None else Graph()
        self.dirty = False

    @property
    def graph(self) -> Graph:
        return self._graph

    def snapshot(self) -> Graph:
        """Deep copy of the current graph, safe to hand to other threads."""
        return self._graph.model_copy(deep=True)

    def _commit(self, graph: Graph) -> None:
        self._graph = graph
        self.dirty = True

    def _require_node(self, node_id: str) -> Node:
        node = self._graph.get_node(node_id)
        if node is None:
            raise GraphEditError("Node not found", node_id=node_id)
        return node

    def _replace_node(self, updated: Node) -> None:
        nodes = [updated if node.id == updated.id else node for node in self._graph.nodes]
        self._commit(Graph(nodes=nodes, edges=list(self._graph.edges)))

    # Nodes

    def add_node(self, kind: Any, position: Optional[Position] = None) -> str:
        """
        Add a node with the plugin defaults for ``kind``.

        The node is named ``<kind label>-<n>`` where n is one more than the
        number of existing nodes of that kind.

        Returns:
            The new node id

        Raises:
            GraphEditError: If no plugin exists for ``kind``
        """
        plugin = self.registry.get(kind)
        if plugin is None:
            raise GraphEditError(f"Unknown resource kind: {kind}")

        kind_value = plugin.kind.value
        existing = len(self._graph.nodes_of_kind(plugin.kind))
        name = default_node_name(kind_value, existing + 1)

        properties = plugin.defaults()
        if "name" in properties and not properties["name"]:
            properties["name"] = name

        node = Node(
            id=_new_id("node"),
            kind=kind_value,
            name=name,
            properties=properties,
            version=1,
            position=position or Position(),
        )
        self._commit(Graph(nodes=[*self._graph.nodes, node], edges=list(self._graph.edges)))
        get_logger().debug("Node added", node=node.id, kind=kind_value)
        return node.id

    def remove_node(self, node_id: str) -> None:
        """Remove a node and every edge touching it."""
        self._require_node(node_id)
        nodes = [node for node in self._graph.nodes if node.id != node_id]
        edges = [
            edge for edge in self._graph.edges if edge.source != node_id and edge.target != node_id
        ]
        removed = len(self._graph.edges) - len(edges)
        self._commit(Graph(nodes=nodes, edges=edges))
        get_logger().debug("Node removed", node=node_id, edges_removed=removed)

    def update_node_properties(self, node_id: str, changes: Dict[str, Any]) -> Node:
        """Merge ``changes`` into the node's properties and bump its version."""
        node = self._require_node(node_id)
        updated = node.model_copy(
            update={
                "properties": {**node.properties, **changes},
                "version": node.version + 1,
            }
        )
        self._replace_node(updated)
        return updated

    def rename_node(self, node_id: str, name: str) -> Node:
        node = self._require_node(node_id)
        updated = node.model_copy(update={"name": name})
        self._replace_node(updated)
        return updated

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        node = self._require_node(node_id)
        updated = node.model_copy(update={"position": Position(x=x, y=y)})
        self._replace_node(updated)
        return updated

    # Edges

    def add_edge(
        self,
        source: str,
        target: str,
        relationship: Optional[EdgeRelationship] = None,
    ) -> str:
        """
        Connect ``source`` to ``target`` (source depends on target).

        Without an explicit relationship the source plugin's edge suggestions
        pick one for the target's kind, falling back to ``depends_on``.

        Returns:
            The new edge id

        Raises:
            GraphEditError: For self-loops, unknown endpoints, or when the same
                ordered pair is already connected
        """
        if source == target:
            raise GraphEditError("Cannot connect a node to itself", node_id=source)
        source_node = self._require_node(source)
        target_node = self._require_node(target)

        for edge in self._graph.edges:
            if edge.source == source and edge.target == target:
                raise GraphEditError("Edge already exists", edge_id=edge.id)

        if relationship is None:
            relationship = self._suggest_relationship(source_node, target_node)

        edge = Edge(id=_new_id("edge"), source=source, target=target, relationship=relationship)
        self._commit(Graph(nodes=list(self._graph.nodes), edges=[*self._graph.edges, edge]))
        get_logger().debug(
            "Edge added", edge=edge.id, source=source, target=target, relationship=relationship.value
        )
        return edge.id

    def _suggest_relationship(self, source: Node, target: Node) -> EdgeRelationship:
        plugin = self.registry.get(source.kind)
        target_kind = ResourceKind.parse(target.kind)
        if plugin is not None and target_kind is not None:
            for suggestion in plugin.suggest_edges(source, self._graph):
                if suggestion.target_kind == target_kind:
                    return suggestion.relationship
        return EdgeRelationship.DEPENDS_ON

    def remove_edge(self, edge_id: str) -> None:
        edges = [edge for edge in self._graph.edges if edge.id != edge_id]
        if len(edges) == len(self._graph.edges):
            raise GraphEditError("Edge not found", edge_id=edge_id)
        self._commit(Graph(nodes=list(self._graph.nodes), edges=edges))

    # Whole graph

    def load_graph(self, graph: Graph) -> None:
        """Replace the current graph with a copy of ``graph``."""
        self._graph = graph.model_copy(deep=True)
        self.dirty = False

    def clear(self) -> None:
        self._commit(Graph())
