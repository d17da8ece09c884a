"""Dependency graph algorithms over the node/edge model."""

import heapq
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set, Tuple

from infragraph.exceptions import DependencyError
from infragraph.models import Edge, Graph, Node
from infragraph.utils.logging import get_logger

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass
class CycleResult:
    """Outcome of cycle detection.

    ``cycle_nodes`` is the witness: the node ids on the first cycle found,
    starting at the target of the back edge. A self-loop is reported as
    ``[id, id]`` so every witness names at least two ids.
    """

    has_cycle: bool
    cycle_nodes: List[str] = field(default_factory=list)


@dataclass
class TopologicalResult:
    """Outcome of a topological sort. ``order`` is empty when a cycle exists."""

    order: List[Node]
    has_cycle: bool
    cycle_nodes: List[str] = field(default_factory=list)

    @property
    def order_ids(self) -> List[str]:
        return [node.id for node in self.order]


class GraphEngine:
    """Algorithms over a graph snapshot.

    The engine holds no state: adjacency is rebuilt from the snapshot on every
    call and the snapshot is never modified. An edge ``source -> target`` means
    the source depends on the target. Edges with a missing endpoint are ignored
    here; validation reports them as dangling.
    """

    def build_adjacency(self, graph: Graph) -> Dict[str, Set[str]]:
        """Map every node id to the ids it reaches through one outgoing edge."""
        adjacency: Dict[str, Set[str]] = {node.id: set() for node in graph.nodes}
        for edge in graph.edges:
            if edge.source in adjacency and edge.target in adjacency:
                adjacency[edge.source].add(edge.target)
        return adjacency

    def _reverse_adjacency(self, graph: Graph) -> Dict[str, Set[str]]:
        reverse: Dict[str, Set[str]] = {node.id: set() for node in graph.nodes}
        for edge in graph.edges:
            if edge.source in reverse and edge.target in reverse:
                reverse[edge.target].add(edge.source)
        return reverse

    def detect_cycle(self, graph: Graph) -> CycleResult:
        """Three-colour depth-first search for a directed cycle.

        Roots are visited in node insertion order and neighbours in id order, so
        the reported witness is stable for a given graph.
        """
        adjacency = self.build_adjacency(graph)
        color = {node_id: WHITE for node_id in adjacency}

        for root in adjacency:
            if color[root] != WHITE:
                continue

            color[root] = GRAY
            stack: List[Tuple[str, Iterator[str]]] = [(root, iter(sorted(adjacency[root])))]

            while stack:
                node_id, neighbours = stack[-1]
                descended = False

                for neighbour in neighbours:
                    if color[neighbour] == GRAY:
                        path = [entry[0] for entry in stack]
                        cycle = path[path.index(neighbour) :]
                        if len(cycle) == 1:
                            cycle.append(neighbour)
                        get_logger().debug("Dependency cycle found", nodes=cycle)
                        return CycleResult(has_cycle=True, cycle_nodes=cycle)
                    if color[neighbour] == WHITE:
                        color[neighbour] = GRAY
                        stack.append((neighbour, iter(sorted(adjacency[neighbour]))))
                        descended = True
                        break

                if not descended:
                    color[node_id] = BLACK
                    stack.pop()

        return CycleResult(has_cycle=False)

    def topological_sort(self, graph: Graph) -> TopologicalResult:
        """Order nodes with Kahn's algorithm, breaking ties by smallest id.

        In-degree counts incoming edges, so for every edge ``(source, target)``
        the source is emitted before the target. Returns an empty order plus the
        cycle witness when the graph is cyclic.
        """
        cycle = self.detect_cycle(graph)
        if cycle.has_cycle:
            return TopologicalResult(order=[], has_cycle=True, cycle_nodes=cycle.cycle_nodes)

        adjacency = self.build_adjacency(graph)
        in_degree = {node_id: 0 for node_id in adjacency}
        for targets in adjacency.values():
            for target in targets:
                in_degree[target] += 1

        ready = [node_id for node_id, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)

        node_map = graph.node_map()
        order: List[Node] = []

        while ready:
            current = heapq.heappop(ready)
            order.append(node_map[current])

            for target in adjacency[current]:
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    heapq.heappush(ready, target)

        return TopologicalResult(order=order, has_cycle=False)

    def get_execution_layers(self, graph: Graph) -> List[List[str]]:
        """Group node ids into deployment layers, dependencies first.

        Nodes in the same layer do not depend on each other.

        Raises:
            DependencyError: If the graph contains a cycle
        """
        cycle = self.detect_cycle(graph)
        if cycle.has_cycle:
            raise DependencyError("Cannot create execution layers", cycle=cycle.cycle_nodes)

        adjacency = self.build_adjacency(graph)
        reverse = self._reverse_adjacency(graph)
        pending = {node_id: len(targets) for node_id, targets in adjacency.items()}

        layers = []
        current_layer = sorted(node_id for node_id, count in pending.items() if count == 0)

        while current_layer:
            layers.append(current_layer)
            next_layer = []
            for node_id in current_layer:
                for dependent in reverse[node_id]:
                    pending[dependent] -= 1
                    if pending[dependent] == 0:
                        next_layer.append(dependent)
            current_layer = sorted(next_layer)

        return layers

    def get_dependencies(self, graph: Graph, node_id: str) -> Set[str]:
        """Get all dependencies (direct and transitive) for a node.

        Raises:
            ValueError: If the node does not exist
        """
        adjacency = self.build_adjacency(graph)
        return self._walk(adjacency, node_id)

    def get_dependents(self, graph: Graph, node_id: str) -> Set[str]:
        """Get all dependents (direct and transitive) for a node.

        Raises:
            ValueError: If the node does not exist
        """
        reverse = self._reverse_adjacency(graph)
        return self._walk(reverse, node_id)

    def _walk(self, adjacency: Dict[str, Set[str]], node_id: str) -> Set[str]:
        if node_id not in adjacency:
            raise ValueError(f"Node '{node_id}' not found")

        reached: Set[str] = set()
        queue = deque([node_id])

        while queue:
            current = queue.popleft()
            for neighbour in adjacency[current]:
                if neighbour not in reached:
                    reached.add(neighbour)
                    queue.append(neighbour)

        reached.discard(node_id)
        return reached

    def get_connected_nodes(self, graph: Graph, node_id: str) -> List[Node]:
        """Nodes sharing an edge with ``node_id`` in either direction."""
        connected = set()
        for edge in graph.edges:
            if edge.source == node_id:
                connected.add(edge.target)
            if edge.target == node_id:
                connected.add(edge.source)
        return [node for node in graph.nodes if node.id in connected]

    def get_edges_between(self, graph: Graph, first_id: str, second_id: str) -> List[Edge]:
        """Edges joining the two nodes, in either direction."""
        return [
            edge
            for edge in graph.edges
            if (edge.source == first_id and edge.target == second_id)
            or (edge.source == second_id and edge.target == first_id)
        ]

    def visualize(self, graph: Graph) -> str:
        """Generate a text visualization of the deployment layers.

        Raises:
            DependencyError: If the graph contains a cycle
        """
        lines = ["Dependency Graph:", ""]
        node_map = graph.node_map()
        adjacency = self.build_adjacency(graph)

        for i, layer in enumerate(self.get_execution_layers(graph)):
            lines.append(f"Layer {i + 1}:")
            for node_id in layer:
                node = node_map[node_id]
                deps = sorted(node_map[target].name for target in adjacency[node_id])
                suffix = f" (depends on: {', '.join(deps)})" if deps else ""
                lines.append(f"  - {node.name} [{node.kind}]{suffix}")
            lines.append("")

        return "\n".join(lines)
