import pytest

from infragraph.exceptions import DependencyError
from infragraph.graph import GraphEngine
from infragraph.models import Edge, Graph, Node


def make_node(node_id, kind="google_compute_network", name=None):
    """Helper to create a Node with only the fields the engine reads."""
    return Node(id=node_id, kind=kind, name=name or node_id)


def make_edge(source, target, edge_id=None):
    return Edge(id=edge_id or f"{source}->{target}", source=source, target=target)


def make_graph(node_ids, edges=()):
    return Graph(
        nodes=[make_node(node_id) for node_id in node_ids],
        edges=[make_edge(source, target) for source, target in edges],
    )


@pytest.fixture
def engine():
    return GraphEngine()


class TestAdjacency:
    def test_every_node_has_an_entry(self, engine):
        """Nodes without outgoing edges map to an empty set."""
        graph = make_graph(["A", "B", "C"], [("A", "B")])
        assert engine.build_adjacency(graph) == {"A": {"B"}, "B": set(), "C": set()}

    def test_dangling_and_duplicate_edges(self, engine):
        """Edges to missing nodes are ignored and parallel edges collapse."""
        graph = Graph(
            nodes=[make_node("A"), make_node("B")],
            edges=[make_edge("A", "B", "e1"), make_edge("A", "B", "e2"), make_edge("A", "X", "e3")],
        )
        assert engine.build_adjacency(graph) == {"A": {"B"}, "B": set()}


class TestCycleDetection:
    def test_acyclic_graph(self, engine):
        graph = make_graph(["A", "B", "C", "D"], [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
        result = engine.detect_cycle(graph)
        assert result.has_cycle is False
        assert result.cycle_nodes == []

    def test_reverse_edge_is_a_two_cycle(self, engine):
        """A manufactured reverse edge must be reported even though editing forbids it."""
        graph = make_graph(["A", "B"], [("A", "B"), ("B", "A")])
        result = engine.detect_cycle(graph)
        assert result.has_cycle is True
        assert set(result.cycle_nodes) == {"A", "B"}

    def test_witness_is_the_cycle_path(self, engine):
        graph = make_graph(["A", "B", "C", "D"], [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D")])
        result = engine.detect_cycle(graph)
        assert result.cycle_nodes == ["A", "B", "C"]

    def test_self_loop(self, engine):
        graph = make_graph(["A"], [("A", "A")])
        result = engine.detect_cycle(graph)
        assert result.has_cycle is True
        assert result.cycle_nodes == ["A", "A"]

    def test_cycle_not_reachable_from_first_node(self, engine):
        graph = make_graph(["A", "B", "C"], [("B", "C"), ("C", "B")])
        result = engine.detect_cycle(graph)
        assert result.has_cycle is True
        assert set(result.cycle_nodes) == {"B", "C"}

    def test_long_chain_does_not_hit_recursion_limit(self, engine):
        ids = [f"n{i:05d}" for i in range(3000)]
        graph = make_graph(ids, list(zip(ids, ids[1:])))
        assert engine.detect_cycle(graph).has_cycle is False


class TestTopologicalSort:
    def test_empty_graph(self, engine):
        result = engine.topological_sort(Graph())
        assert result.order == []
        assert result.has_cycle is False

    def test_source_precedes_target(self, engine):
        """For every edge the source is emitted no later than the target."""
        graph = make_graph(["A", "B", "C"], [("C", "B"), ("B", "A")])
        assert engine.topological_sort(graph).order_ids == ["C", "B", "A"]

    def test_ties_broken_by_smallest_id(self, engine):
        graph = make_graph(["c", "a", "b"])
        assert engine.topological_sort(graph).order_ids == ["a", "b", "c"]

    def test_ready_ids_are_reinserted_in_sorted_position(self, engine):
        graph = make_graph(["a", "z", "m"], [("a", "m")])
        assert engine.topological_sort(graph).order_ids == ["a", "m", "z"]

    def test_order_independent_of_edge_order(self, engine):
        edges = [("d", "b"), ("d", "c"), ("b", "a"), ("c", "a")]
        first = engine.topological_sort(make_graph(["a", "b", "c", "d"], edges))
        second = engine.topological_sort(make_graph(["a", "b", "c", "d"], list(reversed(edges))))
        assert first.order_ids == second.order_ids

    def test_order_is_a_permutation(self, engine, network_stack):
        order = engine.topological_sort(network_stack).order_ids
        assert sorted(order) == sorted(network_stack.node_ids())
        for edge in network_stack.edges:
            assert order.index(edge.source) < order.index(edge.target)

    def test_cycle_returns_empty_order_and_witness(self, engine):
        graph = make_graph(["A", "B", "C"], [("A", "B"), ("B", "A"), ("C", "A")])
        result = engine.topological_sort(graph)
        assert result.order == []
        assert result.has_cycle is True
        assert len(result.cycle_nodes) >= 2

    def test_does_not_mutate_graph(self, engine, network_stack):
        before = network_stack.model_dump()
        engine.topological_sort(network_stack)
        engine.detect_cycle(network_stack)
        assert network_stack.model_dump() == before


class TestTraversal:
    def test_execution_layers_dependencies_first(self, engine):
        graph = make_graph(["vm", "sub", "net"], [("sub", "net"), ("vm", "sub")])
        assert engine.get_execution_layers(graph) == [["net"], ["sub"], ["vm"]]

    def test_execution_layers_group_independent_nodes(self, engine):
        graph = make_graph(["a", "b", "net"], [("a", "net"), ("b", "net")])
        assert engine.get_execution_layers(graph) == [["net"], ["a", "b"]]

    def test_execution_layers_cycle_raises(self, engine):
        graph = make_graph(["A", "B"], [("A", "B"), ("B", "A")])
        with pytest.raises(DependencyError, match="Cycle detected"):
            engine.get_execution_layers(graph)

    def test_dependencies_and_dependents(self, engine, network_stack):
        assert engine.get_dependencies(network_stack, "n-vm") == {"n-sub", "n-vpc"}
        assert engine.get_dependents(network_stack, "n-vpc") == {"n-sub", "n-vm", "n-fw"}
        assert engine.get_dependencies(network_stack, "n-vpc") == set()

    def test_unknown_node_raises(self, engine, network_stack):
        with pytest.raises(ValueError, match="not found"):
            engine.get_dependencies(network_stack, "missing")

    def test_connected_nodes_either_direction(self, engine, network_stack):
        connected = engine.get_connected_nodes(network_stack, "n-sub")
        assert [node.id for node in connected] == ["n-vpc", "n-vm"]

    def test_edges_between_either_direction(self, engine, network_stack):
        assert [e.id for e in engine.get_edges_between(network_stack, "n-vpc", "n-sub")] == ["e1"]
        assert engine.get_edges_between(network_stack, "n-vm", "n-vpc") == []

    def test_visualize(self, engine, network_stack):
        text = engine.visualize(network_stack)
        assert "Dependency Graph:" in text
        assert "Layer 1:" in text
        assert "web-1 [google_compute_instance] (depends on: sub1)" in text
