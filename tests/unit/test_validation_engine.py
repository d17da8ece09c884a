"""Tests for the three-phase validation engine."""

import pytest

from infragraph.models import DiagnosticCode, Edge, Graph, Node, Severity
from infragraph.validation import ValidationEngine, has_blocking_errors


def make_node(node_id, kind="google_pubsub_topic", name=None, **properties):
    name = name or node_id
    return Node(id=node_id, kind=kind, name=name, properties={"name": name, **properties})


@pytest.fixture
def engine():
    return ValidationEngine()


def by_code(diagnostics, code):
    return [d for d in diagnostics if d.code == code.value]


class TestValidateAll:
    def test_empty_graph(self, engine):
        """An empty graph yields exactly one EMPTY_GRAPH info and nothing blocking."""
        diags = engine.validate_all(Graph())
        assert len(by_code(diags, DiagnosticCode.EMPTY_GRAPH)) == 1
        assert by_code(diags, DiagnosticCode.EMPTY_GRAPH)[0].severity == Severity.INFO
        assert not has_blocking_errors(diags)

    def test_clean_stack_has_no_errors(self, engine, network_stack):
        diags = engine.validate_all(network_stack)
        assert not has_blocking_errors(diags)

    def test_phases_do_not_short_circuit(self, engine):
        """Schema, graph and policy findings are all reported together."""
        graph = Graph(
            nodes=[
                Node(id="x", kind="aws_instance", name="legacy"),
                make_node("s", kind="google_compute_subnetwork", name="sub1"),
            ],
            edges=[Edge(id="e1", source="s", target="ghost")],
        )
        codes = {d.code for d in engine.validate_all(graph)}
        assert DiagnosticCode.UNKNOWN_RESOURCE.value in codes
        assert DiagnosticCode.DANGLING_EDGE.value in codes
        assert DiagnosticCode.SUBNET_WITHOUT_VPC.value in codes

    def test_does_not_mutate_graph(self, engine, network_stack):
        before = network_stack.model_dump()
        engine.validate_all(network_stack)
        assert network_stack.model_dump() == before


class TestSchemaPhase:
    def test_unknown_resource(self, engine):
        diags = engine.validate_schema(Graph(nodes=[Node(id="x", kind="aws_instance", name="legacy")]))
        assert len(diags) == 1
        assert diags[0].code == DiagnosticCode.UNKNOWN_RESOURCE.value
        assert diags[0].message == "Unknown resource type: aws_instance"
        assert diags[0].node_id == "x"

    def test_plugin_diagnostics_are_scoped_to_node(self, engine):
        node = make_node("fw", kind="google_compute_firewall", name="open")
        diags = engine.validate_schema(Graph(nodes=[node]))
        assert [d.code for d in diags] == [DiagnosticCode.OPEN_FIREWALL.value]
        assert diags[0].node_id == "fw"


class TestGraphPhase:
    def test_cycle(self, engine):
        graph = Graph(
            nodes=[make_node("a"), make_node("b")],
            edges=[Edge(id="e1", source="a", target="b"), Edge(id="e2", source="b", target="a")],
        )
        cycles = by_code(engine.validate_graph(graph), DiagnosticCode.DEPENDENCY_CYCLE)
        assert len(cycles) == 1
        assert cycles[0].severity == Severity.ERROR
        assert cycles[0].node_id is None
        assert "a → b → a" in cycles[0].message

    def test_self_loop_cycle_message(self, engine):
        graph = Graph(nodes=[make_node("a")], edges=[Edge(id="e1", source="a", target="a")])
        cycles = by_code(engine.validate_graph(graph), DiagnosticCode.DEPENDENCY_CYCLE)
        assert len(cycles) == 1
        assert cycles[0].message.endswith(": a → a")

    def test_dangling_edge(self, engine):
        graph = Graph(nodes=[make_node("a")], edges=[Edge(id="e1", source="a", target="ghost")])
        dangling = by_code(engine.validate_graph(graph), DiagnosticCode.DANGLING_EDGE)
        assert len(dangling) == 1
        assert "ghost" in dangling[0].message

    def test_duplicate_name_same_kind(self, engine):
        graph = Graph(
            nodes=[
                make_node("n1", kind="google_compute_instance", name="web-1"),
                make_node("n2", kind="google_compute_instance", name="web-1"),
            ]
        )
        duplicates = by_code(engine.validate_graph(graph), DiagnosticCode.DUPLICATE_NAME)
        assert len(duplicates) == 1
        assert duplicates[0].node_id == "n2"
        assert duplicates[0].severity == Severity.ERROR

    def test_names_colliding_after_sanitizing(self, engine):
        """Distinct names that map to one resource identifier are duplicates."""
        graph = Graph(
            nodes=[
                make_node("n1", name="web server"),
                make_node("n2", name="web_server"),
            ]
        )
        diags = engine.validate_all(graph)
        duplicates = by_code(diags, DiagnosticCode.DUPLICATE_NAME)
        assert len(duplicates) == 1
        assert duplicates[0].node_id == "n2"
        assert '"web_server"' in duplicates[0].message
        assert has_blocking_errors(diags)

    def test_same_name_different_kinds(self, engine):
        graph = Graph(
            nodes=[
                make_node("n1", kind="google_compute_instance", name="web-1"),
                make_node("n2", kind="google_storage_bucket", name="web-1"),
            ]
        )
        diags = engine.validate_graph(graph)
        assert by_code(diags, DiagnosticCode.DUPLICATE_NAME) == []
        cross = by_code(diags, DiagnosticCode.DUPLICATE_NAME_CROSS_TYPE)
        assert len(cross) == 1
        assert cross[0].severity == Severity.WARNING
        assert cross[0].node_id == "n2"

    def test_invalid_name_warning(self, engine):
        graph = Graph(nodes=[make_node("n1", name="1st topic")])
        invalid = by_code(engine.validate_graph(graph), DiagnosticCode.INVALID_NAME)
        assert len(invalid) == 1
        assert invalid[0].severity == Severity.WARNING


class TestPolicyPhase:
    def test_subnet_without_vpc(self, engine):
        graph = Graph(nodes=[make_node("s", kind="google_compute_subnetwork")])
        diags = engine.validate_policies(graph)
        assert [d.code for d in diags] == [DiagnosticCode.SUBNET_WITHOUT_VPC.value]

    def test_subnet_with_vpc(self, engine, network_stack):
        assert engine.validate_policies(network_stack) == []


class TestHasBlockingErrors:
    def test_warnings_do_not_block(self, engine):
        diags = engine.validate_all(Graph(nodes=[make_node("fw", kind="google_compute_firewall")]))
        assert diags
        assert not has_blocking_errors(diags)

    def test_errors_block(self, engine):
        diags = engine.validate_all(Graph(nodes=[Node(id="x", kind="aws_instance", name="legacy")]))
        assert has_blocking_errors(diags)
