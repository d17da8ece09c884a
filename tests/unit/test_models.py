from infragraph.models import (
    CATEGORY_ORDER,
    Diagnostic,
    Edge,
    EdgeRelationship,
    Graph,
    Node,
    Reference,
    ResourceCategory,
    ResourceKind,
    Severity,
)
from infragraph.utils.naming import default_node_name, sanitize_identifier


class TestResourceKind:
    def test_parse_known_and_unknown(self):
        assert ResourceKind.parse("google_pubsub_topic") is ResourceKind.PUBSUB_TOPIC
        assert ResourceKind.parse(ResourceKind.PUBSUB_TOPIC) is ResourceKind.PUBSUB_TOPIC
        assert ResourceKind.parse("aws_instance") is None

    def test_category_order(self):
        assert CATEGORY_ORDER[0] == ResourceCategory.NETWORK
        assert CATEGORY_ORDER[-1] == ResourceCategory.MESSAGING
        assert len(CATEGORY_ORDER) == 8


class TestGraphModel:
    def test_edge_accepts_persisted_aliases(self):
        edge = Edge.model_validate({"id": "e1", "from": "a", "to": "b"})
        assert edge.source == "a"
        assert edge.target == "b"
        assert edge.relationship == EdgeRelationship.DEPENDS_ON
        assert edge.model_dump(by_alias=True)["from"] == "a"

    def test_node_keeps_unknown_kind(self):
        """Graphs saved by newer versions still load."""
        node = Node.model_validate({"id": "n1", "kind": "google_future_thing", "name": "x"})
        assert node.kind == "google_future_thing"
        assert node.version == 1
        assert node.properties == {}

    def test_graph_helpers(self):
        graph = Graph(
            nodes=[
                Node(id="a", kind="google_compute_network", name="vpc"),
                Node(id="b", kind="google_pubsub_topic", name="t"),
            ]
        )
        assert graph.node_ids() == ["a", "b"]
        assert graph.get_node("b").name == "t"
        assert graph.get_node("zzz") is None
        assert [n.id for n in graph.nodes_of_kind(ResourceKind.COMPUTE_NETWORK)] == ["a"]


class TestDiagnostic:
    def test_factories(self):
        diag = Diagnostic.warning("OPEN_FIREWALL", "Open", node_id="fw")
        assert diag.severity == Severity.WARNING
        assert diag.model_dump(by_alias=True)["nodeId"] == "fw"
        assert Diagnostic.error("X", "m").severity == Severity.ERROR
        assert Diagnostic.info("X", "m").node_id is None

    def test_reference_str(self):
        assert str(Reference(path="google_service_account.sa.email")) == "google_service_account.sa.email"


class TestNaming:
    def test_sanitize_identifier(self):
        assert sanitize_identifier("web-1") == "web-1"
        assert sanitize_identifier("web server.1") == "web_server_1"
        assert sanitize_identifier("1st-vpc") == "r_1st-vpc"
        assert sanitize_identifier("_private") == "_private"
        assert sanitize_identifier("") == "r_"

    def test_default_node_name(self):
        assert default_node_name("google_compute_network", 1) == "compute-network-1"
        assert default_node_name("google_cloud_run_v2_service", 3) == "cloud-run-v2-service-3"
