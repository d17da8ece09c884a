import logging

import pytest

from infragraph.models import Edge, Graph, Node
from infragraph.utils import logging as infragraph_logging


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging to avoid Rich handlers leaking between tests."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if "Rich" in handler.__class__.__name__:
            root.removeHandler(handler)
    # Set to WARNING level to reduce noise in tests
    logging.basicConfig(level=logging.WARNING, format="%(message)s", force=True)
    yield
    # The CLI installs its own handler on the library logger; undo that
    lib_logger = logging.getLogger("infragraph")
    for handler in lib_logger.handlers[:]:
        lib_logger.removeHandler(handler)
    lib_logger.propagate = True
    infragraph_logging.logger = infragraph_logging.StructuredLogger(configure=False)
    logging.basicConfig(level=logging.INFO, force=True)


@pytest.fixture
def network_stack():
    """VPC <- subnet <- VM, plus a firewall on the VPC. Edges point at the dependency."""
    nodes = [
        Node(
            id="n-vpc",
            kind="google_compute_network",
            name="vpc1",
            properties={"name": "vpc1"},
        ),
        Node(
            id="n-sub",
            kind="google_compute_subnetwork",
            name="sub1",
            properties={"name": "sub1", "ip_cidr_range": "10.10.0.0/24"},
        ),
        Node(
            id="n-vm",
            kind="google_compute_instance",
            name="web-1",
            properties={"name": "web-1", "tags": "http-server, https-server"},
        ),
        Node(
            id="n-fw",
            kind="google_compute_firewall",
            name="allow-web",
            properties={"name": "allow-web", "source_ranges": "10.0.0.0/8"},
        ),
    ]
    edges = [
        Edge(id="e1", source="n-sub", target="n-vpc", relationship="network_attachment"),
        Edge(id="e2", source="n-vm", target="n-sub", relationship="network_attachment"),
        Edge(id="e3", source="n-fw", target="n-vpc", relationship="network_attachment"),
    ]
    return Graph(nodes=nodes, edges=edges)
