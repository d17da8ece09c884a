import os

import pytest

from infragraph.config import GeneratorConfig
from infragraph.generator import ConfigurationGenerator, category_filename, write_files
from infragraph.generator.generator import FILE_HEADER
from infragraph.models import Edge, Graph, Node, ResourceCategory


def make_node(node_id, kind, name, **properties):
    return Node(id=node_id, kind=kind, name=name, properties={"name": name, **properties})


@pytest.fixture
def generator():
    return ConfigurationGenerator()


def files_by_name(files):
    return {f.filename: f.content for f in files}


class TestFileLayout:
    def test_empty_graph_still_has_provider_and_variables(self, generator):
        files = generator.generate(Graph())
        assert [f.filename for f in files] == ["providers.tf", "variables.tf"]

    def test_files_in_category_order(self, generator):
        graph = Graph(
            nodes=[
                make_node("t", "google_pubsub_topic", "events"),
                make_node("b", "google_storage_bucket", "assets"),
                make_node("v", "google_compute_network", "vpc1"),
                make_node("a", "google_compute_address", "ip"),
            ]
        )
        names = [f.filename for f in generator.generate(graph)]
        assert names == [
            "providers.tf",
            "variables.tf",
            "network.tf",
            "storage.tf",
            "messaging.tf",
            "outputs.tf",
        ]

    def test_every_file_has_header(self, generator, network_stack):
        for generated in generator.generate(network_stack):
            assert generated.content.startswith(FILE_HEADER)
            assert generated.content.endswith("}\n")

    def test_category_filename(self):
        assert category_filename(ResourceCategory.KUBERNETES) == "kubernetes.tf"

    def test_provider_and_variables_use_config(self):
        config = GeneratorConfig(project_id="acme-prod", region="europe-west1")
        files = files_by_name(ConfigurationGenerator(config=config).generate(Graph()))

        providers = files["providers.tf"]
        assert "terraform {" in providers
        assert 'required_version = ">= 1.0"' in providers
        assert 'google = { source = "hashicorp/google", version = "~> 6.0" }' in providers
        assert 'provider "google" {' in providers
        assert "project = var.project_id" in providers

        variables = files["variables.tf"]
        assert 'default     = "acme-prod"' in variables
        assert 'default     = "europe-west1"' in variables
        assert "type        = string" in variables


class TestGeneration:
    def test_reference_uses_generated_identifier(self, generator):
        """The subnet points at the network's resource address, never its internal id."""
        graph = Graph(
            nodes=[
                make_node("node_a1", "google_compute_network", "vpc1"),
                make_node("node_b2", "google_compute_subnetwork", "sub1", ip_cidr_range="10.1.0.0/24"),
            ],
            edges=[Edge(id="e1", source="node_b2", target="node_a1", relationship="network_attachment")],
        )
        network_tf = files_by_name(generator.generate(graph))["network.tf"]
        assert "google_compute_network.vpc1.id" in network_tf
        assert "node_a1" not in network_tf

    def test_dependencies_declared_first(self, generator, network_stack):
        network_tf = files_by_name(generator.generate(network_stack))["network.tf"]
        vpc = network_tf.index('resource "google_compute_network" "vpc1"')
        subnet = network_tf.index('resource "google_compute_subnetwork" "sub1"')
        firewall = network_tf.index('resource "google_compute_firewall" "allow-web"')
        assert vpc < subnet
        assert vpc < firewall

    def test_generation_is_idempotent(self, generator, network_stack):
        first = generator.generate(network_stack)
        second = generator.generate(network_stack)
        assert [f.model_dump() for f in first] == [f.model_dump() for f in second]

    def test_generation_does_not_mutate_graph(self, generator, network_stack):
        before = network_stack.model_dump()
        generator.generate(network_stack)
        assert network_stack.model_dump() == before

    def test_cycle_falls_back_to_insertion_order(self, generator):
        graph = Graph(
            nodes=[
                make_node("b", "google_pubsub_topic", "second"),
                make_node("a", "google_pubsub_topic", "first"),
            ],
            edges=[
                Edge(id="e1", source="a", target="b"),
                Edge(id="e2", source="b", target="a"),
            ],
        )
        messaging = files_by_name(generator.generate(graph))["messaging.tf"]
        assert messaging.index('"second"') < messaging.index('"first"')

    def test_unknown_kind_is_skipped(self, generator):
        graph = Graph(
            nodes=[
                Node(id="x", kind="aws_s3_bucket", name="legacy"),
                make_node("t", "google_pubsub_topic", "events"),
            ]
        )
        files = files_by_name(generator.generate(graph))
        assert "legacy" not in "".join(files.values())
        assert 'resource "google_pubsub_topic" "events"' in files["messaging.tf"]

    def test_outputs_collected_in_outputs_file(self, generator):
        graph = Graph(nodes=[make_node("a", "google_compute_address", "ip")])
        files = files_by_name(generator.generate(graph))
        assert 'output "ip_address"' in files["outputs.tf"]
        assert "value       = google_compute_address.ip.address" in files["outputs.tf"]
        assert "output" not in files["network.tf"].replace(FILE_HEADER, "")

    def test_names_are_sanitized(self, generator):
        graph = Graph(nodes=[make_node("t", "google_pubsub_topic", "order events")])
        messaging = files_by_name(generator.generate(graph))["messaging.tf"]
        assert 'resource "google_pubsub_topic" "order_events"' in messaging
        assert '= "order events"' in messaging


class TestWriteFiles:
    def test_write_files(self, generator, network_stack, tmp_path):
        out_dir = tmp_path / "infra"
        paths = write_files(generator.generate(network_stack), str(out_dir))

        assert sorted(os.path.basename(p) for p in paths) == sorted(os.listdir(out_dir))
        content = (out_dir / "network.tf").read_text(encoding="utf-8")
        assert content.startswith(FILE_HEADER)
