from typing import List

from infragraph.models import (
    ConfigurationBlock,
    Diagnostic,
    DiagnosticCode,
    EdgeRelationship,
    EdgeSuggestion,
    FieldSpec,
    FieldType,
    NestedBlock,
    Node,
    ResourceCategory,
    ResourceKind,
    ResourceSchema,
)
from infragraph.plugins.base import (
    GeneratorContext,
    ResourcePlugin,
    ResourceProperties,
    ValidationContext,
)

MIN_NODE_DISK_GB = 10
HIGH_COST_NODE_COUNT = 5


class ClusterProperties(ResourceProperties):
    name: str = ""
    location: str = "us-central1"
    initial_node_count: int = 3
    remove_default_node_pool: bool = True
    deletion_protection: bool = False
    node_machine_type: str = "e2-medium"
    node_disk_size_gb: int = 50
    enable_autopilot: bool = False
    networking_mode: str = "VPC_NATIVE"
    description: str = ""


class ContainerClusterPlugin(ResourcePlugin):
    kind = ResourceKind.CONTAINER_CLUSTER
    category = ResourceCategory.KUBERNETES
    display_name = "GKE Cluster"
    description = "Google Kubernetes Engine cluster"
    icon = "☸️"
    properties_model = ClusterProperties
    edge_suggestions = [
        EdgeSuggestion(
            target_kind=ResourceKind.COMPUTE_SUBNETWORK,
            relationship=EdgeRelationship.NETWORK_ATTACHMENT,
            label="attach to subnet",
        ),
        EdgeSuggestion(
            target_kind=ResourceKind.COMPUTE_NETWORK,
            relationship=EdgeRelationship.NETWORK_ATTACHMENT,
            label="attach to VPC",
        ),
    ]

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING, label="Cluster Name", required=True, placeholder="my-gke-cluster"
            ),
            "location": FieldSpec(
                type=FieldType.STRING,
                label="Location (region/zone)",
                required=True,
                default="us-central1",
                placeholder="us-central1",
            ),
            "initial_node_count": FieldSpec(type=FieldType.NUMBER, label="Initial Node Count", default=3),
            "remove_default_node_pool": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Remove Default Node Pool",
                description="Remove the default pool and use a custom one",
                default=True,
            ),
            "deletion_protection": FieldSpec(type=FieldType.BOOLEAN, label="Deletion Protection", default=False),
            "node_machine_type": FieldSpec(
                type=FieldType.SELECT,
                label="Node Machine Type",
                options=["e2-medium", "e2-standard-2", "e2-standard-4", "n2-standard-2", "n2-standard-4"],
                default="e2-medium",
                group="Node Config",
            ),
            "node_disk_size_gb": FieldSpec(
                type=FieldType.NUMBER, label="Node Disk Size (GB)", default=50, group="Node Config"
            ),
            "enable_autopilot": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Enable Autopilot",
                description="Use GKE Autopilot mode (managed node pools)",
                default=False,
                group="Advanced",
            ),
            "networking_mode": FieldSpec(
                type=FieldType.SELECT,
                label="Networking Mode",
                options=["VPC_NATIVE", "ROUTES"],
                default="VPC_NATIVE",
                group="Advanced",
            ),
            "description": FieldSpec(
                type=FieldType.STRING,
                label="Description",
                placeholder="Production GKE cluster",
                group="Advanced",
            ),
        }
    )

    def check(self, node: Node, props: ClusterProperties, ctx: ValidationContext) -> List[Diagnostic]:
        diags = []
        if props.node_disk_size_gb < MIN_NODE_DISK_GB:
            diags.append(
                Diagnostic.error(
                    DiagnosticCode.INVALID_DISK_SIZE.value,
                    f"Node disk size must be at least {MIN_NODE_DISK_GB} GB.",
                    node_id=node.id,
                    field="node_disk_size_gb",
                )
            )
        if props.initial_node_count >= HIGH_COST_NODE_COUNT and "standard-4" in props.node_machine_type:
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.HIGH_COST_CLUSTER.value,
                    f"GKE cluster with {props.initial_node_count}× {props.node_machine_type} nodes "
                    "may incur significant cost.",
                    node_id=node.id,
                    remediation="Consider fewer nodes or smaller machines for dev/staging.",
                )
            )
        if not ctx.has_target(node, ResourceKind.COMPUTE_SUBNETWORK):
            diags.append(
                Diagnostic.info(
                    DiagnosticCode.NO_CUSTOM_NETWORK.value,
                    "GKE cluster will use default network. Consider attaching to a custom VPC subnet.",
                    node_id=node.id,
                )
            )
        return diags

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: ClusterProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "location": props.location or "us-central1",
        }
        if props.enable_autopilot:
            attrs["enable_autopilot"] = True
        else:
            attrs["initial_node_count"] = props.initial_node_count
            attrs["remove_default_node_pool"] = props.remove_default_node_pool
        attrs["deletion_protection"] = props.deletion_protection
        if props.networking_mode:
            attrs["networking_mode"] = props.networking_mode
        if props.description:
            attrs["description"] = props.description

        subnet = ctx.first_target(node, ResourceKind.COMPUTE_SUBNETWORK)
        network = ctx.first_target(node, ResourceKind.COMPUTE_NETWORK)
        if network is not None:
            attrs["network"] = ctx.reference(network.id, "name")
        if subnet is not None:
            attrs["subnetwork"] = ctx.reference(subnet.id, "name")

        nested = []
        if not props.enable_autopilot:
            nested.append(
                NestedBlock(
                    type="node_config",
                    attributes={
                        "machine_type": props.node_machine_type or "e2-medium",
                        "disk_size_gb": props.node_disk_size_gb,
                    },
                )
            )

        return [
            self.resource_block(node, ctx, attrs, nested),
            self.output_block(node, ctx, "endpoint", f"Control plane endpoint of {node.name}"),
        ]
