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
    split_csv,
)

OPEN_RANGES = {"0.0.0.0/0", "::/0"}


class FirewallProperties(ResourceProperties):
    name: str = ""
    direction: str = "INGRESS"
    priority: int = 1000
    protocol: str = "tcp"
    ports: str = "80,443"
    source_ranges: str = "0.0.0.0/0"


class ComputeFirewallPlugin(ResourcePlugin):
    kind = ResourceKind.COMPUTE_FIREWALL
    category = ResourceCategory.NETWORK
    display_name = "Firewall Rule"
    description = "VPC firewall rule for controlling network traffic"
    icon = "🛡️"
    properties_model = FirewallProperties
    edge_suggestions = [
        EdgeSuggestion(
            target_kind=ResourceKind.COMPUTE_NETWORK,
            relationship=EdgeRelationship.NETWORK_ATTACHMENT,
            label="Attach to VPC Network",
        )
    ]

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Rule Name",
                required=True,
                default="",
                placeholder="allow-http",
                group="General",
            ),
            "direction": FieldSpec(
                type=FieldType.SELECT,
                label="Direction",
                required=True,
                default="INGRESS",
                options=["INGRESS", "EGRESS"],
                group="General",
            ),
            "priority": FieldSpec(
                type=FieldType.NUMBER,
                label="Priority",
                default=1000,
                description="Lower number = higher priority (0-65535)",
                group="General",
            ),
            "protocol": FieldSpec(
                type=FieldType.SELECT,
                label="Protocol",
                required=True,
                default="tcp",
                options=["tcp", "udp", "icmp", "all"],
                group="Rules",
            ),
            "ports": FieldSpec(
                type=FieldType.STRING,
                label="Ports",
                default="80,443",
                placeholder="80,443,8080",
                description="Comma-separated port numbers",
                group="Rules",
            ),
            "source_ranges": FieldSpec(
                type=FieldType.STRING,
                label="Source IP Ranges",
                default="0.0.0.0/0",
                placeholder="0.0.0.0/0",
                description="Comma-separated CIDR ranges",
                group="Rules",
            ),
        }
    )

    def check(self, node: Node, props: FirewallProperties, ctx: ValidationContext) -> List[Diagnostic]:
        diags = []
        if not 0 <= props.priority <= 65535:
            diags.append(
                Diagnostic.error(
                    DiagnosticCode.INVALID_PRIORITY.value,
                    "Priority must be between 0 and 65535.",
                    node_id=node.id,
                    field="priority",
                )
            )
        if OPEN_RANGES.intersection(split_csv(props.source_ranges)):
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.OPEN_FIREWALL.value,
                    "Firewall is open to the internet (0.0.0.0/0).",
                    node_id=node.id,
                    field="source_ranges",
                    remediation="Restrict source ranges for production.",
                )
            )
        return diags

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: FirewallProperties = self.properties(node)
        network = ctx.first_target(node, ResourceKind.COMPUTE_NETWORK)

        attrs = {
            "name": props.name or node.name,
            "network": ctx.reference(network.id, "name") if network else "default",
            "direction": props.direction,
            "priority": props.priority,
        }
        ranges = split_csv(props.source_ranges)
        if ranges:
            key = "destination_ranges" if props.direction == "EGRESS" else "source_ranges"
            attrs[key] = ranges

        allow = {"protocol": props.protocol or "tcp"}
        ports = split_csv(props.ports)
        # Ports are only meaningful for tcp/udp
        if ports and props.protocol in ("tcp", "udp"):
            allow["ports"] = ports

        return [self.resource_block(node, ctx, attrs, [NestedBlock(type="allow", attributes=allow)])]
