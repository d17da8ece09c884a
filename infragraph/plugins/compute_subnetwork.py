import ipaddress
from typing import List

from infragraph.models import (
    ConfigurationBlock,
    Diagnostic,
    DiagnosticCode,
    EdgeRelationship,
    EdgeSuggestion,
    FieldSpec,
    FieldType,
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


class SubnetworkProperties(ResourceProperties):
    name: str = ""
    ip_cidr_range: str = "10.0.0.0/24"
    region: str = "us-central1"
    private_ip_google_access: bool = True
    purpose: str = "PRIVATE"
    description: str = ""


class ComputeSubnetworkPlugin(ResourcePlugin):
    kind = ResourceKind.COMPUTE_SUBNETWORK
    category = ResourceCategory.NETWORK
    display_name = "Subnet"
    description = "Subnetwork within a VPC for resource isolation"
    icon = "🔗"
    properties_model = SubnetworkProperties
    edge_suggestions = [
        EdgeSuggestion(
            target_kind=ResourceKind.COMPUTE_NETWORK,
            relationship=EdgeRelationship.NETWORK_ATTACHMENT,
            label="attach to VPC",
        )
    ]

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING, label="Subnet Name", required=True, placeholder="my-subnet"
            ),
            "ip_cidr_range": FieldSpec(
                type=FieldType.STRING,
                label="IP CIDR Range",
                description="The range of internal addresses (e.g., 10.0.0.0/24)",
                required=True,
                placeholder="10.0.0.0/24",
            ),
            "region": FieldSpec(
                type=FieldType.STRING,
                label="Region",
                required=True,
                default="us-central1",
                placeholder="us-central1",
            ),
            "private_ip_google_access": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Private Google Access",
                description="Allow VMs without external IP to reach Google APIs",
                default=True,
            ),
            "purpose": FieldSpec(
                type=FieldType.SELECT,
                label="Purpose",
                options=["PRIVATE", "INTERNAL_HTTPS_LOAD_BALANCER", "REGIONAL_MANAGED_PROXY"],
                default="PRIVATE",
                group="Advanced",
            ),
            "description": FieldSpec(
                type=FieldType.STRING,
                label="Description",
                placeholder="Production subnet",
                group="Advanced",
            ),
        }
    )

    def check(self, node: Node, props: SubnetworkProperties, ctx: ValidationContext) -> List[Diagnostic]:
        diags = []
        if props.ip_cidr_range.strip():
            try:
                ipaddress.ip_network(props.ip_cidr_range.strip(), strict=False)
            except ValueError:
                diags.append(
                    Diagnostic.error(
                        DiagnosticCode.INVALID_CIDR.value,
                        f"'{props.ip_cidr_range}' is not a valid CIDR range.",
                        node_id=node.id,
                        field="ip_cidr_range",
                        remediation="Use the address/prefix form, e.g. 10.0.0.0/24.",
                    )
                )
        if not ctx.has_target(node, ResourceKind.COMPUTE_NETWORK):
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.MISSING_VPC.value,
                    "Subnet should be attached to a VPC Network.",
                    node_id=node.id,
                    remediation="Draw an edge from this subnet to a VPC Network node.",
                )
            )
        return diags

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: SubnetworkProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "ip_cidr_range": props.ip_cidr_range or "10.0.0.0/24",
            "region": props.region or "us-central1",
        }
        network = ctx.first_target(node, ResourceKind.COMPUTE_NETWORK)
        if network is not None:
            attrs["network"] = ctx.reference(network.id, "id")
        if props.private_ip_google_access:
            attrs["private_ip_google_access"] = True
        if props.purpose != "PRIVATE":
            attrs["purpose"] = props.purpose
        if props.description:
            attrs["description"] = props.description
        return [self.resource_block(node, ctx, attrs)]
