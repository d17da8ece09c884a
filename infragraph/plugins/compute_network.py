from typing import List

from infragraph.models import (
    ConfigurationBlock,
    Diagnostic,
    DiagnosticCode,
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

MIN_MTU = 1460
MAX_MTU = 8896


class NetworkProperties(ResourceProperties):
    name: str = ""
    auto_create_subnetworks: bool = False
    routing_mode: str = "REGIONAL"
    mtu: int = MIN_MTU
    delete_default_routes_on_create: bool = False
    description: str = ""


class ComputeNetworkPlugin(ResourcePlugin):
    kind = ResourceKind.COMPUTE_NETWORK
    category = ResourceCategory.NETWORK
    display_name = "VPC Network"
    description = "Virtual Private Cloud network for isolating resources"
    icon = "🌐"
    properties_model = NetworkProperties
    remediations = {"name": "Enter a unique name for the VPC network."}

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Network Name",
                description="Name of the VPC network",
                required=True,
                placeholder="my-vpc-network",
            ),
            "auto_create_subnetworks": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Auto Create Subnetworks",
                description="When true, the network is created in auto subnet mode",
                default=False,
            ),
            "routing_mode": FieldSpec(
                type=FieldType.SELECT,
                label="Routing Mode",
                description="The network-wide routing mode",
                options=["REGIONAL", "GLOBAL"],
                default="REGIONAL",
            ),
            "mtu": FieldSpec(
                type=FieldType.NUMBER,
                label="MTU",
                description="Maximum Transmission Unit in bytes (1460-8896)",
                default=MIN_MTU,
                group="Advanced",
            ),
            "delete_default_routes_on_create": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Delete Default Routes on Create",
                description="If true, default routes (0.0.0.0/0) are deleted immediately after network creation",
                default=False,
                group="Advanced",
            ),
            "description": FieldSpec(
                type=FieldType.STRING,
                label="Description",
                description="An optional description of this resource",
                placeholder="Production VPC network",
                group="Advanced",
            ),
        }
    )

    def check(self, node: Node, props: NetworkProperties, ctx: ValidationContext) -> List[Diagnostic]:
        diags = []
        if not MIN_MTU <= props.mtu <= MAX_MTU:
            diags.append(
                Diagnostic.error(
                    DiagnosticCode.INVALID_MTU.value,
                    f"MTU must be between {MIN_MTU} and {MAX_MTU}",
                    node_id=node.id,
                    field="mtu",
                )
            )
        if props.auto_create_subnetworks:
            diags.append(
                Diagnostic.info(
                    DiagnosticCode.AUTO_SUBNET_MODE.value,
                    "Auto subnet mode will create subnets in all regions automatically.",
                    node_id=node.id,
                    field="auto_create_subnetworks",
                )
            )
        return diags

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: NetworkProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "auto_create_subnetworks": props.auto_create_subnetworks,
            "routing_mode": props.routing_mode,
        }
        if props.mtu != MIN_MTU:
            attrs["mtu"] = props.mtu
        if props.delete_default_routes_on_create:
            attrs["delete_default_routes_on_create"] = True
        if props.description:
            attrs["description"] = props.description
        return [self.resource_block(node, ctx, attrs)]
