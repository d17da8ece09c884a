from typing import List

from infragraph.models import (
    ConfigurationBlock,
    FieldSpec,
    FieldType,
    Node,
    ResourceCategory,
    ResourceKind,
    ResourceSchema,
)
from infragraph.plugins.base import GeneratorContext, ResourcePlugin, ResourceProperties


class AddressProperties(ResourceProperties):
    name: str = ""
    address_type: str = "EXTERNAL"
    region: str = "us-central1"


class ComputeAddressPlugin(ResourcePlugin):
    kind = ResourceKind.COMPUTE_ADDRESS
    category = ResourceCategory.NETWORK
    display_name = "Static IP"
    description = "Reserve a static external or internal IP address"
    icon = "📍"
    properties_model = AddressProperties

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Address Name",
                required=True,
                default="",
                placeholder="my-static-ip",
                group="General",
            ),
            "address_type": FieldSpec(
                type=FieldType.SELECT,
                label="Address Type",
                required=True,
                default="EXTERNAL",
                options=["EXTERNAL", "INTERNAL"],
                group="General",
            ),
            "region": FieldSpec(
                type=FieldType.STRING,
                label="Region",
                required=True,
                default="us-central1",
                group="General",
            ),
        }
    )

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: AddressProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "address_type": props.address_type or "EXTERNAL",
            "region": props.region or "us-central1",
        }
        return [
            self.resource_block(node, ctx, attrs),
            self.output_block(node, ctx, "address", f"Reserved IP address of {node.name}"),
        ]
