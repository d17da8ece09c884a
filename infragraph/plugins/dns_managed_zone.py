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


class DnsZoneProperties(ResourceProperties):
    name: str = ""
    dns_name: str = ""
    visibility: str = "public"
    zone_description: str = ""


class DnsManagedZonePlugin(ResourcePlugin):
    kind = ResourceKind.DNS_MANAGED_ZONE
    category = ResourceCategory.NETWORK
    display_name = "Cloud DNS Zone"
    description = "Managed DNS zone for domain name resolution"
    icon = "🌍"
    properties_model = DnsZoneProperties
    remediations = {"dns_name": "Enter a domain ending with period (e.g., example.com.)"}

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Zone Name",
                required=True,
                default="",
                placeholder="my-zone",
                group="General",
            ),
            "dns_name": FieldSpec(
                type=FieldType.STRING,
                label="DNS Name",
                required=True,
                default="",
                placeholder="example.com.",
                description="Must end with a period",
                group="General",
            ),
            "visibility": FieldSpec(
                type=FieldType.SELECT,
                label="Visibility",
                default="public",
                options=["public", "private"],
                group="Settings",
            ),
            "zone_description": FieldSpec(
                type=FieldType.STRING,
                label="Description",
                default="",
                placeholder="Production DNS zone",
                group="General",
            ),
        }
    )

    def check(self, node: Node, props: DnsZoneProperties, ctx: ValidationContext) -> List[Diagnostic]:
        dns_name = props.dns_name.strip()
        if dns_name and not dns_name.endswith("."):
            return [
                Diagnostic.error(
                    DiagnosticCode.INVALID_DNS_NAME.value,
                    f"DNS name '{dns_name}' must end with a period.",
                    node_id=node.id,
                    field="dns_name",
                    remediation=f"Use '{dns_name}.' instead.",
                )
            ]
        return []

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: DnsZoneProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "dns_name": props.dns_name or "example.com.",
        }
        if props.visibility:
            attrs["visibility"] = props.visibility
        if props.zone_description:
            attrs["description"] = props.zone_description
        return [self.resource_block(node, ctx, attrs)]
