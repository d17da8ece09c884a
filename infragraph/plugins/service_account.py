import re
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

ACCOUNT_ID_PATTERN = re.compile(r"^[a-z]([-a-z0-9]*[a-z0-9])$")


class ServiceAccountProperties(ResourceProperties):
    account_id: str = ""
    display_name: str = ""
    sa_description: str = ""


class ServiceAccountPlugin(ResourcePlugin):
    kind = ResourceKind.SERVICE_ACCOUNT
    category = ResourceCategory.SECURITY
    display_name = "Service Account"
    description = "IAM service account for workload identity"
    icon = "🔑"
    properties_model = ServiceAccountProperties

    schema = ResourceSchema(
        properties={
            "account_id": FieldSpec(
                type=FieldType.STRING,
                label="Account ID",
                required=True,
                default="",
                placeholder="my-service-account",
                description="6-30 chars, lowercase, digits, hyphens",
                group="General",
            ),
            "display_name": FieldSpec(
                type=FieldType.STRING,
                label="Display Name",
                default="",
                placeholder="My Service Account",
                group="General",
            ),
            "sa_description": FieldSpec(
                type=FieldType.STRING,
                label="Description",
                default="",
                placeholder="SA for application workloads",
                group="General",
            ),
        }
    )

    def check(
        self, node: Node, props: ServiceAccountProperties, ctx: ValidationContext
    ) -> List[Diagnostic]:
        account_id = props.account_id.strip()
        if not account_id:
            return []
        if not 6 <= len(account_id) <= 30 or not ACCOUNT_ID_PATTERN.match(account_id):
            return [
                Diagnostic.error(
                    DiagnosticCode.INVALID_ACCOUNT_ID.value,
                    f"Account ID '{account_id}' must be 6-30 characters of lowercase letters, "
                    "digits and hyphens, starting with a letter.",
                    node_id=node.id,
                    field="account_id",
                )
            ]
        return []

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: ServiceAccountProperties = self.properties(node)
        attrs = {"account_id": props.account_id or node.name}
        if props.display_name:
            attrs["display_name"] = props.display_name
        if props.sa_description:
            attrs["description"] = props.sa_description
        return [
            self.resource_block(node, ctx, attrs),
            self.output_block(node, ctx, "email", f"Email of {node.name}"),
        ]
