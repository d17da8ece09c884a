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


class CloudRunProperties(ResourceProperties):
    name: str = ""
    location: str = "us-central1"
    image: str = ""
    port: int = 8080
    max_instances: int = 10
    cpu: str = "1"
    memory: str = "512Mi"


class CloudRunServicePlugin(ResourcePlugin):
    kind = ResourceKind.CLOUD_RUN_SERVICE
    category = ResourceCategory.SERVERLESS
    display_name = "Cloud Run"
    description = "Serverless container execution service"
    icon = "⚡"
    properties_model = CloudRunProperties
    remediations = {"image": "Specify a container image URL."}
    edge_suggestions = [
        EdgeSuggestion(
            target_kind=ResourceKind.SERVICE_ACCOUNT,
            relationship=EdgeRelationship.DEPENDS_ON,
            label="run as service account",
        )
    ]

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Service Name",
                required=True,
                default="",
                placeholder="my-api-service",
                group="General",
            ),
            "location": FieldSpec(
                type=FieldType.STRING, label="Region", required=True, default="us-central1", group="General"
            ),
            "image": FieldSpec(
                type=FieldType.STRING,
                label="Container Image",
                required=True,
                default="",
                placeholder="gcr.io/PROJECT/IMAGE:TAG",
                group="Container",
            ),
            "port": FieldSpec(type=FieldType.NUMBER, label="Container Port", default=8080, group="Container"),
            "max_instances": FieldSpec(type=FieldType.NUMBER, label="Max Instances", default=10, group="Scaling"),
            "cpu": FieldSpec(
                type=FieldType.SELECT, label="CPU", default="1", options=["1", "2", "4", "8"], group="Resources"
            ),
            "memory": FieldSpec(
                type=FieldType.SELECT,
                label="Memory",
                default="512Mi",
                options=["256Mi", "512Mi", "1Gi", "2Gi", "4Gi"],
                group="Resources",
            ),
        }
    )

    def check(self, node: Node, props: CloudRunProperties, ctx: ValidationContext) -> List[Diagnostic]:
        if props.max_instances < 1:
            return [
                Diagnostic.error(
                    DiagnosticCode.INVALID_MAX_INSTANCES.value,
                    "Max instances must be at least 1.",
                    node_id=node.id,
                    field="max_instances",
                )
            ]
        return []

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: CloudRunProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "location": props.location or "us-central1",
        }

        container = NestedBlock(
            type="containers",
            attributes={"image": props.image or "us-docker.pkg.dev/cloudrun/container/hello"},
            blocks=[
                NestedBlock(type="ports", attributes={"container_port": props.port}),
                NestedBlock(
                    type="resources",
                    attributes={"limits": {"cpu": props.cpu, "memory": props.memory}},
                ),
            ],
        )
        template_attrs = {}
        account = ctx.first_target(node, ResourceKind.SERVICE_ACCOUNT)
        if account is not None:
            template_attrs["service_account"] = ctx.reference(account.id, "email")
        template = NestedBlock(
            type="template",
            attributes=template_attrs,
            blocks=[
                NestedBlock(type="scaling", attributes={"max_instance_count": props.max_instances}),
                container,
            ],
        )

        return [
            self.resource_block(node, ctx, attrs, [template]),
            self.output_block(node, ctx, "uri", f"Public URL of {node.name}"),
        ]
