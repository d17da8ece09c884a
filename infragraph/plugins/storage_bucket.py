from typing import List

from infragraph.models import (
    ConfigurationBlock,
    Diagnostic,
    DiagnosticCode,
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


class BucketProperties(ResourceProperties):
    name: str = ""
    location: str = "US"
    storage_class: str = "STANDARD"
    uniform_bucket_level_access: bool = True
    versioning: bool = False
    force_destroy: bool = False
    public_access_prevention: str = "enforced"


class StorageBucketPlugin(ResourcePlugin):
    kind = ResourceKind.STORAGE_BUCKET
    category = ResourceCategory.STORAGE
    display_name = "Cloud Storage"
    description = "Google Cloud Storage bucket for object storage"
    icon = "🪣"
    properties_model = BucketProperties

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Bucket Name",
                required=True,
                description="Globally unique bucket name",
                placeholder="my-project-bucket",
            ),
            "location": FieldSpec(
                type=FieldType.SELECT,
                label="Location",
                required=True,
                options=["US", "EU", "ASIA", "us-central1", "us-east1", "us-west1", "europe-west1", "asia-east1"],
                default="US",
            ),
            "storage_class": FieldSpec(
                type=FieldType.SELECT,
                label="Storage Class",
                options=["STANDARD", "NEARLINE", "COLDLINE", "ARCHIVE"],
                default="STANDARD",
            ),
            "uniform_bucket_level_access": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Uniform Bucket-Level Access",
                description="Enables uniform bucket-level access (recommended)",
                default=True,
            ),
            "versioning": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Object Versioning",
                description="Enable object versioning for data protection",
                default=False,
                group="Advanced",
            ),
            "force_destroy": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Force Destroy",
                description="Allow bucket deletion even with objects inside",
                default=False,
                group="Advanced",
            ),
            "public_access_prevention": FieldSpec(
                type=FieldType.SELECT,
                label="Public Access Prevention",
                options=["enforced", "inherited"],
                default="enforced",
                group="Security",
            ),
        }
    )

    def check(self, node: Node, props: BucketProperties, ctx: ValidationContext) -> List[Diagnostic]:
        diags = []
        if props.public_access_prevention == "inherited":
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.PUBLIC_BUCKET_RISK.value,
                    "Public access prevention is not enforced, objects may be publicly accessible.",
                    node_id=node.id,
                    field="public_access_prevention",
                    remediation='Set public_access_prevention to "enforced" unless public access is intentional.',
                )
            )
        if not props.uniform_bucket_level_access:
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.ACL_MODE.value,
                    "Fine-grained ACL mode is less secure than uniform bucket-level access.",
                    node_id=node.id,
                    field="uniform_bucket_level_access",
                )
            )
        return diags

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: BucketProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "location": props.location or "US",
            "storage_class": props.storage_class or "STANDARD",
            "uniform_bucket_level_access": props.uniform_bucket_level_access,
            "force_destroy": props.force_destroy,
            "public_access_prevention": props.public_access_prevention or "enforced",
        }
        nested = []
        if props.versioning:
            nested.append(NestedBlock(type="versioning", attributes={"enabled": True}))
        return [self.resource_block(node, ctx, attrs, nested)]
