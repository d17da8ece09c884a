import re
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

MIN_DISK_GB = 10
MAX_DISK_GB = 65536
ZONE_PATTERN = re.compile(r"^[a-z]+-[a-z]+\d+-[a-z]$")


class InstanceProperties(ResourceProperties):
    name: str = ""
    machine_type: str = "e2-medium"
    zone: str = "us-central1-a"
    boot_disk_image: str = "debian-cloud/debian-12"
    boot_disk_size_gb: int = 20
    boot_disk_type: str = "pd-balanced"
    can_ip_forward: bool = False
    tags: str = ""
    allow_stopping_for_update: bool = True
    description: str = ""


class ComputeInstancePlugin(ResourcePlugin):
    kind = ResourceKind.COMPUTE_INSTANCE
    category = ResourceCategory.COMPUTE
    display_name = "VM Instance"
    description = "Compute Engine virtual machine instance"
    icon = "🖥️"
    properties_model = InstanceProperties
    edge_suggestions = [
        EdgeSuggestion(
            target_kind=ResourceKind.COMPUTE_SUBNETWORK,
            relationship=EdgeRelationship.NETWORK_ATTACHMENT,
            label="attach to subnet",
        )
    ]

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(type=FieldType.STRING, label="Instance Name", required=True, placeholder="my-vm"),
            "machine_type": FieldSpec(
                type=FieldType.SELECT,
                label="Machine Type",
                required=True,
                options=[
                    "e2-micro",
                    "e2-small",
                    "e2-medium",
                    "e2-standard-2",
                    "e2-standard-4",
                    "e2-standard-8",
                    "n2-standard-2",
                    "n2-standard-4",
                ],
                default="e2-medium",
            ),
            "zone": FieldSpec(
                type=FieldType.STRING,
                label="Zone",
                required=True,
                default="us-central1-a",
                placeholder="us-central1-a",
            ),
            "boot_disk_image": FieldSpec(
                type=FieldType.SELECT,
                label="Boot Disk Image",
                options=[
                    "debian-cloud/debian-12",
                    "ubuntu-os-cloud/ubuntu-2404-lts-amd64",
                    "centos-cloud/centos-stream-9",
                    "cos-cloud/cos-stable",
                ],
                default="debian-cloud/debian-12",
            ),
            "boot_disk_size_gb": FieldSpec(
                type=FieldType.NUMBER, label="Boot Disk Size (GB)", default=20, group="Disk"
            ),
            "boot_disk_type": FieldSpec(
                type=FieldType.SELECT,
                label="Boot Disk Type",
                options=["pd-standard", "pd-balanced", "pd-ssd"],
                default="pd-balanced",
                group="Disk",
            ),
            "can_ip_forward": FieldSpec(
                type=FieldType.BOOLEAN, label="Can IP Forward", default=False, group="Advanced"
            ),
            "tags": FieldSpec(
                type=FieldType.STRING,
                label="Network Tags",
                description="Comma-separated tags",
                placeholder="http-server,https-server",
                group="Advanced",
            ),
            "allow_stopping_for_update": FieldSpec(
                type=FieldType.BOOLEAN, label="Allow Stopping for Update", default=True, group="Advanced"
            ),
            "description": FieldSpec(
                type=FieldType.STRING, label="Description", placeholder="Web server VM", group="Advanced"
            ),
        }
    )

    def check(self, node: Node, props: InstanceProperties, ctx: ValidationContext) -> List[Diagnostic]:
        diags = []
        if not MIN_DISK_GB <= props.boot_disk_size_gb <= MAX_DISK_GB:
            diags.append(
                Diagnostic.error(
                    DiagnosticCode.INVALID_DISK_SIZE.value,
                    f"Boot disk size must be between {MIN_DISK_GB} and {MAX_DISK_GB} GB.",
                    node_id=node.id,
                    field="boot_disk_size_gb",
                )
            )
        if props.zone.strip() and not ZONE_PATTERN.match(props.zone.strip()):
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.INVALID_ZONE.value,
                    f"'{props.zone}' does not look like a zone (e.g. us-central1-a).",
                    node_id=node.id,
                    field="zone",
                )
            )
        if not ctx.has_target(node, ResourceKind.COMPUTE_SUBNETWORK):
            diags.append(
                Diagnostic.warning(
                    DiagnosticCode.NO_SUBNET.value,
                    "VM has no subnet, it will use the default network.",
                    node_id=node.id,
                    remediation="Connect this VM to a Subnet node.",
                )
            )
        return diags

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: InstanceProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "machine_type": props.machine_type or "e2-medium",
            "zone": props.zone or "us-central1-a",
        }
        if props.can_ip_forward:
            attrs["can_ip_forward"] = True
        if props.allow_stopping_for_update:
            attrs["allow_stopping_for_update"] = True
        if props.description:
            attrs["description"] = props.description
        tags = split_csv(props.tags)
        if tags:
            attrs["tags"] = tags

        boot_disk = NestedBlock(
            type="boot_disk",
            blocks=[
                NestedBlock(
                    type="initialize_params",
                    attributes={
                        "image": props.boot_disk_image or "debian-cloud/debian-12",
                        "size": props.boot_disk_size_gb,
                        "type": props.boot_disk_type or "pd-balanced",
                    },
                )
            ],
        )

        subnet = ctx.first_target(node, ResourceKind.COMPUTE_SUBNETWORK)
        if subnet is not None:
            interface = {"subnetwork": ctx.reference(subnet.id, "id")}
        else:
            interface = {"network": "default"}

        return [
            self.resource_block(
                node,
                ctx,
                attrs,
                [boot_disk, NestedBlock(type="network_interface", attributes=interface)],
            )
        ]
