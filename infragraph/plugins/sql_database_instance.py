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


class SqlInstanceProperties(ResourceProperties):
    name: str = ""
    database_version: str = "POSTGRES_15"
    tier: str = "db-f1-micro"
    region: str = "us-central1"
    deletion_protection: bool = True
    availability_type: str = "ZONAL"


class SqlDatabaseInstancePlugin(ResourcePlugin):
    kind = ResourceKind.SQL_DATABASE_INSTANCE
    category = ResourceCategory.DATABASE
    display_name = "Cloud SQL"
    description = "Managed relational database (MySQL, PostgreSQL, SQL Server)"
    icon = "🗃️"
    properties_model = SqlInstanceProperties

    schema = ResourceSchema(
        properties={
            "name": FieldSpec(
                type=FieldType.STRING,
                label="Instance Name",
                required=True,
                default="",
                placeholder="my-db-instance",
                group="General",
            ),
            "database_version": FieldSpec(
                type=FieldType.SELECT,
                label="Database Version",
                required=True,
                default="POSTGRES_15",
                options=["POSTGRES_15", "POSTGRES_14", "MYSQL_8_0", "MYSQL_5_7", "SQLSERVER_2022_STANDARD"],
                group="General",
            ),
            "tier": FieldSpec(
                type=FieldType.SELECT,
                label="Machine Tier",
                required=True,
                default="db-f1-micro",
                options=["db-f1-micro", "db-g1-small", "db-custom-2-7680", "db-custom-4-15360"],
                group="Performance",
            ),
            "region": FieldSpec(
                type=FieldType.STRING, label="Region", required=True, default="us-central1", group="General"
            ),
            "deletion_protection": FieldSpec(
                type=FieldType.BOOLEAN,
                label="Deletion Protection",
                default=True,
                description="Prevent accidental deletion",
                group="Security",
            ),
            "availability_type": FieldSpec(
                type=FieldType.SELECT,
                label="Availability",
                default="ZONAL",
                options=["ZONAL", "REGIONAL"],
                description="REGIONAL for high availability",
                group="Performance",
            ),
        }
    )

    def check(self, node: Node, props: SqlInstanceProperties, ctx: ValidationContext) -> List[Diagnostic]:
        if not props.deletion_protection:
            return [
                Diagnostic.warning(
                    DiagnosticCode.NO_DELETION_PROTECTION.value,
                    "Deletion protection is disabled.",
                    node_id=node.id,
                    field="deletion_protection",
                    remediation="Enable for production databases.",
                )
            ]
        return []

    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        props: SqlInstanceProperties = self.properties(node)
        attrs = {
            "name": props.name or node.name,
            "database_version": props.database_version or "POSTGRES_15",
            "region": props.region or "us-central1",
            "deletion_protection": props.deletion_protection,
        }
        settings = NestedBlock(
            type="settings",
            attributes={
                "tier": props.tier or "db-f1-micro",
                "availability_type": props.availability_type or "ZONAL",
            },
        )
        return [
            self.resource_block(node, ctx, attrs, [settings]),
            self.output_block(node, ctx, "connection_name", f"Connection name of {node.name}"),
        ]
