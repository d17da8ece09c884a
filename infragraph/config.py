"""Configuration models for infragraph."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from infragraph.models import Graph

SCHEMA_VERSION = 1


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class GeneratorConfig(BaseModel):
    """
    Settings for the generated provider, terraform and variable blocks.

    Example:
    ```yaml
    generator:
      project_id: acme-prod
      region: europe-west1
      provider_version: "~> 6.0"
    ```
    """

    project_id: str = Field(default="my-gcp-project", description="Default for var.project_id")
    region: str = Field(default="us-central1", description="Default for var.region")
    terraform_version: str = Field(default=">= 1.0", description="required_version constraint")
    provider_source: str = Field(default="hashicorp/google", description="Provider source address")
    provider_version: str = Field(default="~> 6.0", description="Provider version constraint")


class ProjectMetadata(BaseModel):
    """Metadata stored alongside a persisted graph."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    terraform_version: str = Field(default=">= 1.0", alias="terraformVersion")
    provider_version: str = Field(default="~> 6.0", alias="providerVersion")


class ProjectData(BaseModel):
    """
    Versioned project envelope written by the storage collaborator.

    The validation and generation engines only ever see ``graph``.
    """

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(default=SCHEMA_VERSION, alias="schemaVersion")
    graph: Graph = Field(default_factory=Graph)
    metadata: ProjectMetadata


def build_project_data(graph: Graph, name: str) -> ProjectData:
    """Wrap a graph in a fresh envelope stamped with the current time."""
    now = datetime.now(timezone.utc).isoformat()
    return ProjectData(
        schema_version=SCHEMA_VERSION,
        graph=graph,
        metadata=ProjectMetadata(
            name=name,
            created_at=now,
            updated_at=now,
            terraform_version=GeneratorConfig().terraform_version,
            provider_version=GeneratorConfig().provider_version,
        ),
    )
