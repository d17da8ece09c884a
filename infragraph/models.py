"""Data model shared by the graph engine, validation and code generation.

All models accept both the Python field names and the camelCase / keyword
aliases used by persisted project files (``from``, ``to``, ``nodeId``...).
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    """Closed catalogue of resource kinds that have a plugin."""

    COMPUTE_NETWORK = "google_compute_network"
    COMPUTE_SUBNETWORK = "google_compute_subnetwork"
    COMPUTE_INSTANCE = "google_compute_instance"
    COMPUTE_FIREWALL = "google_compute_firewall"
    STORAGE_BUCKET = "google_storage_bucket"
    CONTAINER_CLUSTER = "google_container_cluster"
    SQL_DATABASE_INSTANCE = "google_sql_database_instance"
    COMPUTE_ADDRESS = "google_compute_address"
    CLOUD_RUN_SERVICE = "google_cloud_run_v2_service"
    PUBSUB_TOPIC = "google_pubsub_topic"
    SERVICE_ACCOUNT = "google_service_account"
    DNS_MANAGED_ZONE = "google_dns_managed_zone"

    @classmethod
    def parse(cls, value: Any) -> Optional["ResourceKind"]:
        """Return the matching kind, or None for kinds this version does not know."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class ResourceCategory(str, Enum):
    """Resource categories, declared in display order."""

    NETWORK = "Network"
    COMPUTE = "Compute"
    STORAGE = "Storage"
    KUBERNETES = "Kubernetes"
    DATABASE = "Database"
    SERVERLESS = "Serverless"
    SECURITY = "Security"
    MESSAGING = "Messaging"


CATEGORY_ORDER: List[ResourceCategory] = list(ResourceCategory)


class EdgeRelationship(str, Enum):
    """Kinds of directed relationship between two nodes."""

    DEPENDS_ON = "depends_on"
    NETWORK_ATTACHMENT = "network_attachment"
    CONTAINS = "contains"


class Severity(str, Enum):
    """Diagnostic severities."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class DiagnosticCode(str, Enum):
    """Stable machine-readable diagnostic codes."""

    # Schema phase
    UNKNOWN_RESOURCE = "UNKNOWN_RESOURCE"
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_VALUE = "INVALID_VALUE"
    INVALID_MTU = "INVALID_MTU"
    AUTO_SUBNET_MODE = "AUTO_SUBNET_MODE"
    INVALID_CIDR = "INVALID_CIDR"
    MISSING_VPC = "MISSING_VPC"
    INVALID_DISK_SIZE = "INVALID_DISK_SIZE"
    INVALID_ZONE = "INVALID_ZONE"
    NO_SUBNET = "NO_SUBNET"
    INVALID_PRIORITY = "INVALID_PRIORITY"
    OPEN_FIREWALL = "OPEN_FIREWALL"
    PUBLIC_BUCKET_RISK = "PUBLIC_BUCKET_RISK"
    ACL_MODE = "ACL_MODE"
    HIGH_COST_CLUSTER = "HIGH_COST_CLUSTER"
    NO_CUSTOM_NETWORK = "NO_CUSTOM_NETWORK"
    NO_DELETION_PROTECTION = "NO_DELETION_PROTECTION"
    INVALID_MAX_INSTANCES = "INVALID_MAX_INSTANCES"
    INVALID_ACCOUNT_ID = "INVALID_ACCOUNT_ID"
    INVALID_DNS_NAME = "INVALID_DNS_NAME"

    # Graph phase
    DEPENDENCY_CYCLE = "DEPENDENCY_CYCLE"
    DANGLING_EDGE = "DANGLING_EDGE"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    DUPLICATE_NAME_CROSS_TYPE = "DUPLICATE_NAME_CROSS_TYPE"
    INVALID_NAME = "INVALID_NAME"

    # Policy phase
    EMPTY_GRAPH = "EMPTY_GRAPH"
    SUBNET_WITHOUT_VPC = "SUBNET_WITHOUT_VPC"


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================
# Graph
# ============================================


class Position(_Model):
    """Canvas coordinates. Only the editor reads these."""

    x: float = 0.0
    y: float = 0.0


class Node(_Model):
    """A single infrastructure resource placed on the canvas.

    ``kind`` is kept as a plain string so graphs saved by a newer version with
    kinds this version does not know still load; they surface as
    ``UNKNOWN_RESOURCE`` diagnostics instead of a load failure.
    """

    id: str
    kind: str
    name: str
    properties: Dict[str, Any] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    version: int = 1
    position: Position = Field(default_factory=Position)


class Edge(_Model):
    """Directed relationship: ``source`` depends on ``target``."""

    id: str
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    relationship: EdgeRelationship = EdgeRelationship.DEPENDS_ON


class Graph(_Model):
    """Ordered nodes plus ordered edges. Adjacency is always derived on demand."""

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    def node_map(self) -> Dict[str, Node]:
        return {node.id: node for node in self.nodes}

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_kind(self, kind: ResourceKind) -> List[Node]:
        return [node for node in self.nodes if node.kind == kind]


# ============================================
# Diagnostics
# ============================================


class Diagnostic(_Model):
    """A single validation finding."""

    severity: Severity
    code: str
    node_id: Optional[str] = Field(default=None, alias="nodeId")
    field: Optional[str] = None
    message: str
    remediation: Optional[str] = None

    @classmethod
    def error(cls, code: str, message: str, **kwargs: Any) -> "Diagnostic":
        return cls(severity=Severity.ERROR, code=code, message=message, **kwargs)

    @classmethod
    def warning(cls, code: str, message: str, **kwargs: Any) -> "Diagnostic":
        return cls(severity=Severity.WARNING, code=code, message=message, **kwargs)

    @classmethod
    def info(cls, code: str, message: str, **kwargs: Any) -> "Diagnostic":
        return cls(severity=Severity.INFO, code=code, message=message, **kwargs)


# ============================================
# Plugin metadata
# ============================================


class FieldType(str, Enum):
    """Editor widget types for schema fields."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"


class FieldSpec(_Model):
    """Inspector description of one editable property."""

    type: FieldType
    label: str
    description: Optional[str] = None
    required: bool = False
    default: Any = None
    options: Optional[List[str]] = None
    placeholder: Optional[str] = None
    group: Optional[str] = None


class ResourceSchema(_Model):
    """Reflection table consumed by the inspector collaborator."""

    properties: Dict[str, FieldSpec] = Field(default_factory=dict)

    def required_fields(self) -> List[str]:
        return [key for key, spec in self.properties.items() if spec.required]


class EdgeSuggestion(_Model):
    """A natural attachment point for a resource kind."""

    target_kind: ResourceKind = Field(alias="targetKind")
    relationship: EdgeRelationship
    label: str


# ============================================
# Generated configuration
# ============================================


class Reference(_Model):
    """Marker for a value rendered as an unquoted path, e.g. ``google_compute_network.vpc.id``."""

    path: str
    node_id: Optional[str] = Field(default=None, alias="nodeId")
    attribute: Optional[str] = None

    def __str__(self) -> str:
        return self.path


class Expression(_Model):
    """Raw expression rendered verbatim (``string``, ``var.region``)."""

    expr: str

    def __str__(self) -> str:
        return self.expr


class BlockType(str, Enum):
    """Top-level declaration kinds."""

    RESOURCE = "resource"
    VARIABLE = "variable"
    OUTPUT = "output"
    PROVIDER = "provider"
    TERRAFORM = "terraform"


class NestedBlock(_Model):
    """Inner declaration such as ``boot_disk { ... }``."""

    type: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    blocks: List["NestedBlock"] = Field(default_factory=list)


class ConfigurationBlock(_Model):
    """One named top-level declaration in the generated output."""

    block_type: BlockType = Field(alias="blockType")
    resource_type: Optional[str] = Field(default=None, alias="resourceType")
    name: str = ""
    attributes: Dict[str, Any] = Field(default_factory=dict)
    nested_blocks: List[NestedBlock] = Field(default_factory=list, alias="nestedBlocks")


class GeneratedFile(_Model):
    """A generated file: name plus full text."""

    filename: str
    content: str


NestedBlock.model_rebuild()
