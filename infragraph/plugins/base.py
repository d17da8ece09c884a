from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError

from infragraph.models import (
    BlockType,
    ConfigurationBlock,
    Diagnostic,
    DiagnosticCode,
    EdgeSuggestion,
    Graph,
    NestedBlock,
    Node,
    Reference,
    ResourceCategory,
    ResourceKind,
    ResourceSchema,
)
from infragraph.utils.naming import sanitize_identifier


class ResourceProperties(BaseModel):
    """Base for the typed property record of one resource kind.

    Field defaults are the values a new node starts with. Keys the record does
    not declare are ignored rather than rejected.
    """

    model_config = ConfigDict(extra="ignore")


@dataclass
class _GraphContext:
    graph: Graph
    node_map: Dict[str, Node] = field(default_factory=dict)

    def __post_init__(self):
        if not self.node_map:
            self.node_map = self.graph.node_map()

    def targets_of_kind(self, node: Node, kind: ResourceKind) -> List[Node]:
        """Nodes of ``kind`` that ``node`` has an outgoing edge to, in edge order."""
        found: List[Node] = []
        for edge in self.graph.edges:
            if edge.source != node.id:
                continue
            target = self.node_map.get(edge.target)
            if target is not None and target.kind == kind and target not in found:
                found.append(target)
        return found

    def first_target(self, node: Node, kind: ResourceKind) -> Optional[Node]:
        targets = self.targets_of_kind(node, kind)
        return targets[0] if targets else None

    def has_target(self, node: Node, kind: ResourceKind) -> bool:
        return self.first_target(node, kind) is not None


@dataclass
class ValidationContext(_GraphContext):
    """Read-only view of the graph handed to ``ResourcePlugin.validate``."""


@dataclass
class GeneratorContext(_GraphContext):
    """Read-only view of the graph plus the reference builder used during generation."""

    def identifier(self, node: Node) -> str:
        return sanitize_identifier(node.name)

    def reference(self, node_id: str, attribute: str) -> Reference:
        """Reference to ``attribute`` of another node, e.g. ``google_compute_network.vpc.id``.

        The path is built from the referenced node's own kind and name.

        Raises:
            ValueError: If no node has this id
        """
        target = self.node_map.get(node_id)
        if target is None:
            raise ValueError(f"Cannot reference unknown node '{node_id}'")
        path = f"{target.kind}.{self.identifier(target)}.{attribute}"
        return Reference(path=path, node_id=node_id, attribute=attribute)


class ResourcePlugin(ABC):
    """Descriptor for one resource kind.

    Subclasses declare the catalogue metadata as class attributes, a typed
    ``properties_model`` holding the defaults, and a ``schema`` describing the
    editable fields. Plugins are stateless; no method mutates its inputs.
    """

    kind: ClassVar[ResourceKind]
    category: ClassVar[ResourceCategory]
    display_name: ClassVar[str]
    description: ClassVar[str] = ""
    icon: ClassVar[str] = ""
    schema: ClassVar[ResourceSchema]
    properties_model: ClassVar[Type[ResourceProperties]]
    edge_suggestions: ClassVar[List[EdgeSuggestion]] = []
    remediations: ClassVar[Dict[str, str]] = {}

    def defaults(self) -> Dict[str, Any]:
        """Initial ``properties`` for a new node of this kind."""
        return self.properties_model().model_dump()

    def read_properties(self, node: Node) -> Tuple[ResourceProperties, List[Diagnostic]]:
        """Parse ``node.properties`` over the defaults.

        Values that fail coercion are reported as ``INVALID_VALUE`` and replaced
        by the field default, so a record is always returned.
        """
        merged = {**self.defaults(), **node.properties}
        diagnostics: List[Diagnostic] = []

        try:
            return self.properties_model.model_validate(merged), diagnostics
        except ValidationError as e:
            invalid: Dict[str, str] = {}
            for error in e.errors():
                if error["loc"]:
                    invalid.setdefault(str(error["loc"][0]), error["msg"])

        for key, reason in invalid.items():
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticCode.INVALID_VALUE.value,
                    f"{self._label(key)} has an invalid value: {reason}",
                    node_id=node.id,
                    field=key,
                    remediation=f"Reset to the default ({self.defaults().get(key)!r}) or enter a valid value.",
                )
            )
            merged.pop(key, None)

        return self.properties_model.model_validate(merged), diagnostics

    def properties(self, node: Node) -> Any:
        """Typed properties for generation; invalid values fall back to defaults."""
        props, _ = self.read_properties(node)
        return props

    def validate(self, node: Node, ctx: ValidationContext) -> List[Diagnostic]:
        """All diagnostics for ``node``: invalid values, required fields, then kind rules."""
        props, diagnostics = self.read_properties(node)

        for key, spec in self.schema.properties.items():
            if not spec.required:
                continue
            value = getattr(props, key, None)
            if value is None or (isinstance(value, str) and not value.strip()):
                diagnostics.append(
                    Diagnostic.error(
                        DiagnosticCode.REQUIRED_FIELD.value,
                        f"{spec.label} is required.",
                        node_id=node.id,
                        field=key,
                        remediation=self.remediations.get(key),
                    )
                )

        diagnostics.extend(self.check(node, props, ctx))
        return diagnostics

    def check(self, node: Node, props: Any, ctx: ValidationContext) -> List[Diagnostic]:
        """Kind-specific rules beyond required fields. Override in subclasses."""
        return []

    @abstractmethod
    def to_configuration(self, node: Node, ctx: GeneratorContext) -> List[ConfigurationBlock]:
        """
        Convert a node into one or more configuration blocks.

        Args:
            node: Node to convert
            ctx: GeneratorContext used to reference other nodes

        Returns:
            The resource block first, followed by any satellite blocks.
        """
        pass

    def suggest_edges(self, node: Node, graph: Graph) -> List[EdgeSuggestion]:
        """Natural attachment points for this kind, consulted when an edge is drawn."""
        return list(self.edge_suggestions)

    def describe(self) -> Dict[str, Any]:
        """Catalogue entry as plain data."""
        return {
            "kind": self.kind.value,
            "category": self.category.value,
            "display_name": self.display_name,
            "description": self.description,
            "icon": self.icon,
            "schema": self.schema.model_dump(exclude_none=True),
        }

    def _label(self, key: str) -> str:
        spec = self.schema.properties.get(key)
        return spec.label if spec else key

    # Block builders shared by the concrete plugins

    def resource_block(
        self,
        node: Node,
        ctx: GeneratorContext,
        attributes: Dict[str, Any],
        nested_blocks: Optional[List[NestedBlock]] = None,
    ) -> ConfigurationBlock:
        return ConfigurationBlock(
            block_type=BlockType.RESOURCE,
            resource_type=self.kind.value,
            name=ctx.identifier(node),
            attributes=attributes,
            nested_blocks=nested_blocks or [],
        )

    def output_block(
        self, node: Node, ctx: GeneratorContext, attribute: str, description: str
    ) -> ConfigurationBlock:
        return ConfigurationBlock(
            block_type=BlockType.OUTPUT,
            name=f"{ctx.identifier(node)}_{attribute}",
            attributes={
                "description": description,
                "value": ctx.reference(node.id, attribute),
            },
        )


def split_csv(value: str) -> List[str]:
    """Split a comma-separated property into trimmed, non-empty items."""
    return [item.strip() for item in (value or "").split(",") if item.strip()]
