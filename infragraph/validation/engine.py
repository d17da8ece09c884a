import re
from typing import Dict, List, Optional, Set

from infragraph.graph import GraphEngine
from infragraph.models import Diagnostic, DiagnosticCode, Graph, ResourceKind, Severity
from infragraph.plugins import ValidationContext
from infragraph.registry import PluginRegistry, build_default_registry
from infragraph.utils.logging import get_logger
from infragraph.utils.naming import sanitize_identifier

NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9-_]*$")


class ValidationEngine:
    """
    Produces the full diagnostic set for a graph snapshot.

    Three phases run back to back and never short-circuit: per-node schema
    checks by the owning plugin, structural graph checks, and cross-resource
    policy checks. Problems are returned as diagnostics, never raised.
    """

    def __init__(
        self,
        registry: Optional[PluginRegistry] = None,
        graph_engine: Optional[GraphEngine] = None,
    ):
        self.registry = registry or build_default_registry()
        self.graph_engine = graph_engine or GraphEngine()

    def validate_all(self, graph: Graph) -> List[Diagnostic]:
        """
        Validate a graph snapshot.

        Args:
            graph: Graph to validate; it is not modified

        Returns:
            Flat list of diagnostics from all three phases
        """
        logger = get_logger()
        logger.debug("Starting validation", nodes=len(graph.nodes), edges=len(graph.edges))

        diagnostics: List[Diagnostic] = []
        diagnostics.extend(self.validate_schema(graph))
        diagnostics.extend(self.validate_graph(graph))
        diagnostics.extend(self.validate_policies(graph))

        counts = {severity.value: 0 for severity in Severity}
        for diag in diagnostics:
            counts[diag.severity.value] += 1
        logger.debug(
            "Validation complete",
            errors=counts["error"],
            warnings=counts["warning"],
            info=counts["info"],
        )
        return diagnostics

    def validate_schema(self, graph: Graph) -> List[Diagnostic]:
        """Run each node's plugin validation; unknown kinds are reported as errors."""
        ctx = ValidationContext(graph=graph)
        diagnostics: List[Diagnostic] = []

        for node in graph.nodes:
            plugin = self.registry.get(node.kind)
            if plugin is None:
                diagnostics.append(
                    Diagnostic.error(
                        DiagnosticCode.UNKNOWN_RESOURCE.value,
                        f"Unknown resource type: {node.kind}",
                        node_id=node.id,
                    )
                )
                continue
            diagnostics.extend(plugin.validate(node, ctx))

        return diagnostics

    def validate_graph(self, graph: Graph) -> List[Diagnostic]:
        """Cycles, dangling edges and name collisions."""
        diagnostics: List[Diagnostic] = []

        cycle = self.graph_engine.detect_cycle(graph)
        if cycle.has_cycle:
            loop = list(cycle.cycle_nodes)
            if loop[0] != loop[-1]:
                loop.append(loop[0])
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticCode.DEPENDENCY_CYCLE.value,
                    "Circular dependency detected in the graph: "
                    f"{' → '.join(loop)}",
                    remediation="Check the edges between nodes and remove the circular reference.",
                )
            )

        node_ids = set(graph.node_ids())
        for edge in graph.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in node_ids:
                    diagnostics.append(
                        Diagnostic.error(
                            DiagnosticCode.DANGLING_EDGE.value,
                            f"Edge '{edge.id}' references missing node: {endpoint}",
                            remediation="Remove the edge or restore the missing node.",
                        )
                    )

        diagnostics.extend(self._check_names(graph))
        return diagnostics

    def _check_names(self, graph: Graph) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        # Keyed on the generated identifier: "web server" and "web_server" collide
        names_by_kind: Dict[str, Dict[str, str]] = {}
        kinds_by_name: Dict[str, Set[str]] = {}

        for node in graph.nodes:
            seen = names_by_kind.setdefault(node.kind, {})
            identifier = sanitize_identifier(node.name)
            if identifier in seen:
                first = seen[identifier]
                if first == node.name:
                    message = f'Duplicate resource name "{node.name}" for type {node.kind}'
                else:
                    message = (
                        f'Resource name "{node.name}" collides with "{first}" for type '
                        f'{node.kind} (both become "{identifier}")'
                    )
                diagnostics.append(
                    Diagnostic.error(
                        DiagnosticCode.DUPLICATE_NAME.value,
                        message,
                        node_id=node.id,
                        remediation="Each resource of the same type must have a unique name.",
                    )
                )
            else:
                seen[identifier] = node.name

            other_kinds = kinds_by_name.setdefault(node.name, set()) - {node.kind}
            if other_kinds:
                diagnostics.append(
                    Diagnostic.warning(
                        DiagnosticCode.DUPLICATE_NAME_CROSS_TYPE.value,
                        f'Name "{node.name}" is also used by a {sorted(other_kinds)[0]} resource',
                        node_id=node.id,
                        remediation="Consider using unique names across all resources to avoid confusion.",
                    )
                )
            kinds_by_name[node.name].add(node.kind)

            if not NAME_PATTERN.match(node.name):
                diagnostics.append(
                    Diagnostic.warning(
                        DiagnosticCode.INVALID_NAME.value,
                        f'Name "{node.name}" will be rewritten to a valid identifier in generated code',
                        node_id=node.id,
                        remediation="Start with a letter and use only letters, digits, '-' and '_'.",
                    )
                )

        return diagnostics

    def validate_policies(self, graph: Graph) -> List[Diagnostic]:
        """Cross-resource heuristics."""
        diagnostics: List[Diagnostic] = []

        if not graph.nodes:
            diagnostics.append(
                Diagnostic.info(
                    DiagnosticCode.EMPTY_GRAPH.value,
                    "No resources added yet. Add resources to get started.",
                )
            )

        subnets = graph.nodes_of_kind(ResourceKind.COMPUTE_SUBNETWORK)
        networks = graph.nodes_of_kind(ResourceKind.COMPUTE_NETWORK)
        if subnets and not networks:
            diagnostics.append(
                Diagnostic.warning(
                    DiagnosticCode.SUBNET_WITHOUT_VPC.value,
                    "Subnets exist without a VPC Network. Add a VPC and connect your subnets.",
                )
            )

        return diagnostics


def has_blocking_errors(diagnostics: List[Diagnostic]) -> bool:
    """True when any diagnostic has error severity; collaborators gate export on this."""
    return any(diag.severity == Severity.ERROR for diag in diagnostics)
