"""
Graph CLI Command
=================

Visualizes the resource dependency graph.
"""

from infragraph.exceptions import ConfigValidationError, DependencyError
from infragraph.graph import GraphEngine
from infragraph.models import Graph, ResourceCategory
from infragraph.registry import PluginRegistry, build_default_registry
from infragraph.utils.config_loader import load_project

CATEGORY_COLORS = {
    ResourceCategory.NETWORK: "lightblue",
    ResourceCategory.COMPUTE: "lightyellow",
    ResourceCategory.STORAGE: "lightgreen",
    ResourceCategory.KUBERNETES: "lightcyan",
    ResourceCategory.DATABASE: "plum",
    ResourceCategory.SERVERLESS: "khaki",
    ResourceCategory.SECURITY: "lightpink",
    ResourceCategory.MESSAGING: "wheat",
}


def graph_command(args):
    """
    Handle graph subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        project = load_project(args.project)
    except (FileNotFoundError, ConfigValidationError) as e:
        print(f"❌ Error loading project: {e}")
        return 1

    graph = project.graph

    if args.format == "ascii":
        try:
            print(GraphEngine().visualize(graph))
        except DependencyError as e:
            print(f"❌ {e}")
            return 1
    elif args.format == "dot":
        print(_generate_dot(graph, project.metadata.name))
    elif args.format == "mermaid":
        print(_generate_mermaid(graph))

    return 0


def _category_of(registry: PluginRegistry, kind: str):
    plugin = registry.get(kind)
    return plugin.category if plugin else None


def _generate_dot(graph: Graph, project_name: str) -> str:
    """Generate DOT (Graphviz) representation."""
    registry = build_default_registry()
    lines = []
    lines.append(f'digraph "{project_name}" {{')
    lines.append("    rankdir=LR;")
    lines.append('    node [shape=box, style=rounded, fontname="Helvetica"];')
    lines.append('    edge [fontname="Helvetica"];')
    lines.append("")

    for node in graph.nodes:
        color = CATEGORY_COLORS.get(_category_of(registry, node.kind), "white")
        label = f"{node.name}\\n({node.kind})"
        lines.append(f'    "{node.id}" [label="{label}", style="filled", fillcolor="{color}"];')

    node_ids = set(graph.node_ids())
    for edge in graph.edges:
        if edge.source in node_ids and edge.target in node_ids:
            lines.append(f'    "{edge.source}" -> "{edge.target}" [label="{edge.relationship.value}"];')

    lines.append("}")
    return "\n".join(lines)


def _generate_mermaid(graph: Graph) -> str:
    """Generate Mermaid diagram."""
    registry = build_default_registry()
    lines = []
    lines.append("graph LR")

    for node in graph.nodes:
        category = _category_of(registry, node.kind)
        # Networks as circles, compute-like resources as boxes
        if category == ResourceCategory.NETWORK:
            shape, end_shape = "((", "))"
        elif category in (ResourceCategory.STORAGE, ResourceCategory.DATABASE):
            shape, end_shape = "[(", ")]"
        else:
            shape, end_shape = "[", "]"
        lines.append(f'    {node.id}{shape}"{node.name}"{end_shape}')

    node_ids = set(graph.node_ids())
    for edge in graph.edges:
        if edge.source in node_ids and edge.target in node_ids:
            lines.append(f"    {edge.source} -->|{edge.relationship.value}| {edge.target}")

    return "\n".join(lines)
