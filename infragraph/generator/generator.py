import os
from typing import Dict, List, Optional

from infragraph.config import GeneratorConfig
from infragraph.generator.hcl import render_blocks
from infragraph.graph import GraphEngine
from infragraph.models import (
    CATEGORY_ORDER,
    BlockType,
    ConfigurationBlock,
    Expression,
    GeneratedFile,
    Graph,
    NestedBlock,
    Node,
    ResourceCategory,
)
from infragraph.plugins import GeneratorContext
from infragraph.registry import PluginRegistry, build_default_registry
from infragraph.utils.logging import get_logger

FILE_HEADER = "# Generated by infragraph. Manual edits will be overwritten.\n\n"
PROVIDERS_FILE = "providers.tf"
VARIABLES_FILE = "variables.tf"
OUTPUTS_FILE = "outputs.tf"


def category_filename(category: ResourceCategory) -> str:
    return f"{category.value.lower()}.tf"


class ConfigurationGenerator:
    """
    Turns a graph snapshot into Terraform files.

    Generation never fails on structural problems: a cyclic graph falls back
    to node insertion order and nodes of unknown kinds are skipped. Those
    problems are reported by the validation engine instead.
    """

    def __init__(
        self,
        registry: Optional[PluginRegistry] = None,
        graph_engine: Optional[GraphEngine] = None,
        config: Optional[GeneratorConfig] = None,
    ):
        self.registry = registry or build_default_registry()
        self.graph_engine = graph_engine or GraphEngine()
        self.config = config or GeneratorConfig()

    def resolve_order(self, graph: Graph) -> List[Node]:
        """
        Emission order for the graph's nodes.

        The topological order lists every dependent before its dependencies;
        it is reversed so referenced resources are declared first. A cyclic
        graph keeps its insertion order.
        """
        result = self.graph_engine.topological_sort(graph)
        if result.has_cycle:
            get_logger().debug(
                "Cycle detected, using insertion order", cycle=result.cycle_nodes
            )
            return list(graph.nodes)
        return list(reversed(result.order))

    def generate_blocks(self, graph: Graph) -> Dict[str, List[ConfigurationBlock]]:
        """Plugin blocks keyed by output filename, in emission order."""
        ctx = GeneratorContext(graph=graph)
        files: Dict[str, List[ConfigurationBlock]] = {}

        for node in self.resolve_order(graph):
            plugin = self.registry.get(node.kind)
            if plugin is None:
                get_logger().debug("Skipping node of unknown kind", node=node.id, kind=node.kind)
                continue

            for block in plugin.to_configuration(node, ctx):
                if block.block_type == BlockType.OUTPUT:
                    filename = OUTPUTS_FILE
                else:
                    filename = category_filename(plugin.category)
                files.setdefault(filename, []).append(block)

        return files

    def generate(self, graph: Graph) -> List[GeneratedFile]:
        """
        Generate every file for the graph.

        Args:
            graph: Graph snapshot; it is not modified

        Returns:
            ``providers.tf``, ``variables.tf``, one file per non-empty category
            in category display order, then ``outputs.tf`` when any plugin
            emitted outputs
        """
        blocks = self.generate_blocks(graph)

        ordered = [
            (PROVIDERS_FILE, self.provider_blocks()),
            (VARIABLES_FILE, self.variable_blocks()),
        ]
        for category in CATEGORY_ORDER:
            filename = category_filename(category)
            if filename in blocks:
                ordered.append((filename, blocks[filename]))
        if OUTPUTS_FILE in blocks:
            ordered.append((OUTPUTS_FILE, blocks[OUTPUTS_FILE]))

        files = [
            GeneratedFile(filename=filename, content=FILE_HEADER + render_blocks(file_blocks))
            for filename, file_blocks in ordered
        ]
        get_logger().debug(
            "Generation complete",
            files=len(files),
            blocks=sum(len(file_blocks) for _, file_blocks in ordered),
        )
        return files

    def provider_blocks(self) -> List[ConfigurationBlock]:
        terraform = ConfigurationBlock(
            block_type=BlockType.TERRAFORM,
            attributes={"required_version": self.config.terraform_version},
            nested_blocks=[
                NestedBlock(
                    type="required_providers",
                    attributes={
                        "google": {
                            "source": self.config.provider_source,
                            "version": self.config.provider_version,
                        }
                    },
                )
            ],
        )
        provider = ConfigurationBlock(
            block_type=BlockType.PROVIDER,
            name="google",
            attributes={
                "project": Expression(expr="var.project_id"),
                "region": Expression(expr="var.region"),
            },
        )
        return [terraform, provider]

    def variable_blocks(self) -> List[ConfigurationBlock]:
        return [
            ConfigurationBlock(
                block_type=BlockType.VARIABLE,
                name="project_id",
                attributes={
                    "description": "GCP project to deploy into",
                    "type": Expression(expr="string"),
                    "default": self.config.project_id,
                },
            ),
            ConfigurationBlock(
                block_type=BlockType.VARIABLE,
                name="region",
                attributes={
                    "description": "Default region for regional resources",
                    "type": Expression(expr="string"),
                    "default": self.config.region,
                },
            ),
        ]


def write_files(files: List[GeneratedFile], output_dir: str) -> List[str]:
    """
    Write generated files into a directory, creating it if needed.

    Returns:
        Paths of the written files
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for generated in files:
        path = os.path.join(output_dir, generated.filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(generated.content)
        paths.append(path)
    get_logger().info("Wrote generated files", directory=output_dir, count=len(paths))
    return paths
