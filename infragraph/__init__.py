"""infragraph - compile resource graphs into Terraform configuration."""

__version__ = "0.3.0"

from infragraph.models import (
    ConfigurationBlock,
    Diagnostic,
    Edge,
    GeneratedFile,
    Graph,
    Node,
    ResourceKind,
    Severity,
)

__all__ = [
    "ConfigurationBlock",
    "Diagnostic",
    "Edge",
    "GeneratedFile",
    "Graph",
    "Node",
    "ResourceKind",
    "Severity",
    "__version__",
]


# Engines are imported lazily so loading the data model stays cheap
def __getattr__(name):
    if name == "GraphEngine":
        from infragraph.graph import GraphEngine

        return GraphEngine
    if name == "PluginRegistry":
        from infragraph.registry import PluginRegistry

        return PluginRegistry
    if name == "ValidationEngine":
        from infragraph.validation import ValidationEngine

        return ValidationEngine
    if name == "ConfigurationGenerator":
        from infragraph.generator import ConfigurationGenerator

        return ConfigurationGenerator
    if name == "GraphState":
        from infragraph.state import GraphState

        return GraphState
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
