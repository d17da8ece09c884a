"""Custom exceptions for infragraph.

Validation findings are never raised; they are returned as Diagnostics.
These exceptions cover configuration, registry and editing failures only.
"""

from typing import List, Optional


class InfragraphException(Exception):
    """Base exception for all infragraph errors."""

    pass


class ConfigValidationError(InfragraphException):
    """Project file could not be loaded or did not match the model."""

    def __init__(self, message: str, file: Optional[str] = None, line: Optional[int] = None):
        self.message = message
        self.file = file
        self.line = line
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format error message with location info."""
        parts = ["Configuration validation error"]
        if self.file:
            parts.append(f"\n  File: {self.file}")
        if self.line:
            parts.append(f"\n  Line: {self.line}")
        parts.append(f"\n  Error: {self.message}")
        return "".join(parts)


class PluginRegistrationError(InfragraphException):
    """Plugin catalogue could not be built (duplicate or missing kind)."""

    def __init__(self, message: str, kind: Optional[str] = None):
        self.message = message
        self.kind = kind
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        parts = [f"✗ Plugin registration failed: {self.message}"]
        if self.kind:
            parts.append(f"\n  Kind: {self.kind}")
        return "".join(parts)


class DependencyError(InfragraphException):
    """Dependency graph error raised by the strict traversal helpers."""

    def __init__(self, message: str, cycle: Optional[List[str]] = None):
        self.message = message
        self.cycle = cycle
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format dependency error."""
        parts = [f"✗ Dependency error: {self.message}"]

        if self.cycle:
            parts.append("\n  Cycle detected: " + " → ".join(self.cycle))

        return "".join(parts)


class GraphEditError(InfragraphException):
    """An editing operation was rejected because it would break a graph invariant."""

    def __init__(
        self,
        message: str,
        node_id: Optional[str] = None,
        edge_id: Optional[str] = None,
    ):
        self.message = message
        self.node_id = node_id
        self.edge_id = edge_id
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        parts = [f"✗ Graph edit rejected: {self.message}"]
        if self.node_id:
            parts.append(f"\n  Node: {self.node_id}")
        if self.edge_id:
            parts.append(f"\n  Edge: {self.edge_id}")
        return "".join(parts)
