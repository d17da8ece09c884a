"""Validate command implementation."""

from typing import List

from infragraph.exceptions import ConfigValidationError
from infragraph.models import Diagnostic, Severity
from infragraph.utils.config_loader import load_project
from infragraph.validation import ValidationEngine, has_blocking_errors

SEVERITY_ICONS = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.INFO: "ℹ️",
}


def format_diagnostics(diagnostics: List[Diagnostic]) -> List[str]:
    """Diagnostics as printable lines, grouped by severity (errors first)."""
    lines = []
    for severity in Severity:
        group = [diag for diag in diagnostics if diag.severity == severity]
        if not group:
            continue
        lines.append(f"{severity.value.upper()}S ({len(group)}):")
        for diag in group:
            scope = ""
            if diag.node_id:
                scope = f" [{diag.node_id}{'.' + diag.field if diag.field else ''}]"
            lines.append(f"  {SEVERITY_ICONS[severity]} {diag.code}{scope}: {diag.message}")
            if diag.remediation:
                lines.append(f"      → {diag.remediation}")
    return lines


def validate_command(args):
    """Validate a project file and print its diagnostics."""
    try:
        project = load_project(args.project)
    except (FileNotFoundError, ConfigValidationError) as e:
        print(f"❌ Could not load project: {e}")
        return 1

    diagnostics = ValidationEngine().validate_all(project.graph)

    for line in format_diagnostics(diagnostics):
        print(line)

    if has_blocking_errors(diagnostics):
        print("Project has errors")
        return 1

    print("Project is valid")
    return 0
