"""Main CLI entry point."""

import argparse
import sys

from infragraph.cli.generate import generate_command
from infragraph.cli.graph import graph_command
from infragraph.cli.list_cmd import list_plugins_command
from infragraph.cli.validate import validate_command
from infragraph.config import LogLevel
from infragraph.utils.logging import configure_logging


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="infragraph - compile resource graphs into Terraform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  infragraph validate project.yaml              Check a project for problems
  infragraph generate project.yaml -o infra/    Write Terraform files
  infragraph graph project.yaml --format dot    Visualize dependencies
  infragraph plugins                            List resource kinds
        """,
    )

    # Global arguments
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default="WARNING",
        help="Set logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--structured-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # infragraph validate
    validate_parser = subparsers.add_parser("validate", help="Validate a project")
    validate_parser.add_argument("project", help="Path to project file (YAML or JSON)")

    # infragraph generate
    generate_parser = subparsers.add_parser("generate", help="Generate Terraform files")
    generate_parser.add_argument("project", help="Path to project file (YAML or JSON)")
    generate_parser.add_argument("-o", "--output", help="Directory to write files into")
    generate_parser.add_argument("--project-id", help="Default for var.project_id")
    generate_parser.add_argument("--region", help="Default for var.region")
    generate_parser.add_argument(
        "--force", action="store_true", help="Write files even when validation reports errors"
    )

    # infragraph graph
    graph_parser = subparsers.add_parser("graph", help="Visualize dependency graph")
    graph_parser.add_argument("project", help="Path to project file (YAML or JSON)")
    graph_parser.add_argument(
        "--format",
        choices=["ascii", "dot", "mermaid"],
        default="ascii",
        help="Output format (default: ascii)",
    )

    # infragraph plugins
    plugins_parser = subparsers.add_parser("plugins", help="List resource plugins")
    plugins_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    args = parser.parse_args()

    configure_logging(structured=args.structured_logs, level=args.log_level)

    if args.command == "validate":
        return validate_command(args)
    elif args.command == "generate":
        return generate_command(args)
    elif args.command == "graph":
        return graph_command(args)
    elif args.command == "plugins":
        return list_plugins_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
