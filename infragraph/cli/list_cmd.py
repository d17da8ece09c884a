"""CLI command for listing the resource plugin catalogue."""

import json

from infragraph.registry import build_default_registry


def _get_first_line(text: str) -> str:
    if not text:
        return ""
    return text.strip().split("\n")[0]


def list_plugins_command(args) -> int:
    """List all registered resource plugins, grouped by category."""
    registry = build_default_registry()

    if args.format == "json":
        result = [plugin.describe() for plugin in registry.list()]
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    print(f"Available Resources ({len(registry)}):")
    print("=" * 60)
    for category, plugins in registry.list_by_category().items():
        print(f"{category.value}:")
        for plugin in plugins:
            doc = _get_first_line(plugin.description) or "No description"
            print(f"  {plugin.icon} {plugin.display_name:<18} {plugin.kind.value:<32} {doc}")

    return 0
