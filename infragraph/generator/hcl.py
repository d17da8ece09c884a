"""HCL serialisation of configuration blocks."""

import re
from typing import Any, Dict, Iterable, List

from infragraph.models import (
    BlockType,
    ConfigurationBlock,
    Expression,
    NestedBlock,
    Reference,
)

INDENT = "  "
_BARE_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


def quote(value: str) -> str:
    """Quote a string literal, escaping template sequences."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("${", "$${")
        .replace("%{", "%%{")
    )
    return f'"{escaped}"'


def _render_key(key: str) -> str:
    return key if _BARE_KEY.match(key) else quote(key)


def render_value(value: Any) -> str:
    """
    Render an attribute value.

    References and expressions are emitted unquoted; bools before ints since
    ``bool`` is an ``int`` subclass.
    """
    if isinstance(value, (Reference, Expression)):
        return str(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, dict):
        if not value:
            return "{}"
        items = ", ".join(f"{_render_key(str(k))} = {render_value(v)}" for k, v in value.items())
        return f"{{ {items} }}"
    if isinstance(value, (list, tuple, set)):
        items = sorted(value) if isinstance(value, set) else value
        return "[" + ", ".join(render_value(item) for item in items) + "]"
    return quote(str(value))


def _render_body(attributes: Dict[str, Any], blocks: Iterable[NestedBlock], depth: int) -> List[str]:
    pad = INDENT * depth
    lines = []

    if attributes:
        width = max(len(key) for key in attributes)
        for key, value in attributes.items():
            lines.append(f"{pad}{key.ljust(width)} = {render_value(value)}")

    for block in blocks:
        if lines:
            lines.append("")
        lines.append(f"{pad}{block.type} {{")
        lines.extend(_render_body(block.attributes, block.blocks, depth + 1))
        lines.append(f"{pad}}}")

    return lines


def block_header(block: ConfigurationBlock) -> str:
    if block.block_type == BlockType.RESOURCE:
        return f"resource {quote(block.resource_type or '')} {quote(block.name)}"
    if block.block_type == BlockType.TERRAFORM:
        return "terraform"
    return f"{block.block_type.value} {quote(block.name)}"


def render_block(block: ConfigurationBlock) -> str:
    """Render one top-level block with aligned attributes and nested blocks."""
    body = _render_body(block.attributes, block.nested_blocks, 1)
    if not body:
        return f"{block_header(block)} {{}}"
    return "\n".join([f"{block_header(block)} {{", *body, "}"])


def render_blocks(blocks: Iterable[ConfigurationBlock]) -> str:
    """Render blocks separated by blank lines, ending with a newline."""
    return "\n\n".join(render_block(block) for block in blocks) + "\n"
