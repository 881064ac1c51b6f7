"""AST serialization — JSON round-trip for marcado AST nodes.

Converts AST nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed ASTs to disk
- Handing an AST to tools written in other languages
- Debugging and inspection

Each node becomes a dict with a ``type`` discriminator (the node's type tag)
plus its fields. Plain strings inside ``children`` stay strings. All JSON
output is deterministic (sorted keys) for cache-key stability.

Example:
    from marcado import parse
    from marcado.serialization import to_json, from_json

    ast = parse("# Hello **World**")
    assert from_json(to_json(ast)) == ast

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from marcado.nodes import NODE_TYPES, Node


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Args:
        node: Any marcado AST node.

    Returns:
        Dict with ``type`` and all node fields.

    """
    result: dict[str, Any] = {"type": node.type}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct an AST node from a dict.

    Args:
        data: Dict with ``type`` and node fields (as produced by to_dict).

    Returns:
        AST node. Fields missing from ``data`` take their defaults.

    Raises:
        ValueError: If ``type`` is missing or unknown.

    """
    type_name = data.get("type")
    if type_name is None:
        msg = "Missing 'type' field in serialized node"
        raise ValueError(msg)

    node_cls = NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return from_dict(value)
    if isinstance(value, list):
        return [_deserialize_value(item) for item in value]
    return value


def to_json(ast: Sequence[Node], *, indent: int | None = None) -> str:
    """Serialize an AST (list of block nodes) to a JSON array.

    Args:
        ast: Nodes to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps([to_dict(node) for node in ast], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Node]:
    """Deserialize an AST from a JSON string.

    Raises:
        ValueError: If the JSON is not an array of serialized nodes.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of nodes, got {type(raw).__name__}"
        raise ValueError(msg)
    return [from_dict(item) for item in raw]


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
