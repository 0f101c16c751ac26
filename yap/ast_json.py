"""JSON serialization/deserialization for the Yap AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Every node becomes a dict with a
``type`` key naming its class plus one key per dataclass field.

Loading checks every field against the node's annotations, so a
hand-edited file fails with ``ValueError`` instead of producing a tree
the interpreter cannot walk.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, Union, get_args, get_origin, get_type_hints

from .ast import Node, Identifier, Member, STATEMENT_TYPES, EXPRESSION_TYPES

NODE_TYPES: Dict[str, type] = {cls.__name__: cls for cls in STATEMENT_TYPES + EXPRESSION_TYPES}
FIELD_TYPES: Dict[type, Dict[str, Any]] = {cls: get_type_hints(cls) for cls in NODE_TYPES.values()}


def ast_to_obj(node: Any) -> Any:
    if node is None or isinstance(node, (bool, int, float, str)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Node):
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"cannot serialize {type(node).__name__}")


def matches_type(value: Any, hint: Any) -> bool:
    """Whether a loaded value fits a field annotation."""
    if hint is Any:
        return True
    origin = get_origin(hint)
    if origin is Union:
        return any(matches_type(value, arg) for arg in get_args(hint))
    if origin is list:
        (item_hint,) = get_args(hint)
        return isinstance(value, list) and all(matches_type(v, item_hint) for v in value)
    if hint is type(None):
        return value is None
    if hint is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, hint)


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if isinstance(obj, dict):
        type_name = obj.get("type")
        cls = NODE_TYPES.get(type_name)
        if cls is None:
            raise ValueError(f"unknown AST node type {type_name!r}")
        hints = FIELD_TYPES[cls]
        kwargs = {}
        for f in fields(cls):
            value = ast_from_obj(obj.get(f.name))
            if not matches_type(value, hints[f.name]):
                raise ValueError(f"bad {f.name!r} field in {type_name} node: {obj.get(f.name)!r}")
            kwargs[f.name] = value
        node = cls(**kwargs)
        if isinstance(node, Member) and not node.computed and not isinstance(node.property, Identifier):
            raise ValueError("non-computed Member property must be an Identifier")
        return node
    raise ValueError(f"cannot deserialize {obj!r}")
