"""
Nested field tree for JSON request bodies.

Field tokens address the body with dot-separated paths, so
``person.name=brett`` and ``person.age:=100`` build
``{"person": {"name": "brett", "age": 100}}``.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from hep.parse.errors import FieldConflictError


@dataclass
class Leaf:
    """Terminal value in the field tree."""
    value: Any


@dataclass
class ObjectNode:
    """Object node holding named children in insertion order."""
    children: dict[str, "ObjectNode | Leaf"] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for name, child in self.children.items():
            if isinstance(child, ObjectNode):
                result[name] = child.to_dict()
            else:
                result[name] = child.value
        return result


class FieldTree:
    """Mutable tree of body fields addressed by dotted paths.

    An intermediate segment that already holds a leaf, or a leaf that
    would replace an object, raises FieldConflictError. Setting an
    existing leaf again replaces its value.
    """

    def __init__(self):
        self.root = ObjectNode()

    def __bool__(self) -> bool:
        return bool(self.root.children)

    def set(self, path: str, value: Any) -> None:
        """Store value at path, creating intermediate objects as needed."""
        *parents, name = path.split(".")

        node = self.root
        walked = []
        for segment in parents:
            walked.append(segment)
            child = node.children.get(segment)
            if child is None:
                child = node.children[segment] = ObjectNode()
            elif isinstance(child, Leaf):
                raise FieldConflictError(
                    path, f"{'.'.join(walked)!r} already holds a value"
                )
            node = child

        if isinstance(node.children.get(name), ObjectNode):
            raise FieldConflictError(path, "would overwrite a nested object")
        node.children[name] = Leaf(value)

    def get(self, path: str) -> Any:
        """Return the value stored at path (object nodes as dicts)."""
        node: ObjectNode | Leaf = self.root
        for segment in path.split("."):
            if not isinstance(node, ObjectNode) or segment not in node.children:
                raise KeyError(path)
            node = node.children[segment]
        return node.to_dict() if isinstance(node, ObjectNode) else node.value

    def to_dict(self) -> dict[str, Any]:
        return self.root.to_dict()

    def to_json(self) -> bytes:
        """Serialize the tree as compact UTF-8 JSON."""
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
