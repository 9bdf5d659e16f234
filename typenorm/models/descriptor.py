"""Canonical type descriptors — the output of normalization.

A TypeDescriptor is a plain record. It carries no behaviour beyond rendering
and serialization helpers; all decisions about what goes into it are made by
the normalizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class BuiltinKind(Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"  # Also used for class-typed values
    CALLABLE = "callable"
    RESOURCE = "resource"
    NULL = "null"


@dataclass(frozen=True)
class TypeDescriptor:
    """One canonical type alternative."""

    kind: BuiltinKind
    nullable: bool = False
    class_name: Optional[str] = None  # Only set when kind is OBJECT
    is_collection: bool = False
    collection_key_type: Optional[TypeDescriptor] = None
    collection_value_type: Optional[TypeDescriptor] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict, nesting element slots recursively."""
        return {
            "kind": self.kind.value,
            "nullable": self.nullable,
            "class_name": self.class_name,
            "is_collection": self.is_collection,
            "collection_key_type": (
                self.collection_key_type.to_dict() if self.collection_key_type else None
            ),
            "collection_value_type": (
                self.collection_value_type.to_dict() if self.collection_value_type else None
            ),
        }

    def __str__(self) -> str:
        base = self.class_name or self.kind.value
        if self.is_collection and (self.collection_key_type or self.collection_value_type):
            key = str(self.collection_key_type) if self.collection_key_type else "mixed"
            value = str(self.collection_value_type) if self.collection_value_type else "mixed"
            base = f"{base}<{key}, {value}>"
        if self.nullable and self.kind != BuiltinKind.NULL:
            return f"?{base}"
        return base
