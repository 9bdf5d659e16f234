"""DocType nodes — the parsed shape of a documentation-comment type annotation.

A doc-comment parser turns raw annotation text into a small tree of these
nodes. The normalizer only reads them; nothing in typenorm mutates a node
after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Scalar:
    """A plain type name, possibly ending in one or more ``[]`` markers."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NullMarker:
    """The literal ``null`` alternative."""

    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class Union:
    """Alternatives joined by ``|``, kept in source order and not flattened."""

    alternatives: tuple[DocType, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but always store an immutable tuple
        object.__setattr__(self, "alternatives", tuple(self.alternatives))

    def __str__(self) -> str:
        parts = []
        for alt in self.alternatives:
            text = str(alt)
            parts.append(f"({text})" if isinstance(alt, Union) else text)
        return "|".join(parts)

    def __len__(self) -> int:
        return len(self.alternatives)

    def __iter__(self):
        return iter(self.alternatives)


@dataclass(frozen=True)
class GenericContainer:
    """A container annotated with explicit key and value element types."""

    qualified_name: str
    key_type: DocType
    value_type: DocType

    def __str__(self) -> str:
        return f"{self.qualified_name}<{self.key_type}, {self.value_type}>"


DocType = Scalar | NullMarker | Union | GenericContainer
