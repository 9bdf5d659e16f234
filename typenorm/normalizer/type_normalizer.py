"""Type normalizer — DocType tree to canonical TypeDescriptor list.

The transform is best-effort. Anything that cannot be turned into a single
unambiguous descriptor is left out rather than reported:

- a "mixed" or empty alternative is dropped from the result
- a container element slot whose type normalizes to zero or several
  descriptors is left as None ("unknown")
- a "null" alternative never becomes its own descriptor inside a union; it
  marks every sibling as nullable instead

Nothing here raises, keeps state between calls, or mutates its input.
"""

from __future__ import annotations

import logging
from typing import Optional

from typenorm.doctype.models import DocType, GenericContainer, NullMarker, Scalar, Union
from typenorm.doctype.parser import parse_doctype
from typenorm.models.descriptor import BuiltinKind, TypeDescriptor
from typenorm.normalizer.tables import (
    ARRAY_MARKER,
    BUILTIN_KIND_NAMES,
    MIXED,
    NAMESPACE_SEPARATOR,
    SCALAR_SYNONYMS,
)

logger = logging.getLogger(__name__)


def normalize(node: DocType) -> list[TypeDescriptor]:
    """Normalize a DocType node into descriptors, one per usable alternative.

    A lone ``null`` still yields one descriptor of kind null (nullable).
    An empty list means no type information could be derived.
    """
    if not isinstance(node, Union):
        descriptor = build_descriptor(node, isinstance(node, NullMarker))
        return [descriptor] if descriptor is not None else []

    nullable = any(isinstance(alt, NullMarker) for alt in node.alternatives)
    alternatives = [alt for alt in node.alternatives if not isinstance(alt, NullMarker)]

    descriptors = []
    for alt in alternatives:
        descriptor = build_descriptor(alt, nullable)
        if descriptor is None:
            logger.debug("Dropped alternative %r of %r", str(alt), str(node))
            continue
        descriptors.append(descriptor)
    return descriptors


def normalize_annotation(text: str) -> list[TypeDescriptor]:
    """Parse annotation text and normalize it.

    Raises DocTypeSyntaxError if the text cannot be parsed.
    """
    return normalize(parse_doctype(text))


def build_descriptor(node: DocType, nullable: bool) -> Optional[TypeDescriptor]:
    """Build the descriptor for a single alternative, or None if unresolvable."""
    match node:
        case GenericContainer(qualified_name=name, key_type=key_type, value_type=value_type):
            kind, class_name = classify(name)
            return TypeDescriptor(
                kind=kind,
                nullable=nullable,
                class_name=class_name,
                is_collection=True,
                collection_key_type=_single(normalize(key_type), name, "key"),
                collection_value_type=_single(normalize(value_type), name, "value"),
            )
        case Scalar(name=name):
            return _build_scalar(name, nullable)
        case NullMarker():
            return _build_scalar(str(node), nullable)
        case Union():
            # A nested union cannot be represented by one descriptor
            logger.debug("Nested union %r has no single descriptor", str(node))
            return None
    return None


def canonicalize_name(name: str) -> str:
    """Fold a doc-comment synonym onto its canonical builtin name."""
    return SCALAR_SYNONYMS.get(name, name)


def classify(name: str) -> tuple[BuiltinKind, Optional[str]]:
    """Split a type name into its builtin kind and class name.

    Builtin names have no class name. Anything else is a class, returned
    with a single leading namespace separator removed.
    """
    if name in BUILTIN_KIND_NAMES:
        return BuiltinKind(name), None
    if name.startswith(NAMESPACE_SEPARATOR):
        name = name[len(NAMESPACE_SEPARATOR):]
    return BuiltinKind.OBJECT, name


def _build_scalar(name: str, nullable: bool) -> Optional[TypeDescriptor]:
    if not name or name == MIXED:
        return None

    is_array_of = name.endswith(ARRAY_MARKER)
    if is_array_of:
        name = name[: -len(ARRAY_MARKER)]
    name = canonicalize_name(name)

    if not is_array_of and name != BuiltinKind.ARRAY.value:
        kind, class_name = classify(name)
        return TypeDescriptor(kind=kind, nullable=nullable, class_name=class_name)

    if name in ("", MIXED, BuiltinKind.ARRAY.value):
        return TypeDescriptor(kind=BuiltinKind.ARRAY, nullable=nullable, is_collection=True)

    if name.endswith(ARRAY_MARKER):
        # int[][]: the element is itself an array
        value_type = _build_scalar(name, nullable)
    else:
        kind, class_name = classify(name)
        value_type = TypeDescriptor(kind=kind, nullable=nullable, class_name=class_name)

    return TypeDescriptor(
        kind=BuiltinKind.ARRAY,
        nullable=nullable,
        is_collection=True,
        collection_key_type=TypeDescriptor(kind=BuiltinKind.INT),
        collection_value_type=value_type,
    )


def _single(
    descriptors: list[TypeDescriptor], container: str, slot: str
) -> Optional[TypeDescriptor]:
    """Return the only descriptor, or None when the slot is ambiguous or unknown."""
    if len(descriptors) == 1:
        return descriptors[0]
    logger.debug(
        "Left %s slot of %r unknown (%d candidate types)", slot, container, len(descriptors)
    )
    return None
