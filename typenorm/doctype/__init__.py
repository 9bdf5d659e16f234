"""DocType trees — the parsed form of doc-comment type annotations.

Nodes:
- Scalar: a plain name such as "int", "\\App\\User" or "string[]"
- NullMarker: the "null" alternative
- Union: alternatives joined by "|"
- GenericContainer: a container with explicit key and value types
"""

from typenorm.doctype.models import DocType, GenericContainer, NullMarker, Scalar, Union
from typenorm.doctype.parser import DocTypeSyntaxError, parse_doctype

__all__ = [
    "DocType",
    "GenericContainer",
    "NullMarker",
    "Scalar",
    "Union",
    "DocTypeSyntaxError",
    "parse_doctype",
]
