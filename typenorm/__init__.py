"""typenorm — canonical type descriptors from doc-comment type annotations."""

from typenorm.doctype import DocTypeSyntaxError, parse_doctype
from typenorm.models.descriptor import BuiltinKind, TypeDescriptor
from typenorm.normalizer import normalize, normalize_annotation

__version__ = "0.1.0"

__all__ = [
    "BuiltinKind",
    "DocTypeSyntaxError",
    "TypeDescriptor",
    "normalize",
    "normalize_annotation",
    "parse_doctype",
]
