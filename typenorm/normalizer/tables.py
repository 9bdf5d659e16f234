"""Read-only lookup tables shared by the normalizer."""

from types import MappingProxyType

from typenorm.models.descriptor import BuiltinKind


BUILTIN_KIND_NAMES = frozenset(kind.value for kind in BuiltinKind)

# Doc-comment spellings folded onto their canonical builtin name.
# "real" is deliberately absent: it is not a recognised builtin.
SCALAR_SYNONYMS = MappingProxyType(
    {
        "integer": "int",
        "boolean": "bool",
        "double": "float",
        "callback": "callable",
        "void": "null",
    }
)

MIXED = "mixed"  # Carries no type information
ARRAY_MARKER = "[]"
NAMESPACE_SEPARATOR = "\\"
