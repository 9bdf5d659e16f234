"""Normalization of DocType trees into canonical TypeDescriptor lists."""

from typenorm.normalizer.type_normalizer import (
    build_descriptor,
    canonicalize_name,
    classify,
    normalize,
    normalize_annotation,
)

__all__ = [
    "normalize",
    "normalize_annotation",
    "build_descriptor",
    "canonicalize_name",
    "classify",
]
