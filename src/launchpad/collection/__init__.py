"""
Convention-based rendering hints for HAL collections.
"""

from .conventions import DEFAULT_CONVENTIONS, FieldConventions, FieldType, merge_conventions
from .inference import (
    InferenceOptions,
    InferredColumn,
    extract_embedded_items,
    extract_resource_fields,
    humanize_label,
    infer_columns,
    infer_field_type,
    infer_visible_columns,
)

__all__ = [
    "DEFAULT_CONVENTIONS",
    "FieldConventions",
    "FieldType",
    "merge_conventions",
    "InferenceOptions",
    "InferredColumn",
    "extract_embedded_items",
    "extract_resource_fields",
    "humanize_label",
    "infer_columns",
    "infer_field_type",
    "infer_visible_columns",
]
