"""
Collection inference.

Turns the embedded items of a HAL collection into column definitions a
table can render without any per-resource UI code: naming conventions
first, then a look at the values.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from launchpad.hal.models import RESERVED_KEYS
from launchpad.hal.utils import is_hal_object
from .conventions import FieldConventions, FieldType, matches_pattern, merge_conventions

DEFAULT_SAMPLE_SIZE = 10
COMMON_COLLECTION_KEYS = ("items", "results", "data", "records")

ACRONYMS = {
    "id": "ID",
    "api": "API",
    "url": "URL",
    "uri": "URI",
    "uuid": "UUID",
    "ip": "IP",
    "http": "HTTP",
    "https": "HTTPS",
    "aws": "AWS",
    "sdk": "SDK",
    "ui": "UI",
    "ux": "UX",
}

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?)?$")
SLASH_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$")
EMAIL_VALUE_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_PATTERN = re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE)
HASH_PATTERN = re.compile(r"^[a-f0-9]{32,}$", re.IGNORECASE)
URL_VALUE_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://\S+$", re.IGNORECASE)


class InferredColumn(BaseModel):
    key: str
    label: str
    type: FieldType
    sortable: bool = True
    hidden: bool = False
    priority: int = Field(0, description="Position in the API response")


@dataclass
class InferenceOptions:
    """Per-table adjustments to the conventions."""

    conventions: Optional[FieldConventions] = None
    sample_size: int = DEFAULT_SAMPLE_SIZE
    hide_fields: List[str] = field(default_factory=list)
    show_fields: List[str] = field(default_factory=list)
    field_type_overrides: Dict[str, FieldType] = field(default_factory=dict)
    label_overrides: Dict[str, str] = field(default_factory=dict)


def extract_embedded_items(resource: Mapping[str, Any], embedded_key: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Pull the item list out of ``_embedded``.

    Without a key, common collection names are tried first, then the first
    list found.
    """
    embedded = resource.get("_embedded") if isinstance(resource, Mapping) else None
    if not embedded:
        return []

    if embedded_key is not None:
        items = embedded.get(embedded_key)
        return items if isinstance(items, list) else []

    for key in COMMON_COLLECTION_KEYS:
        if isinstance(embedded.get(key), list):
            return embedded[key]

    for value in embedded.values():
        if isinstance(value, list):
            return value

    return []


def humanize_label(field_name: str) -> str:
    """
    Human-readable label for a field name.

    >>> humanize_label("apiKeyId")
    'API Key ID'
    >>> humanize_label("date_last_accessed")
    'Date Last Accessed'
    """
    result = field_name.strip("_-")
    result = re.sub(r"([a-z])([A-Z])", r"\1 \2", result)
    result = re.sub(r"[_-]", " ", result)
    result = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", result)
    result = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", result)

    words = []
    for word in result.split():
        lower = word.lower()
        words.append(ACRONYMS.get(lower, word[:1].upper() + word[1:].lower()))
    return " ".join(words)


def is_date_value(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    if ISO_DATE_PATTERN.match(value):
        return True
    if SLASH_DATE_PATTERN.match(value):
        for date_format in ("%m/%d/%Y", "%d/%m/%Y", "%m/%d/%y", "%d/%m/%y"):
            try:
                datetime.strptime(value, date_format)
                return True
            except ValueError:
                continue
    return False


def is_url_value(value: Any) -> bool:
    return isinstance(value, str) and bool(URL_VALUE_PATTERN.match(value))


def is_email_value(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_VALUE_PATTERN.match(value))


def infer_field_type(
    field_name: str,
    sample_values: List[Any],
    options: Optional[InferenceOptions] = None,
) -> FieldType:
    """
    Infer how to render a field.

    Overrides win, then naming conventions (hidden, boolean, date, badge,
    url, email, code, in that order), then the first non-null sample.
    """
    options = options or InferenceOptions()
    conventions: FieldConventions = merge_conventions(options.conventions)

    if field_name in options.field_type_overrides:
        return options.field_type_overrides[field_name]

    for patterns, field_type in (
        (conventions.hidden_patterns, FieldType.HIDDEN),
        (conventions.boolean_patterns, FieldType.BOOLEAN),
        (conventions.date_patterns, FieldType.DATE),
        (conventions.badge_patterns, FieldType.BADGE),
        (conventions.url_patterns, FieldType.URL),
        (conventions.email_patterns, FieldType.EMAIL),
        (conventions.code_patterns, FieldType.CODE),
    ):
        if matches_pattern(field_name, patterns):
            return field_type

    present = [value for value in sample_values if value is not None]
    if not present:
        return FieldType.TEXT

    first = present[0]
    if isinstance(first, bool):
        return FieldType.BOOLEAN
    if isinstance(first, (int, float)):
        return FieldType.NUMBER
    if isinstance(first, str):
        if is_date_value(first):
            return FieldType.DATE
        if is_url_value(first):
            return FieldType.URL
        if is_email_value(first):
            return FieldType.EMAIL
        if UUID_PATTERN.match(first) or HASH_PATTERN.match(first):
            return FieldType.CODE

    return FieldType.TEXT


def is_sortable(field_type: FieldType) -> bool:
    return field_type is not FieldType.HIDDEN


def get_unique_keys(items: List[Mapping[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[str]:
    """Keys across the sampled items in first-seen order, metadata excluded."""
    keys: Dict[str, None] = {}
    for item in items[:sample_size]:
        if not isinstance(item, Mapping):
            continue
        for key in item:
            if not key.startswith("_"):
                keys.setdefault(key, None)
    return list(keys)


def infer_columns(items: List[Mapping[str, Any]], options: Optional[InferenceOptions] = None) -> List[InferredColumn]:
    """
    Column definitions for a list of items, in API order.

    Example:
        >>> [column.key for column in infer_columns([{"sessionId": "s1", "ipAddress": "10.0.0.1"}])]
        ['sessionId', 'ipAddress']
    """
    if not items:
        return []

    options = options or InferenceOptions()
    sampled = items[: options.sample_size]

    columns = []
    for index, key in enumerate(get_unique_keys(sampled, options.sample_size)):
        samples = [item[key] for item in sampled if isinstance(item, Mapping) and key in item]
        field_type = infer_field_type(key, samples, options)
        hidden = key in options.hide_fields or (
            field_type is FieldType.HIDDEN and key not in options.show_fields
        )
        columns.append(InferredColumn(
            key=key,
            label=options.label_overrides.get(key) or humanize_label(key),
            type=field_type,
            sortable=is_sortable(field_type),
            hidden=hidden,
            priority=index,
        ))

    return columns


def infer_visible_columns(
    items: List[Mapping[str, Any]],
    options: Optional[InferenceOptions] = None,
) -> List[InferredColumn]:
    return [column for column in infer_columns(items, options) if not column.hidden]


def extract_resource_fields(
    resource: Optional[Mapping[str, Any]],
    options: Optional[InferenceOptions] = None,
) -> List[InferredColumn]:
    """Field definitions for a single resource's domain properties."""
    if not resource:
        return []

    options = options or InferenceOptions()
    if is_hal_object(resource):
        keys = [key for key in resource if key not in RESERVED_KEYS]
    else:
        keys = list(resource)

    fields = []
    for index, key in enumerate(keys):
        field_type = infer_field_type(key, [resource[key]], options)
        fields.append(InferredColumn(
            key=key,
            label=options.label_overrides.get(key) or humanize_label(key),
            type=field_type,
            sortable=is_sortable(field_type),
            hidden=key in options.hide_fields,
            priority=index,
        ))
    return fields
