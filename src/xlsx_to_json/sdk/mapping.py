"""
Field mapping for the export parameters.

Turns the service-reported column list, the requested column indexes and
user overrides into the rename mapping and export order the service expects.
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .config import get_logger
from .models import CustomFieldOverride, FieldMappings

logger = get_logger("mapping")

FIELD_NAME_KEYS = ("name", "id", "title", "original")


def extract_field_name(field: Any) -> str:
    """Best-effort display name for a field descriptor."""
    if isinstance(field, str):
        return field.strip()

    if isinstance(field, dict):
        for key in FIELD_NAME_KEYS:
            value = field.get(key)
            if value:
                return str(value).strip()
        try:
            return json.dumps(field)
        except (TypeError, ValueError):
            return str(field).strip()

    return str(field).strip()


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def create_field_mappings(
    original_fields: Sequence[Any],
    export_indexes: Optional[Iterable[Any]] = None,
    custom_overrides: Optional[Iterable[CustomFieldOverride]] = None,
) -> FieldMappings:
    """
    Build the column rename mapping and the ordered export indexes.

    With no export indexes every column is selected in order. Otherwise the
    given indexes are kept in caller order and those outside the field list
    are dropped. Each selected column is named by its override when one
    exists, else by the name extracted from the field descriptor.

    Args:
        original_fields: Column descriptors reported by the service
        export_indexes: Requested column indexes, empty for all
        custom_overrides: Display names keyed by column index

    Returns:
        FieldMappings with ``mapping`` keyed by the index as a string

    Example:
        >>> result = create_field_mappings(
        ...     ["name", "email", "phone"], [0, 2],
        ...     [CustomFieldOverride(index=2, name="phoneNumber")],
        ... )
        >>> result.mapping
        {'0': 'name', '2': 'phoneNumber'}
        >>> result.export_field_indexes
        [0, 2]
    """
    fields = list(original_fields or [])
    requested = list(export_indexes or [])

    overrides: Dict[int, str] = {}
    for override in custom_overrides or []:
        overrides[override.index] = override.name

    if not requested:
        selected = list(range(len(fields)))
    else:
        selected = [
            index for index in requested if _is_index(index) and 0 <= index < len(fields)
        ]

    mapping: Dict[str, str] = {}
    for index in selected:
        custom_name = overrides.get(index)
        if custom_name and str(custom_name).strip():
            mapping[str(index)] = str(custom_name).strip()
        else:
            mapping[str(index)] = extract_field_name(fields[index])

    return FieldMappings(mapping=mapping, export_field_indexes=selected)


def parse_export_fields(export_fields_raw: Optional[str]) -> List[int]:
    """Parse a comma-separated list of column indexes such as ``"0,3,5"``."""
    if not export_fields_raw:
        return []

    indexes = []
    for part in export_fields_raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            index = int(part)
        except ValueError:
            logger.warning("Ignoring invalid export field index: %r", part)
            continue
        if index >= 0:
            indexes.append(index)
    return indexes


def _parse_index(value: Any) -> Optional[int]:
    if _is_index(value):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_field_overrides(
    field_mapping_raw: Union[str, List[Any], None],
) -> List[CustomFieldOverride]:
    """
    Parse custom field names given as ``[{"index": 0, "name": "model"}, ...]``.

    Accepts the JSON text or an already decoded list. Invalid items are
    skipped with a warning; unparseable input yields no overrides.
    """
    if not field_mapping_raw:
        return []

    if isinstance(field_mapping_raw, str):
        try:
            parsed = json.loads(field_mapping_raw)
        except ValueError as e:
            logger.error("Failed to parse field mapping: %s", e)
            return []
    else:
        parsed = field_mapping_raw

    if not isinstance(parsed, list):
        logger.warning("Field mapping must be an array, got: %s", type(parsed).__name__)
        return []

    overrides = []
    for item in parsed:
        if not isinstance(item, dict):
            logger.warning("Invalid field mapping item: %r", item)
            continue

        index = _parse_index(item.get("index"))
        if index is None:
            logger.warning("Field mapping index must be a number: %r", item)
            continue

        name = item.get("name")
        if not name or not isinstance(name, str):
            logger.warning("Field mapping name must be a string: %r", item)
            continue

        overrides.append(CustomFieldOverride(index=index, name=name))

    return overrides
