"""Record assembler — sheet rows to records, and records to page payloads.

Decode: header + rows + schema -> list of Record. Each row is looked up by
column name and decoded per the property's type, optionally validated
against declared select / multi-select options.

Encode: Record + schema -> PagePayload for a create or update request.

Both directions are all-or-nothing: the first error aborts the batch.
"""

import logging
from typing import Any, Optional, Union

from sheetsync.core.config import settings
from sheetsync.core.decoder import decode_value
from sheetsync.core.encoder import encode_value
from sheetsync.core.errors import MissingParentError, MissingRequiredColumnError
from sheetsync.core.models import (
    COVER_KEY,
    ICON_KEY,
    ID_KEY,
    METADATA_KEYS,
    PagePayload,
    Record,
    RecordMetadata,
    SheetGrid,
)
from sheetsync.core.schema import DatabaseSchema, parse_schema
from sheetsync.core.validator import validate_value

logger = logging.getLogger(__name__)


def _build_header_map(header: list[Any]) -> dict[str, int]:
    """Map column names to their 0-based index. The first occurrence wins."""
    header_map: dict[str, int] = {}
    for i, h in enumerate(header):
        if h is None:
            continue
        name = str(h).strip()
        if name in header_map:
            logger.warning(f"Duplicate column '{name}' at index {i}, using index {header_map[name]}")
            continue
        header_map[name] = i
    return header_map


def _get_cell(row: list[Any], index: int) -> Any:
    if index < len(row):
        return row[index]
    return None


def _decode_row(
    row: list[Any],
    header_map: dict[str, int],
    schema: DatabaseSchema,
    validate: bool,
) -> Record:
    present = []
    meta_values: dict[str, Any] = {}
    for key in METADATA_KEYS:
        idx = header_map.get(key)
        if idx is not None:
            present.append(key)
            meta_values[key] = _get_cell(row, idx)

    metadata = RecordMetadata(
        id=meta_values.get(ID_KEY),
        icon=meta_values.get(ICON_KEY),
        cover=meta_values.get(COVER_KEY),
        present=frozenset(present),
    )

    properties = {}
    for name, prop in schema.properties.items():
        idx = header_map.get(name)
        if idx is None:
            continue
        value = decode_value(_get_cell(row, idx), prop.property_type)
        if validate:
            validate_value(prop, value)
        properties[name] = value

    return Record(metadata=metadata, properties=properties)


def parse_values(
    header: list[Any],
    values: list[list[Any]],
    schema: Union[DatabaseSchema, dict],
    validate: Optional[bool] = None,
) -> list[Record]:
    """Decode data rows aligned to ``header`` into records.

    Properties whose column is missing from the header are left out of the
    record entirely. ``validate=None`` falls back to settings.validate_options.
    """
    schema = parse_schema(schema)
    if validate is None:
        validate = settings.validate_options

    header_map = _build_header_map(header)

    title = schema.title_property
    if settings.require_title_column and title is not None and title.name not in header_map:
        raise MissingRequiredColumnError(title.name)

    records = [_decode_row(row, header_map, schema, validate) for row in values]
    logger.debug(f"Decoded {len(records)} rows ({len(header_map)} columns, validate={validate})")
    return records


def parse_data(
    data: Union[dict, list, SheetGrid, None],
    schema: Union[DatabaseSchema, dict],
    validate: Optional[bool] = None,
) -> list[Record]:
    """Decode a value range (``{"values": [...]}``), a bare row list or a
    SheetGrid whose first row is the header.
    """
    if isinstance(data, SheetGrid):
        grid = data
    else:
        values = data.get("values") if isinstance(data, dict) else data
        if not values:
            return []
        grid = SheetGrid.from_values(values)

    return parse_values(grid.header, grid.rows, schema, validate=validate)


def _init_payload(metadata: RecordMetadata, schema: DatabaseSchema) -> PagePayload:
    if metadata.id:
        return PagePayload(page_id=metadata.id, archived=False)
    if schema.parent_id:
        return PagePayload(parent={"database_id": schema.parent_id})
    raise MissingParentError()


def build_page_parameters(
    data: Union[Record, dict],
    schema: Union[DatabaseSchema, dict],
) -> PagePayload:
    """Encode one record as a page create (no ``$id``) or update payload.

    Keys unknown to the schema are skipped, as are values that encode to
    nothing (None, blank select / url, read-only properties).
    """
    record = data if isinstance(data, Record) else Record.from_datum(data)
    schema = parse_schema(schema)

    payload = _init_payload(record.metadata, schema)

    if record.metadata.icon:
        payload.icon = {"type": "emoji", "emoji": record.metadata.icon}
    if record.metadata.cover:
        payload.cover = {"type": "external", "external": {"url": record.metadata.cover}}

    properties = {}
    for name, value in record.properties.items():
        prop = schema.properties.get(name)
        if prop is None:
            logger.debug(f"Skipping '{name}': not in schema")
            continue
        if value is None:
            continue
        encoded = encode_value(value, prop.property_type)
        if encoded is not None:
            properties[name] = encoded

    payload.properties = properties
    logger.debug(
        f"Built {'update' if payload.is_update else 'create'} payload "
        f"with {len(properties)} of {len(record.properties)} properties"
    )
    return payload
