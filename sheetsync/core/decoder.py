"""Cell decoder — turns a raw grid cell into a typed record value.

Cells are strings, native scalars from unformatted grid reads, or None for
missing trailing cells. ``None`` in a record means "not set".
"""

import math
from typing import Any, Optional, Union

from sheetsync.core.errors import TypeMismatchError
from sheetsync.core.schema import PropertyType, to_property_type

DateRange = dict[str, str]
Value = Union[str, float, bool, list[str], DateRange, None]

DATE_RANGE_DELIMITER = "→"

_TEXT_TYPES = {
    PropertyType.TITLE,
    PropertyType.RICH_TEXT,
    PropertyType.EMAIL,
    PropertyType.PHONE_NUMBER,
    PropertyType.CREATED_BY,
    PropertyType.LAST_EDITED_BY,
}

# Blank means "unset" for these, never ''
_OPTIONAL_TEXT_TYPES = {
    PropertyType.SELECT,
    PropertyType.URL,
    PropertyType.CREATED_TIME,
    PropertyType.LAST_EDITED_TIME,
}

_LIST_TYPES = {
    PropertyType.MULTI_SELECT,
    PropertyType.FILES,
    PropertyType.RELATION,
}


def _split_list(cell: Any) -> list[str]:
    if not cell:
        return []
    return [token.strip() for token in str(cell).split(",") if token.strip()]


def _render_text(cell: Any) -> str:
    return cell if isinstance(cell, str) else str(cell)


def _parse_number(cell: Any) -> Optional[float]:
    if cell is None:
        return None
    if isinstance(cell, (int, float)) and not isinstance(cell, bool):
        number = float(cell)
    else:
        text = str(cell).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise TypeMismatchError(PropertyType.NUMBER.value, "numeric", cell) from None
    # nan / inf have no JSON representation
    if not math.isfinite(number):
        raise TypeMismatchError(PropertyType.NUMBER.value, "finite numeric", cell)
    return number


def _parse_date(cell: Any) -> Optional[DateRange]:
    if not cell:
        return None
    text = str(cell)
    if DATE_RANGE_DELIMITER in text:
        parts = text.split(DATE_RANGE_DELIMITER)
        return {"start": parts[0].strip(), "end": parts[1].strip()}
    return {"start": text}


def decode_value(cell: Any, type_tag: Union[PropertyType, str]) -> Value:
    """Decode one cell according to its property type."""
    property_type = to_property_type(type_tag)

    if property_type in _TEXT_TYPES:
        return "" if cell is None else _render_text(cell)

    if property_type in _OPTIONAL_TEXT_TYPES:
        if cell is None or cell == "":
            return None
        return _render_text(cell)

    if property_type == PropertyType.NUMBER:
        return _parse_number(cell)

    if property_type == PropertyType.CHECKBOX:
        return cell is True or cell == "TRUE"

    if property_type in _LIST_TYPES:
        return _split_list(cell)

    # PropertyType.DATE
    return _parse_date(cell)
