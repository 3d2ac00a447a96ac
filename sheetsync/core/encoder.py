"""Property encoder — turns a typed record value into a wire property.

Each wire property is tagged with its own type name, e.g.
``{"type": "checkbox", "checkbox": True}``. ``None`` means "omit the
property from the page payload".
"""

from typing import Any, Optional, Union

from sheetsync.core.dates import normalize_date
from sheetsync.core.decoder import Value
from sheetsync.core.errors import ShapeError, TypeMismatchError
from sheetsync.core.schema import READ_ONLY_TYPES, PropertyType, to_property_type

WireProperty = dict[str, Any]


def _text_runs(content: str) -> list[dict]:
    return [{"type": "text", "text": {"content": content}}]


def _external_file(url: str) -> dict:
    return {"type": "external", "name": url, "external": {"url": url}}


def _require(value: Any, expected: Union[type, tuple], label: str, type_tag: str) -> None:
    # bool is an int subclass but never a number here
    if isinstance(value, bool) and expected is not bool:
        raise TypeMismatchError(type_tag, label, value)
    if not isinstance(value, expected):
        raise TypeMismatchError(type_tag, label, value)


def _encode_date(value: Any, type_tag: str) -> dict:
    if not isinstance(value, dict):
        raise TypeMismatchError(type_tag, "a date range", value)
    if "start" not in value or not value["start"]:
        raise ShapeError(f"value should be {{start: str, end?: str}} for {type_tag}")

    date_value = {"start": normalize_date(value["start"])}
    if value.get("end"):
        date_value["end"] = normalize_date(value["end"])
    return date_value


def encode_value(value: Value, type_tag: Union[PropertyType, str]) -> Optional[WireProperty]:
    """Encode one record value for the given property type."""
    if value is None:
        return None

    property_type = to_property_type(type_tag)
    tag = property_type.value

    if property_type in READ_ONLY_TYPES:
        return None

    if property_type in (PropertyType.TITLE, PropertyType.RICH_TEXT):
        _require(value, str, "string", tag)
        return {"type": tag, tag: _text_runs(value)}

    if property_type == PropertyType.SELECT:
        _require(value, str, "string", tag)
        if not value:
            return None
        return {"type": tag, tag: {"name": value}}

    if property_type == PropertyType.URL:
        _require(value, str, "string", tag)
        # '' is rejected by the API for url
        if not value:
            return None
        return {"type": tag, tag: value}

    if property_type in (PropertyType.EMAIL, PropertyType.PHONE_NUMBER):
        _require(value, str, "string", tag)
        return {"type": tag, tag: value}

    if property_type == PropertyType.NUMBER:
        _require(value, (int, float), "number", tag)
        return {"type": tag, tag: value}

    if property_type == PropertyType.CHECKBOX:
        _require(value, bool, "boolean", tag)
        return {"type": tag, tag: value}

    if property_type == PropertyType.MULTI_SELECT:
        _require(value, (list, tuple), "array", tag)
        return {"type": tag, tag: [{"name": e} for e in value]}

    if property_type == PropertyType.RELATION:
        _require(value, (list, tuple), "array", tag)
        return {"type": tag, tag: [{"id": e} for e in value]}

    if property_type == PropertyType.FILES:
        _require(value, (list, tuple), "array", tag)
        return {"type": tag, tag: [_external_file(e) for e in value]}

    # PropertyType.DATE
    return {"type": tag, tag: _encode_date(value, tag)}
