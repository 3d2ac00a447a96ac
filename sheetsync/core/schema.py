"""Database schema model — normalizes raw property definitions.

A raw schema is the mapping a document database returns (or accepts) for a
database: an optional ``id`` / ``database_id`` plus ``properties``, where each
property definition names its type either explicitly (``{"type": "relation",
"relation": {...}}``) or implicitly as its sole key (``{"select": {...}}``).

Normalization happens once, here, so decoders and encoders only ever see an
explicit type tag.
"""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from sheetsync.core.errors import UnsupportedTypeError

logger = logging.getLogger(__name__)


class PropertyType(str, Enum):
    TITLE = "title"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    FILES = "files"
    RELATION = "relation"
    CREATED_TIME = "created_time"
    CREATED_BY = "created_by"
    LAST_EDITED_TIME = "last_edited_time"
    LAST_EDITED_BY = "last_edited_by"


READ_ONLY_TYPES = {
    PropertyType.CREATED_TIME,
    PropertyType.CREATED_BY,
    PropertyType.LAST_EDITED_TIME,
    PropertyType.LAST_EDITED_BY,
}

# Keys that may sit beside the variant key without being a type tag
_DESCRIPTIVE_KEYS = {"id", "name", "description"}


def to_property_type(type_tag: Any, field: Optional[str] = None) -> PropertyType:
    """Coerce a type tag to PropertyType, or raise UnsupportedTypeError."""
    if isinstance(type_tag, PropertyType):
        return type_tag
    try:
        return PropertyType(type_tag)
    except ValueError:
        raise UnsupportedTypeError(type_tag, field) from None


class PropertyDef(BaseModel):
    name: str
    type: str
    options: Optional[list[str]] = None

    @property
    def property_type(self) -> PropertyType:
        return to_property_type(self.type, self.name)

    @property
    def is_title(self) -> bool:
        return self.type == PropertyType.TITLE.value


class DatabaseSchema(BaseModel):
    id: Optional[str] = None
    database_id: Optional[str] = None
    properties: dict[str, PropertyDef] = {}

    @property
    def parent_id(self) -> Optional[str]:
        """Database that new pages are created under."""
        return self.id or self.database_id

    @property
    def title_property(self) -> Optional[PropertyDef]:
        for prop in self.properties.values():
            if prop.is_title:
                return prop
        return None


def resolve_type_tag(definition: dict, field: Optional[str] = None) -> str:
    """Determine the type tag of a raw property definition.

    An explicit ``type`` wins. A present-but-empty ``type`` (common for the
    primary title column) falls back to the variant key, then ``rich_text``.
    Without ``type`` the sole non-descriptive key is the tag.
    """
    variant_keys = [k for k in definition if k != "type" and k not in _DESCRIPTIVE_KEYS]

    if "type" in definition:
        explicit = definition["type"]
        if explicit:
            return str(explicit)
        if len(variant_keys) == 1:
            return variant_keys[0]
        return PropertyType.RICH_TEXT.value

    if len(variant_keys) != 1:
        raise UnsupportedTypeError("|".join(sorted(variant_keys)), field)
    return variant_keys[0]


def _option_names(raw_options: Any) -> list[str]:
    names = []
    for option in raw_options:
        if isinstance(option, dict):
            names.append(str(option.get("name")))
        else:
            names.append(str(option))
    return names


def _parse_property(name: str, definition: dict) -> PropertyDef:
    try:
        type_tag = resolve_type_tag(definition, name)
    except UnsupportedTypeError as e:
        # Kept unresolved; fails once a decode or encode touches it
        logger.warning(f"Property '{name}': {e}")
        type_tag = e.type_tag

    options = None
    if type_tag in (PropertyType.SELECT.value, PropertyType.MULTI_SELECT.value):
        config = definition.get(type_tag)
        if isinstance(config, dict) and config.get("options") is not None:
            options = _option_names(config["options"])

    return PropertyDef(name=name, type=type_tag, options=options)


def parse_schema(raw: Any) -> DatabaseSchema:
    """Normalize a raw database schema mapping into a DatabaseSchema.

    Null property definitions are not real properties and are dropped.
    """
    if isinstance(raw, DatabaseSchema):
        return raw
    if not isinstance(raw, dict):
        raise ValueError("Schema must be a mapping")

    properties = {}
    for name, definition in (raw.get("properties") or {}).items():
        if definition is None:
            logger.warning(f"Property '{name}' has no definition, skipping")
            continue
        if not isinstance(definition, dict):
            raise ValueError(f"Property '{name}': definition must be a mapping")
        properties[name] = _parse_property(name, definition)

    return DatabaseSchema(
        id=raw.get("id"),
        database_id=raw.get("database_id"),
        properties=properties,
    )
