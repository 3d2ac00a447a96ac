"""Records, grids and page payloads exchanged with the outside world."""

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel

from sheetsync.core.decoder import Value

ID_KEY = "$id"
ICON_KEY = "$icon"
COVER_KEY = "$cover"
METADATA_KEYS = (ID_KEY, ICON_KEY, COVER_KEY)
METADATA_PREFIX = "$"


@dataclass
class SheetGrid:
    """A header row plus data rows, padded to the widest row."""
    header: list[Any]
    rows: list[list[Any]] = field(default_factory=list)

    @classmethod
    def from_values(cls, values: list[list[Any]]) -> "SheetGrid":
        """Split a value range whose first row is the header."""
        if not values:
            return cls(header=[], rows=[])
        width = max(len(row) for row in values)
        padded = [list(row) + [None] * (width - len(row)) for row in values]
        return cls(header=padded[0], rows=padded[1:])


@dataclass(frozen=True)
class RecordMetadata:
    """Reserved fields with fixed meaning regardless of schema."""
    id: Optional[str] = None
    icon: Optional[str] = None
    cover: Optional[str] = None
    # Which reserved columns were present; drives key presence in to_datum()
    present: frozenset = frozenset()


@dataclass
class Record:
    """One sheet row: metadata plus schema-driven property values.

    ``properties`` only holds keys whose column exists in the header.
    """
    metadata: RecordMetadata = field(default_factory=RecordMetadata)
    properties: dict[str, Value] = field(default_factory=dict)

    def to_datum(self) -> dict[str, Any]:
        datum: dict[str, Any] = {}
        for key, value in (
            (ID_KEY, self.metadata.id),
            (ICON_KEY, self.metadata.icon),
            (COVER_KEY, self.metadata.cover),
        ):
            if key in self.metadata.present:
                datum[key] = value
        datum.update(self.properties)
        return datum

    @classmethod
    def from_datum(cls, datum: dict[str, Any]) -> "Record":
        """Split a flat datum into metadata and properties.

        Unknown ``$``-prefixed keys are reserved and dropped.
        """
        metadata = RecordMetadata(
            id=datum.get(ID_KEY),
            icon=datum.get(ICON_KEY),
            cover=datum.get(COVER_KEY),
            present=frozenset(k for k in METADATA_KEYS if k in datum),
        )
        properties = {
            k: v for k, v in datum.items() if not k.startswith(METADATA_PREFIX)
        }
        return cls(metadata=metadata, properties=properties)


class PagePayload(BaseModel):
    """Body of a page create or update request."""
    page_id: Optional[str] = None
    parent: Optional[dict[str, str]] = None
    archived: Optional[bool] = None
    icon: Optional[dict[str, Any]] = None
    cover: Optional[dict[str, Any]] = None
    properties: dict[str, dict[str, Any]] = {}

    @property
    def is_update(self) -> bool:
        return self.page_id is not None

    def to_request(self) -> dict[str, Any]:
        """Request body without the page id and unset fields."""
        return self.model_dump(exclude={"page_id"}, exclude_none=True)
