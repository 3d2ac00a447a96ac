"""Schema Loader — loads database schemas stored as YAML files.

A schema file holds the same mapping a document database returns for a
database (``id`` / ``database_id`` and ``properties``). JSON files load
too, JSON being a subset of YAML.
"""

import logging
from pathlib import Path

import yaml

from sheetsync.core.config import settings
from sheetsync.core.schema import DatabaseSchema, parse_schema

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".yaml", ".yml", ".json")


def _schemas_dir() -> Path:
    schemas_dir = Path(settings.schemas_dir)
    if not schemas_dir.is_absolute():
        schemas_dir = settings.project_root / schemas_dir
    return schemas_dir


def load_schema_file(path: Path) -> DatabaseSchema:
    """Parse and normalize a schema file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid schema format in {path}: expected a mapping")

    schema = parse_schema(raw)
    logger.info(f"Loaded schema from {path} ({len(schema.properties)} properties)")
    return schema


def load_schema(name: str) -> DatabaseSchema:
    """Load {schemas_dir}/{name}.yaml (or .yml / .json)."""
    schemas_dir = _schemas_dir()
    for suffix in SCHEMA_SUFFIXES:
        path = schemas_dir / f"{name}{suffix}"
        if path.exists():
            return load_schema_file(path)

    raise FileNotFoundError(f"No schema file found for '{name}' in {schemas_dir}")


def list_schemas() -> list[str]:
    """List available schema names. Names starting with '_' are hidden."""
    schemas_dir = _schemas_dir()
    if not schemas_dir.exists():
        return []
    return sorted(
        p.stem for p in schemas_dir.iterdir()
        if p.suffix in SCHEMA_SUFFIXES and not p.stem.startswith("_")
    )
