"""
Core schema model for entity code generation.

Normalized, immutable representation of the relational schema handed over
by the upstream model collaborator: tables, enums, columns, type
descriptors and column attributes. Generators only ever read these objects.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum as PyEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class ModelError(Exception):
    """Raised when the input model has an unrecognized shape."""

    pass


class AttributeKind(PyEnum):
    """Per-column attribute kinds."""

    NULL = "null"
    DEFAULT = "default"
    PRIMARY_KEY = "primary-key"
    UNIQUE = "unique"
    AUTOINCREMENT = "autoincrement"


class DefaultValueKind(PyEnum):
    """Kinds of typed default-value literals."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"


# Type descriptors


@dataclass(frozen=True)
class CommonType:
    """Plain SQL type without parameters (int, text, timestamp, ...)."""

    type: str
    kind: str = field(default="common", init=False)


@dataclass(frozen=True)
class DecimalType:
    """Decimal type with optional precision and scale."""

    type: str = "decimal"
    precision: Optional[int] = None
    scale: Optional[int] = None
    kind: str = field(default="decimal", init=False)


@dataclass(frozen=True)
class CharsType:
    """Character type with optional maximum length."""

    type: str = "varchar"
    size: Optional[int] = None
    kind: str = field(default="chars", init=False)


@dataclass(frozen=True)
class EnumType:
    """Column type referencing an Enum item by name."""

    enum_name: str
    type: str = field(default="enum", init=False)
    kind: str = field(default="enum", init=False)


@dataclass(frozen=True)
class RelationType:
    """Column type referencing a column (the foreign key) of another table."""

    table_name: str
    foreign_key: str
    type: str = field(default="relation", init=False)
    kind: str = field(default="relation", init=False)


TypeDescriptor = Union[CommonType, DecimalType, CharsType, EnumType, RelationType]


@dataclass(frozen=True)
class DefaultValue:
    """Typed default-value literal. For enum defaults ``data`` is the member name."""

    kind: DefaultValueKind
    data: Any


@dataclass(frozen=True)
class Attribute:
    """A single column attribute (flag or default value)."""

    kind: AttributeKind
    value: Any


@dataclass(frozen=True)
class Column:
    """A named, typed column of a table."""

    name: str
    type: TypeDescriptor
    attributes: Tuple[Attribute, ...] = ()

    def get_attribute(self, kind: AttributeKind) -> Optional[Attribute]:
        """Get the first attribute of the given kind."""
        for attribute in self.attributes:
            if attribute.kind == kind:
                return attribute
        return None

    def has_flag(self, kind: AttributeKind) -> bool:
        """True when the attribute of ``kind`` is present and truthy."""
        attribute = self.get_attribute(kind)
        return bool(attribute and attribute.value)


@dataclass(frozen=True)
class Table:
    """A named relation with an ordered list of columns."""

    name: str
    columns: Tuple[Column, ...] = ()
    kind: str = field(default="table", init=False)

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None


@dataclass(frozen=True)
class Enum:
    """A named enumeration of string members."""

    name: str
    items: Tuple[str, ...] = ()
    kind: str = field(default="enum", init=False)


Item = Union[Table, Enum]


class ModelIndex:
    """
    Name lookup over a full item list, built once per compile call.

    The first declaration of a name wins, matching a linear first-match
    search over the item sequence.
    """

    def __init__(self, items):
        self.items: Tuple[Item, ...] = tuple(items)
        self._tables: Dict[str, Table] = {}
        self._enums: Dict[str, Enum] = {}

        for item in self.items:
            if item.kind == "table":
                self._tables.setdefault(item.name, item)
            elif item.kind == "enum":
                self._enums.setdefault(item.name, item)

    @property
    def tables(self) -> List[Table]:
        """All tables in input order."""
        return [item for item in self.items if item.kind == "table"]

    @property
    def enums(self) -> List[Enum]:
        """All enums in input order."""
        return [item for item in self.items if item.kind == "enum"]

    def table(self, name: str) -> Optional[Table]:
        return self._tables.get(name)

    def enum(self, name: str) -> Optional[Enum]:
        return self._enums.get(name)


_ISO_MILLIS_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")


def is_iso_date(value: str) -> bool:
    """Check for an ISO-8601 UTC timestamp with millisecond precision."""
    if not isinstance(value, str) or not _ISO_MILLIS_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ")
    except ValueError:
        return False
    return True


# Conversion from the upstream plain-data model


def _convert_type(data: Dict[str, Any], where: str) -> TypeDescriptor:
    kind = data.get("kind")

    if kind == "common":
        return CommonType(type=data["type"])
    if kind == "decimal":
        return DecimalType(
            type=data.get("type", "decimal"),
            precision=data.get("precision"),
            scale=data.get("scale"),
        )
    if kind == "chars":
        return CharsType(type=data.get("type", "varchar"), size=data.get("size"))
    if kind == "enum":
        return EnumType(enum_name=data["enum_name"])
    if kind == "relation":
        return RelationType(table_name=data["table_name"], foreign_key=data["foreign_key"])

    raise ModelError(f"Unknown type kind {kind!r} on {where}")


def _convert_default_value(data: Dict[str, Any], where: str) -> DefaultValue:
    try:
        kind = DefaultValueKind(data.get("type"))
    except ValueError:
        raise ModelError(f"Unknown default value type {data.get('type')!r} on {where}")

    if kind == DefaultValueKind.ENUM:
        return DefaultValue(kind=kind, data=data["enum_value"])
    return DefaultValue(kind=kind, data=data["data"])


def _convert_attribute(data: Dict[str, Any], where: str) -> Attribute:
    try:
        kind = AttributeKind(data.get("type"))
    except ValueError:
        raise ModelError(f"Unknown attribute {data.get('type')!r} on {where}")

    if kind == AttributeKind.DEFAULT:
        return Attribute(kind=kind, value=_convert_default_value(data["value"], where))

    # A flag without a value is set
    value = data.get("value", True)
    if not isinstance(value, bool):
        raise ModelError(
            f"Attribute {kind.value!r} on {where} must be a boolean, got {value!r}"
        )
    return Attribute(kind=kind, value=value)


def _convert_column(data: Dict[str, Any], table_name: str) -> Column:
    where = f"{table_name}.{data.get('name')}"
    return Column(
        name=data["name"],
        type=_convert_type(data["type"], where),
        attributes=tuple(
            _convert_attribute(attr, where) for attr in data.get("attributes") or []
        ),
    )


def load_items(data: List[Dict[str, Any]]) -> List[Item]:
    """
    Convert the upstream plain-data model into model items.

    Args:
        data: List of item dicts, each tagged with ``type`` ("table" or "enum")

    Returns:
        List of Table / Enum items in input order

    Raises:
        ModelError: If an item, type, attribute or default has an unknown tag
            or lacks a required key
    """
    items: List[Item] = []

    for entry in data:
        item_type = entry.get("type")
        try:
            if item_type == "table":
                items.append(
                    Table(
                        name=entry["name"],
                        columns=tuple(
                            _convert_column(col, entry["name"])
                            for col in entry.get("columns") or []
                        ),
                    )
                )
            elif item_type == "enum":
                items.append(
                    Enum(name=entry["name"], items=tuple(entry.get("items") or []))
                )
            else:
                raise ModelError(f"Unknown item type: {item_type!r}")
        except KeyError as e:
            raise ModelError(
                f"Missing key {e} in {item_type} {entry.get('name')!r}"
            ) from e

    logger.debug("Loaded %d items", len(items))
    return items


def load_items_from_file(path: Union[str, Path]) -> List[Item]:
    """Load model items from a JSON file."""
    path = Path(path)

    if not path.exists():
        raise ModelError(f"Model file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ModelError(f"Invalid JSON in model file {path}: {e}") from e

    if not isinstance(data, list):
        raise ModelError(f"Model file must contain a JSON array: {path}")

    return load_items(data)
