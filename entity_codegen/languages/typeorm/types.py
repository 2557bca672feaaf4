"""
TypeScript type system for TypeORM entity generation.

Maps column type descriptors to the TypeScript value types used on
generated entity fields.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ...core.generator import UnsupportedTypeError
from ...core.model import TypeDescriptor


# (kind, subtype) -> TypeScript value type
SCALAR_TYPE_MAP: Dict[Tuple[str, str], str] = {
    ("common", "text"): "string",
    ("common", "varchar"): "string",
    ("common", "int"): "number",
    ("common", "float"): "number",
    ("common", "bigint"): "number",
    ("common", "tinyint"): "number",
    ("common", "smallint"): "number",
    ("common", "real"): "number",
    ("common", "decimal"): "number",
    ("common", "boolean"): "boolean",
    ("common", "timestamp"): "Date",
    ("common", "date"): "Date",
    ("decimal", "decimal"): "number",
    ("chars", "varchar"): "string",
}


@dataclass
class TypeMapperConfig:
    """Configuration for TypeScript type mapping behavior."""

    # Overrides keyed by "kind.subtype", e.g. {"common.timestamp": "string"}
    type_overrides: Dict[str, str] = field(default_factory=dict)


class TypeScriptTypeMapper:
    """
    Maps column type descriptors to TypeScript types.

    The mapping is total: every supported kind/subtype pair yields a type
    name and anything else raises UnsupportedTypeError, so a generated
    field can never end up without a type.
    """

    def __init__(self, config: Optional[TypeMapperConfig] = None):
        """Initialize with type configuration."""
        self.config = config or TypeMapperConfig()

    def map_type(self, descriptor: TypeDescriptor) -> str:
        """
        Map a type descriptor to a TypeScript type name.

        Enum and relation descriptors map to the referenced item's name.

        Raises:
            UnsupportedTypeError: For an unrecognized kind/subtype pair
        """
        kind = descriptor.kind
        subtype = descriptor.type

        if kind == "enum" and subtype == "enum":
            return descriptor.enum_name
        if kind == "relation" and subtype == "relation":
            return descriptor.table_name

        scalar = SCALAR_TYPE_MAP.get((kind, subtype))
        if scalar is None:
            raise UnsupportedTypeError(kind, subtype)

        return self.config.type_overrides.get(f"{kind}.{subtype}", scalar)

    def is_supported(self, descriptor: TypeDescriptor) -> bool:
        """Check whether a descriptor has a mapping."""
        if descriptor.kind in ("enum", "relation"):
            return descriptor.type == descriptor.kind
        return (descriptor.kind, descriptor.type) in SCALAR_TYPE_MAP
