"""
Column emission for TypeORM entities.

One strategy per column type kind. Every strategy resolves the column's
attributes, emits the TypeORM decorators and the TypeScript field
declaration, and reports the field metadata alongside the lines.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ...core.generator import (
    ForeignKeyNotFoundError,
    TableNotFoundError,
    UnsupportedTypeError,
)
from ...core.model import (
    AttributeKind,
    Column,
    DefaultValue,
    DefaultValueKind,
    ModelIndex,
    Table,
)
from .types import TypeScriptTypeMapper


@dataclass(frozen=True)
class ColumnOutput:
    """Emitted lines of one column plus the metadata of its scalar field."""

    lines: Tuple[str, ...]
    field_name: str
    field_type: str
    required: bool
    navigation_field: Optional[str] = None
    navigation_type: Optional[str] = None


def format_default_value(default_value: DefaultValue) -> str:
    """
    Serialize a default value as a TypeScript literal.

    Strings and enum members are single-quoted, numbers are bare numerals
    (non-finite floats use the JavaScript spellings NaN and Infinity).
    Booleans are emitted as quoted strings ('true' / 'false').
    """
    kind = default_value.kind
    data = default_value.data

    if kind == DefaultValueKind.STRING:
        return _quote(str(data))
    if kind == DefaultValueKind.NUMBER:
        if isinstance(data, float):
            if math.isnan(data):
                return "NaN"
            if math.isinf(data):
                return "Infinity" if data > 0 else "-Infinity"
            if data.is_integer():
                return str(int(data))
        return str(data)
    if kind == DefaultValueKind.BOOLEAN:
        return _quote("true" if data else "false")
    if kind == DefaultValueKind.ENUM:
        return _quote(str(data))

    raise ValueError(f"Unknown default value kind: {kind!r}")


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def is_required(column: Column) -> bool:
    """
    Whether the column is declared non-nullable.

    An explicit null attribute decides. Without one, primary keys are
    required and every other column is nullable.
    """
    null_attr = column.get_attribute(AttributeKind.NULL)
    if null_attr is not None:
        return not null_attr.value
    return column.has_flag(AttributeKind.PRIMARY_KEY)


class ColumnBuilder:
    """Builds the TypeORM declaration of a single column."""

    def __init__(
        self,
        type_mapper: TypeScriptTypeMapper,
        index: ModelIndex,
        indent_size: int = 2,
        navigation_prefix: str = "otm_",
    ):
        self.type_mapper = type_mapper
        self.index = index
        self.indent = " " * indent_size
        self.navigation_prefix = navigation_prefix

        self._strategies = {
            "common": self._build_common,
            "decimal": self._build_decimal,
            "chars": self._build_chars,
            "enum": self._build_enum,
            "relation": self._build_relation,
        }

    def build(self, column: Column, table: Table) -> ColumnOutput:
        """Dispatch on the column's type kind."""
        strategy = self._strategies.get(column.type.kind)
        if strategy is None:
            raise UnsupportedTypeError(column.type.kind, column.type.type)
        return strategy(column, table)

    # Strategies

    def _build_common(self, column: Column, table: Table) -> ColumnOutput:
        options = [f"type: '{column.type.type}',"]
        return self._build_scalar(column, options)

    def _build_decimal(self, column: Column, table: Table) -> ColumnOutput:
        options = [f"type: '{column.type.type}',"]
        if column.type.precision is not None:
            options.append(f"precision: {column.type.precision},")
        if column.type.scale is not None:
            options.append(f"scale: {column.type.scale},")
        return self._build_scalar(column, options)

    def _build_chars(self, column: Column, table: Table) -> ColumnOutput:
        options = [f"type: '{column.type.type}',"]
        if column.type.size is not None:
            options.append(f"length: {column.type.size},")
        return self._build_scalar(column, options)

    def _build_enum(self, column: Column, table: Table) -> ColumnOutput:
        options = ["type: 'enum',", f"enum: {column.type.enum_name},"]
        return self._build_scalar(column, options)

    def _build_relation(self, column: Column, table: Table) -> ColumnOutput:
        relation = column.type
        where = f"{table.name}.{column.name}"

        foreign_table = self.index.table(relation.table_name)
        if foreign_table is None:
            raise TableNotFoundError(
                f'Table "{relation.table_name}" not found on relation "{where}"',
                table_name=table.name,
                column_name=column.name,
                reference=relation.table_name,
            )

        foreign_column = foreign_table.get_column(relation.foreign_key)
        if foreign_column is None:
            raise ForeignKeyNotFoundError(
                f'Column "{relation.foreign_key}" on foreign table '
                f'"{relation.table_name}" not found on relation "{where}"',
                table_name=table.name,
                column_name=column.name,
                reference=f"{relation.table_name}.{relation.foreign_key}",
            )

        required = is_required(column)
        nullable = self._bool(not required)
        marker = self._marker(required)
        navigation_field = f"{self.navigation_prefix}{column.name}"
        field_type = self.type_mapper.map_type(foreign_column.type)

        lines = [
            f"@ManyToOne(() => {foreign_table.name}, x => x.{foreign_column.name}, "
            f"{{ nullable: {nullable} }})",
            f"@JoinColumn({{ name: '{column.name}' }})",
            f"{navigation_field}{marker}: {foreign_table.name};",
            *self._column_decorator(
                [
                    f"name: '{column.name}',",
                    f"type: '{foreign_column.type.type}',",
                    f"nullable: {nullable},",
                ]
            ),
            f"{column.name}{marker}: {field_type};",
        ]

        return ColumnOutput(
            lines=tuple(lines),
            field_name=column.name,
            field_type=field_type,
            required=required,
            navigation_field=navigation_field,
            navigation_type=foreign_table.name,
        )

    # Shared emission

    def _build_scalar(self, column: Column, options: List[str]) -> ColumnOutput:
        """Emit @Column, primary key decorators and the field line."""
        required = is_required(column)
        default_attr = column.get_attribute(AttributeKind.DEFAULT)

        options = options + [f"nullable: {self._bool(not required)},"]
        if default_attr is not None:
            options.append(f"default: {format_default_value(default_attr.value)},")

        lines = self._column_decorator(options)

        if column.has_flag(AttributeKind.PRIMARY_KEY):
            if column.has_flag(AttributeKind.AUTOINCREMENT):
                lines.append("@PrimaryGeneratedColumn('increment')")
            else:
                lines.append("@PrimaryColumn()")

        # AttributeKind.UNIQUE has no TypeORM emission

        field_type = self.type_mapper.map_type(column.type)
        lines.append(f"{column.name}{self._marker(required)}: {field_type};")

        return ColumnOutput(
            lines=tuple(lines),
            field_name=column.name,
            field_type=field_type,
            required=required,
        )

    def _column_decorator(self, options: List[str]) -> List[str]:
        return ["@Column({", *(self.indent + option for option in options), "})"]

    @staticmethod
    def _bool(value: bool) -> str:
        return "true" if value else "false"

    @staticmethod
    def _marker(required: bool) -> str:
        return "!" if required else "?"
