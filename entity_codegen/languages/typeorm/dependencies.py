"""Cross-file import resolution for generated entities."""

from typing import List

from ...core.generator import EnumNotFoundError, TableNotFoundError
from ...core.model import ModelIndex, Table
from ...logging_config import get_logger
from .paths import import_path

logger = get_logger(__name__)


def resolve_table_dependencies(
    table: Table, index: ModelIndex, model_dir: str = "./model"
) -> List[str]:
    """
    Import statements a table's entity file needs.

    One statement per enum- or relation-typed column, pointing at the
    referenced item's generated file. Statements are deduplicated by exact
    text and keep first-seen order.

    Raises:
        EnumNotFoundError: If an enum column references a missing enum
        TableNotFoundError: If a relation column references a missing table
    """
    statements = []
    seen = set()

    for column in table.columns:
        kind = column.type.kind

        if kind == "enum":
            target = index.enum(column.type.enum_name)
            if target is None:
                raise EnumNotFoundError(
                    f'Enum "{column.name}" is not available on models '
                    f'(enum "{column.type.enum_name}" referenced by {table.name}.{column.name})',
                    table_name=table.name,
                    column_name=column.name,
                    reference=column.type.enum_name,
                )
        elif kind == "relation":
            target = index.table(column.type.table_name)
            if target is None:
                raise TableNotFoundError(
                    f'Table "{column.name}" is not available on models '
                    f'(table "{column.type.table_name}" referenced by {table.name}.{column.name})',
                    table_name=table.name,
                    column_name=column.name,
                    reference=column.type.table_name,
                )
        else:
            continue

        statement = f"import {{ {target.name} }} from '{import_path(target, model_dir)}'"
        if statement not in seen:
            seen.add(statement)
            statements.append(statement)

    logger.debug("%s depends on %d items", table.name, len(statements))
    return statements
