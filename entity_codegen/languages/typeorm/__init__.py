"""
TypeORM code generator module.

Generates TypeScript entity classes and enums for TypeORM from the
relational schema model.
"""

from .generator import TypeORMGenerator, create_typeorm_generator
from .columns import ColumnBuilder, ColumnOutput, format_default_value, is_required
from .dependencies import resolve_table_dependencies
from .paths import model_file_path, import_path
from .types import TypeScriptTypeMapper, TypeMapperConfig, SCALAR_TYPE_MAP

__all__ = [
    # Generator
    "TypeORMGenerator",
    "create_typeorm_generator",
    # Columns
    "ColumnBuilder",
    "ColumnOutput",
    "format_default_value",
    "is_required",
    # Dependencies and paths
    "resolve_table_dependencies",
    "model_file_path",
    "import_path",
    # Type system
    "TypeScriptTypeMapper",
    "TypeMapperConfig",
    "SCALAR_TYPE_MAP",
]
