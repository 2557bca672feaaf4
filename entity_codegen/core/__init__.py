"""
Core code generation components.

Provides the schema model, base classes and utilities used by all target
generators.
"""

from .generator import (
    CodeGenerator,
    CompileOutput,
    EnumNotFoundError,
    ForeignKeyNotFoundError,
    GeneratedFile,
    GenerationResult,
    GeneratorError,
    ItemOutput,
    ModelReferenceError,
    TableNotFoundError,
    UnsupportedTypeError,
    generate_code,
)
from .model import (
    Attribute,
    AttributeKind,
    CharsType,
    Column,
    CommonType,
    DecimalType,
    DefaultValue,
    DefaultValueKind,
    Enum,
    EnumType,
    ModelError,
    ModelIndex,
    RelationType,
    Table,
    is_iso_date,
    load_items,
    load_items_from_file,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Output containers
    "CompileOutput",
    "ItemOutput",
    "GeneratedFile",
    # Errors
    "GeneratorError",
    "ModelReferenceError",
    "EnumNotFoundError",
    "TableNotFoundError",
    "ForeignKeyNotFoundError",
    "UnsupportedTypeError",
    "ModelError",
    # Schema model
    "Attribute",
    "AttributeKind",
    "CharsType",
    "Column",
    "CommonType",
    "DecimalType",
    "DefaultValue",
    "DefaultValueKind",
    "Enum",
    "EnumType",
    "RelationType",
    "Table",
    "ModelIndex",
    "is_iso_date",
    "load_items",
    "load_items_from_file",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
