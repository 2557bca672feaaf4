"""
Entity code generation from relational schema models.

Compiles tables and enums of a schema model into persistence entity
source files (TypeORM entities by default).
"""

from typing import Any, Dict, Optional, Sequence, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_targets,
    register_generator,
)
from .core.generator import (
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
from .core.model import Enum, Item, ModelError, Table, load_items, load_items_from_file
from .core.config import ConfigError, GeneratorConfig, load_config
from .logging_config import configure_logging, get_logger

__version__ = "0.1.0"


def _as_items(items: Sequence[Union[Item, Dict[str, Any]]]) -> Sequence[Item]:
    """Accept either model items or the upstream plain-data form, not a mix."""
    dict_count = sum(1 for item in items if isinstance(item, dict))
    if dict_count == 0:
        return items
    if dict_count == len(items):
        return load_items(items)
    raise ModelError(
        f"Items must be all model items or all plain dicts, got {dict_count} dicts "
        f"among {len(items)} items"
    )


def compile_model(items, target="typeorm", config=None) -> CompileOutput:
    """
    Compile a schema model into generated files.

    Args:
        items: Model items, or their plain-data (dict) form
        target: Target framework name or alias
        config: GeneratorConfig, dict overrides or path to a JSON config file

    Returns:
        CompileOutput with table and enum files and name -> path maps

    Raises:
        GeneratorError: If any reference is unresolved or a type is unmapped
    """
    generator = get_generator(target, config)
    return generator.compile(_as_items(items))


def generate_from_items(
    items, target: str = "typeorm", config: Optional[Any] = None
) -> GenerationResult:
    """
    Compile a schema model, reporting failure in the result instead of raising.

    Returns:
        GenerationResult with output, warnings and metadata
    """
    generator = get_generator(target, config)
    return generate_code(generator, _as_items(items))


__all__ = [
    "compile_model",
    "generate_from_items",
    "generate_code",
    # Registry
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "get_registry",
    "list_supported_targets",
    "register_generator",
    # Generator interface and output
    "CodeGenerator",
    "CompileOutput",
    "ItemOutput",
    "GeneratedFile",
    "GenerationResult",
    # Errors
    "GeneratorError",
    "ModelReferenceError",
    "EnumNotFoundError",
    "TableNotFoundError",
    "ForeignKeyNotFoundError",
    "UnsupportedTypeError",
    "ModelError",
    "ConfigError",
    # Model
    "Table",
    "Enum",
    "load_items",
    "load_items_from_file",
    # Configuration and logging
    "GeneratorConfig",
    "load_config",
    "configure_logging",
    "get_logger",
]
