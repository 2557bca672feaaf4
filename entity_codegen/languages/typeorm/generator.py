"""
TypeORM code generator implementation.

Generates one TypeScript entity class per table and one TypeScript enum
per enum item from the relational schema model.
"""

from typing import Optional, Sequence
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, CompileOutput, GeneratedFile, ItemOutput
from ...core.model import Enum, Item, ModelIndex, Table
from ...logging_config import get_logger
from .columns import ColumnBuilder
from .dependencies import resolve_table_dependencies
from .paths import model_file_path
from .types import TypeMapperConfig, TypeScriptTypeMapper

logger = get_logger(__name__)

# Decorators and helpers imported by every entity file
ORM_IMPORTS = [
    "Column",
    "CreateDateColumn",
    "DeleteDateColumn",
    "Entity",
    "JoinColumn",
    "ManyToOne",
    "OneToMany",
    "PrimaryColumn",
    "PrimaryGeneratedColumn",
    "UpdateDateColumn",
]


class TypeORMGenerator(CodeGenerator):
    """Code generator for TypeORM entity classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeORM generator with configuration."""
        super().__init__(config)

        self.orm_module = self.config.custom.get("orm_module", "typeorm")
        self.base_entity = self.config.custom.get("base_entity", "BaseEntity")

        self.type_mapper = TypeScriptTypeMapper(
            TypeMapperConfig(type_overrides=dict(self.config.type_overrides))
        )

    @property
    def target_name(self) -> str:
        """Return the target name."""
        return "typeorm"

    @property
    def file_extension(self) -> str:
        """Return the generated file extension."""
        return self.config.file_extension

    def get_template_directory(self) -> Path:
        """Return the TypeORM templates directory."""
        return Path(__file__).parent / "templates"

    def compile(self, items: Sequence[Item]) -> CompileOutput:
        """Generate entity files for all tables and enum files for all enums."""
        index = ModelIndex(items)

        table_outputs = [self.build_entity(table, index) for table in index.tables]
        enum_outputs = [self.build_enum(enum) for enum in index.enums]

        output = CompileOutput(
            table=ItemOutput.merge(table_outputs),
            enum=ItemOutput.merge(enum_outputs),
        )

        logger.info(
            "Compiled %d tables and %d enums",
            len(table_outputs),
            len(enum_outputs),
        )
        return output

    def build_entity(self, table: Table, index: ModelIndex) -> ItemOutput:
        """
        Generate the entity file of one table.

        Args:
            table: Table to generate
            index: Lookup over the full item list, for relations and enums

        Returns:
            ItemOutput with the single entity file and its name -> path entry
        """
        dependencies = resolve_table_dependencies(table, index, self.config.model_dir)

        column_builder = ColumnBuilder(
            self.type_mapper,
            index,
            indent_size=self.config.indent_size,
            navigation_prefix=self.config.navigation_prefix,
        )
        body = []
        for column in table.columns:
            body.extend(column_builder.build(column, table).lines)

        content = self.render_template(
            "entity.ts.j2",
            {
                "orm_imports": ORM_IMPORTS + [self.base_entity],
                "orm_module": self.orm_module,
                "base_entity": self.base_entity,
                "dependencies": dependencies,
                "table_name": table.name,
                "body": "\n".join(body),
                "indent_size": self.config.indent_size,
            },
        )

        logger.debug("Generated entity %s (%d columns)", table.name, len(table.columns))
        return self._item_output(table, content)

    def build_enum(self, enum: Enum) -> ItemOutput:
        """Generate the enum file of one enum, members mapped to themselves."""
        content = self.render_template(
            "enum.ts.j2",
            {
                "enum_name": enum.name,
                "members": list(enum.items),
                "indent_unit": " " * self.config.indent_size,
            },
        )

        logger.debug("Generated enum %s (%d members)", enum.name, len(enum.items))
        return self._item_output(enum, content)

    def _item_output(self, item: Item, content: str) -> ItemOutput:
        if self.config.line_ending != "\n":
            content = content.replace("\n", self.config.line_ending)

        filename = model_file_path(item, self.config.model_dir, self.file_extension)
        return ItemOutput(
            files=(GeneratedFile(filename=filename, content=content),),
            map={item.name: model_file_path(item, self.config.model_dir)},
        )


def create_typeorm_generator(config: Optional[GeneratorConfig] = None) -> TypeORMGenerator:
    """Create a TypeORM generator, using the default typeorm configuration if none given."""
    if config is None:
        from ...core.config import load_config

        config = load_config("typeorm")

    return TypeORMGenerator(config)
