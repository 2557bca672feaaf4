"""
Base generator interface for all code generation targets.

Defines the contract that all target generators must implement,
the output containers they produce and the faults they raise.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence, Tuple
from pathlib import Path

from .config import ConfigError, GeneratorConfig, get_config_manager
from .model import AttributeKind, DefaultValueKind, Item, is_iso_date
from .templates import TemplateEngine, create_template_engine
from ..logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class UnsupportedTypeError(GeneratorError):
    """A column type kind/subtype pair has no mapping in the target."""

    def __init__(self, kind: str, subtype: str):
        self.kind = kind
        self.subtype = subtype
        super().__init__(f'Type "{kind}.{subtype}" has no mapping')


class ModelReferenceError(GeneratorError):
    """A column references an item or column missing from the model."""

    def __init__(self, message: str, table_name: str, column_name: str, reference: str):
        self.table_name = table_name
        self.column_name = column_name
        self.reference = reference
        super().__init__(message)


class EnumNotFoundError(ModelReferenceError):
    pass


class TableNotFoundError(ModelReferenceError):
    pass


class ForeignKeyNotFoundError(ModelReferenceError):
    pass


@dataclass(frozen=True)
class GeneratedFile:
    """One generated artifact: path with extension plus source text."""

    filename: str
    content: str


@dataclass(frozen=True)
class ItemOutput:
    """Generated files of one item kind and the name -> bare path map."""

    files: Tuple[GeneratedFile, ...] = ()
    map: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def merge(cls, outputs: Sequence["ItemOutput"]) -> "ItemOutput":
        """Concatenate files in order; later maps overwrite earlier names."""
        files: List[GeneratedFile] = []
        name_map: Dict[str, str] = {}
        for output in outputs:
            files.extend(output.files)
            name_map.update(output.map)
        return cls(files=tuple(files), map=name_map)


@dataclass(frozen=True)
class CompileOutput:
    """Result of compiling a full item list."""

    table: ItemOutput
    enum: ItemOutput

    @property
    def files(self) -> Tuple[GeneratedFile, ...]:
        """All generated files, tables first."""
        return self.table.files + self.enum.files


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """
        Initialize generator with optional configuration.

        Raises:
            ConfigError: If the configuration has invalid values
        """
        self.config = config or GeneratorConfig()

        errors = get_config_manager().validate_config(self.config)
        if errors:
            raise ConfigError("; ".join(errors))

        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the name of the target framework (e.g., 'typeorm')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def compile(self, items: Sequence[Item]) -> CompileOutput:
        """
        Generate files for every table and enum.

        Args:
            items: Full, ordered item list

        Returns:
            CompileOutput grouped by item kind

        Raises:
            GeneratorError: On any unresolved reference or unmapped type
        """
        pass

    def validate_items(self, items: Sequence[Item]) -> List[str]:
        """
        Validate items for non-fatal structural issues.

        Target generators may override this to add their own checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        name_counts = Counter((item.kind, item.name) for item in items)
        for (kind, name), count in name_counts.items():
            if count > 1:
                warnings.append(f"{kind.capitalize()} '{name}' is declared {count} times")

        for item in items:
            if item.kind == "enum":
                if not item.items:
                    warnings.append(f"Enum '{item.name}' has no members")
                continue

            if not item.columns:
                warnings.append(f"Table '{item.name}' has no columns")

            for column in item.columns:
                kind_counts = Counter(attr.kind for attr in column.attributes)
                for kind, count in kind_counts.items():
                    if count > 1:
                        warnings.append(
                            f"Column {item.name}.{column.name} has {count} "
                            f"'{kind.value}' attributes, the first one is used"
                        )

                default_attr = column.get_attribute(AttributeKind.DEFAULT)
                if (
                    default_attr
                    and column.type.kind == "common"
                    and column.type.type in ("timestamp", "date")
                    and default_attr.value.kind == DefaultValueKind.STRING
                    and not is_iso_date(default_attr.value.data)
                ):
                    warnings.append(
                        f"Default of {item.name}.{column.name} is not an ISO-8601 "
                        f"date: {default_attr.value.data!r}"
                    )

        return warnings

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        output: Optional[CompileOutput],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            output: Compiled output
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.output = output
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result carrying no output."""
        result = cls(output=None)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, items: Sequence[Item]) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        items: Full item list

    Returns:
        GenerationResult with output, warnings, and metadata
    """
    try:
        warnings = generator.validate_items(items)
        for warning in warnings:
            logger.warning(warning)

        output = generator.compile(items)

        metadata = {
            "target": generator.target_name,
            "file_extension": generator.file_extension,
            "table_count": len(output.table.files),
            "enum_count": len(output.enum.files),
        }

        return GenerationResult(output, warnings, metadata)

    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
