"""
Jinja2 rendering for generated TypeScript sources.

Templates are loaded from a generator's template directory. Output is
plain source text, so autoescaping is off and undefined variables fail
the render.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)


class TemplateError(Exception):
    """Exception raised when a template cannot be loaded or rendered."""

    pass


def indent_lines(value: Any, spaces: int = 4) -> str:
    """Indent every non-blank line, the first one included."""
    prefix = " " * spaces
    return "\n".join(prefix + line if line.strip() else line for line in str(value).split("\n"))


def quote_literal(value: Any) -> str:
    """Single-quoted TypeScript string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class TemplateEngine:
    """Jinja2 environment configured for source code output."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Args:
            template_dir: Directory holding ``*.j2`` files. Without one only
                string templates can be rendered.
        """
        self.template_dir = template_dir

        if template_dir is not None and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["indent"] = indent_lines
        self._env.filters["quote"] = quote_literal

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a named template from the template directory."""
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        return self._render(template, context, template_name)

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render template source given inline."""
        try:
            template = self._env.from_string(template_string)
        except TemplateSyntaxError as e:
            raise TemplateError(f"Invalid template string: {e}") from e
        return self._render(template, context, "<string>")

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    @staticmethod
    def _render(template: Template, context: Dict[str, Any], name: str) -> str:
        try:
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {name}: {e}") from e


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, file-backed when template_dir exists."""
    return TemplateEngine(template_dir)
