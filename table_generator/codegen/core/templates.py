"""
Jinja2 rendering for generated source files.

Templates are loaded from a generator's template directory. Rendering is
strict: a variable missing from the context is an error rather than an
empty string in the output.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Exception raised when a template cannot be loaded or rendered."""

    pass


def indent_lines(value: str, spaces: int = 4) -> str:
    """Indent every non-blank line, the first included; blank lines stay empty."""
    pad = " " * spaces
    return "\n".join(pad + line if line.strip() else "" for line in str(value).split("\n"))


class TemplateEngine:
    """Renders named templates from a directory."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir

        if template_dir is not None and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        # Generated source is not markup, so nothing is escaped
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["indent"] = indent_lines

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Raises:
            TemplateError: If the template is missing, malformed, or
                refers to a variable the context does not provide
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine for a generator's template directory."""
    return TemplateEngine(template_dir)
