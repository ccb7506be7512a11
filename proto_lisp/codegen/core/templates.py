"""
Jinja2 rendering for Lisp output.

File-level blocks (header, package declarations, schema, registration,
exports) are ``.lisp.j2`` files; declaration snippets are rendered from
strings by the Printer. Both share one environment and its filters.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, DictLoader, StrictUndefined, Template

from .naming import NamingCase, convert_name


class TemplateError(Exception):
    """A template is missing or failed to render."""

    pass


def lisp_string(value: Any) -> str:
    """Render a value as a double-quoted Lisp string literal."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class TemplateEngine:
    """Jinja2 environment configured for emitting Lisp source."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Args:
            template_dir: Directory of ``.j2`` files; without one, only
                templates added through add_template are available
        """
        self.template_dir = template_dir
        self._env = None
        self._string_cache: Dict[str, Template] = {}
        self._build_environment()

    def _build_environment(self):
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            loader = DictLoader({})

        # Output is Lisp source, never markup. Jinja drops the single
        # trailing newline of each template; blocks lead with their own.
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

        self._env.filters["lisp_name"] = self._lisp_name_filter
        self._env.filters["lisp_string"] = lisp_string
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template file.

        Raises:
            TemplateError: The template is missing or a variable is undefined
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}")

    def render_string(self, source: str, context: Dict[str, Any]) -> str:
        """
        Render a template snippet given as a string.

        Compiled snippets are cached, since printers render the same
        snippet once per declaration.
        """
        try:
            template = self._string_cache.get(source)
            if template is None:
                template = self._env.from_string(source)
                self._string_cache[source] = template
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}")

    def add_template(self, name: str, content: str):
        """Register an in-memory template, replacing any file loader."""
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.loader.list_templates()

    # Filters

    def _lisp_name_filter(self, value: str) -> str:
        """PhoneNumber -> phone-number."""
        return convert_name(str(value), NamingCase.KEBAB_CASE)

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent every non-blank line, the first one included."""
        pad = " " * spaces
        return "\n".join(
            pad + line if line.strip() else line for line in str(value).split("\n")
        )

    def _comment_filter(self, value: str, style: str = ";;") -> str:
        """Prefix every non-blank line with a Lisp comment marker."""
        return "\n".join(
            f"{style} {line}" if line.strip() else line for line in str(value).split("\n")
        )


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
