"""
Append-only text emission with indentation.

Generators never build the output file as one string; they write
snippets to a Printer in order, and the Printer handles indentation
and Jinja2 variable substitution.

Snippets start with the newlines that separate them from what came
before and do not end with one; Jinja strips a trailing newline from
anything it renders.
"""

import io
import re
from typing import Any, Optional, TextIO

from .templates import TemplateEngine, create_template_engine

_LINE_SPLIT = re.compile(r"(?<=\n)")


class Printer:
    """Writes indented text to a sink (any object with a ``write`` method)."""

    def __init__(
        self,
        sink: Optional[TextIO] = None,
        indent_size: int = 2,
        engine: Optional[TemplateEngine] = None,
    ):
        self.sink = sink if sink is not None else io.StringIO()
        self.indent_size = indent_size
        self.engine = engine or create_template_engine()
        self._indent = ""
        self._at_line_start = True

    def print(self, text: str, **variables: Any) -> None:
        """
        Render ``text`` as a Jinja2 snippet and write it.

        Without variables the text is written as-is.
        """
        if variables:
            text = self.engine.render_string(text, variables)
        self.print_raw(text)

    def print_raw(self, text: str) -> None:
        """Write text, indenting every non-empty line start."""
        for chunk in _LINE_SPLIT.split(text):
            if not chunk:
                continue
            if self._at_line_start and self._indent and chunk != "\n":
                self.sink.write(self._indent)
            self.sink.write(chunk)
            self._at_line_start = chunk.endswith("\n")

    def indent(self) -> None:
        self._indent += " " * self.indent_size

    def outdent(self) -> None:
        if len(self._indent) < self.indent_size:
            raise ValueError("Outdent without matching indent")
        self._indent = self._indent[: -self.indent_size]

    def getvalue(self) -> str:
        """Text written so far, when the sink is an in-memory buffer."""
        if not isinstance(self.sink, io.StringIO):
            raise TypeError("getvalue() requires an in-memory sink")
        return self.sink.getvalue()
