"""Enum declarations."""

from typing import List

from ...core.descriptors import EnumDescriptor
from ...core.generator import DeclarationGenerator
from ...core.printer import Printer
from .names import qualified_lisp_name, to_lisp_name


class EnumGenerator(DeclarationGenerator):
    """Renders one enum as a proto:define-enum form."""

    def __init__(self, descriptor: EnumDescriptor):
        self.descriptor = descriptor
        self.lisp_name = qualified_lisp_name(descriptor)

    def generate(self, printer: Printer) -> None:
        printer.print(
            "\n\n(proto:define-enum {{ name }}\n    (:name {{ proto_name | lisp_string }})",
            name=self.lisp_name,
            proto_name=self.descriptor.name,
        )
        printer.indent()
        for value in self.descriptor.values:
            printer.print(
                "\n(:{{ value | lisp_name }} :index {{ number }})",
                value=value.name,
                number=value.number,
            )
        printer.outdent()
        printer.print(")")

    def add_exports(self, exports: List[str]) -> None:
        """The enum's own symbol, then one per value."""
        exports.append(self.lisp_name)
        for value in self.descriptor.values:
            exports.append(to_lisp_name(value.name))
