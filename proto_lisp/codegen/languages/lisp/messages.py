"""Message declarations, including everything nested in them."""

from typing import List, Set

from ...core.descriptors import FieldType, MessageDescriptor
from ...core.generator import DeclarationGenerator, PackageContributor
from ...core.printer import Printer
from .enums import EnumGenerator
from .fields import generate_extension, generate_field
from .names import foreign_package, qualified_lisp_name, to_lisp_name


class MessageGenerator(DeclarationGenerator, PackageContributor):
    """Renders one message as a proto:define-message form."""

    def __init__(self, descriptor: MessageDescriptor):
        self.descriptor = descriptor
        self.lisp_name = qualified_lisp_name(descriptor)
        self.enums = [EnumGenerator(e) for e in descriptor.enums]
        self.nested = [MessageGenerator(m) for m in descriptor.nested_types]

    def generate(self, printer: Printer) -> None:
        printer.print(
            "\n\n(proto:define-message {{ name }}\n    (:name {{ proto_name | lisp_string }})",
            name=self.lisp_name,
            proto_name=self.descriptor.name,
        )
        printer.indent()

        for enum in self.enums:
            enum.generate(printer)
        for nested in self.nested:
            nested.generate(printer)
        for field in self.descriptor.fields:
            generate_field(printer, field)
        for ext in self.descriptor.extensions:
            generate_extension(printer, ext, self.descriptor)

        printer.outdent()
        printer.print(")")

    def add_exports(self, exports: List[str]) -> None:
        """
        Message symbol, nested enum and message symbols (recursively),
        then the message's field accessors.
        """
        exports.append(self.lisp_name)
        for enum in self.enums:
            enum.add_exports(exports)
        for nested in self.nested:
            nested.add_exports(exports)
        for field in self.descriptor.fields:
            exports.append(to_lisp_name(field.name))

    def add_packages(self, packages: Set[str]) -> None:
        """
        Packages of foreign types used by fields and of the messages that
        nested extensions extend.
        """
        file = self.descriptor.file
        for field in self.descriptor.fields:
            if field.type in (FieldType.MESSAGE, FieldType.GROUP, FieldType.ENUM):
                package = foreign_package(field.type_package, file)
                if package:
                    packages.add(package)
        for ext in self.descriptor.extensions:
            package = foreign_package(ext.extendee_package, file)
            if package:
                packages.add(package)
        for nested in self.nested:
            nested.add_packages(packages)
