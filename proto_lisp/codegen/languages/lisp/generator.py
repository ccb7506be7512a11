"""
Lisp file generator.

Turns one file descriptor into a cl-protobufs source file: package
scaffolding, the schema definition, every top-level declaration, the
registration of the schema by path and the export lists.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

from ...core.config import GeneratorConfig
from ...core.descriptors import FileDescriptor, Syntax
from ...core.generator import (
    CodeGenerator,
    DeclarationGenerator,
    GenerationResult,
    GeneratorError,
    UnknownSyntaxError,
    generate_code,
)
from ...core.naming import schema_name_from_path
from ...core.printer import Printer
from ...core.templates import lisp_string
from ....logging_config import get_logger
from .enums import EnumGenerator
from .fields import generate_extension
from .messages import MessageGenerator
from .names import file_lisp_package, foreign_package, rpc_package
from .services import ServiceGenerator

logger = get_logger(__name__)

SYNTAX_TAGS = {
    Syntax.PROTO2: ":proto2",
    Syntax.PROTO3: ":proto3",
}

SBCL_DECLAIM = (
    "#+sbcl (cl:declaim (cl:optimize (cl:debug 0) (sb-c:store-coverage-data 0)))"
)

IMPORT_PREFIX = ":import '("
EXPORT_PREFIX = "(cl:export '("


class FileGenerator(CodeGenerator):
    """Code generator for one .proto file's Lisp schema."""

    def __init__(self, file: FileDescriptor, config: Optional[GeneratorConfig] = None):
        """
        Build the generator and one sub-generator per top-level declaration.

        Raises:
            UnknownSyntaxError: The file's syntax is neither proto2 nor proto3.
        """
        super().__init__(config)
        self.file = file

        self.enums = [EnumGenerator(e) for e in file.enums]
        self.messages = [MessageGenerator(m) for m in file.messages]
        self.services = [ServiceGenerator(s) for s in file.services]

        if file.syntax not in SYNTAX_TAGS:
            logger.error("Unknown syntax for file %s: %s", file.name, file.syntax)
            raise UnknownSyntaxError(file.name, file.syntax)
        self.syntax = SYNTAX_TAGS[file.syntax]

        self.lisp_package = file_lisp_package(file, self.config.package_override)
        self.schema_name = schema_name_from_path(file.name)

        logger.debug(
            "FileGenerator for %s: schema=%s package=%r",
            file.name,
            self.schema_name,
            self.lisp_package,
        )

    @property
    def language_name(self) -> str:
        return "lisp"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Lisp templates directory."""
        return Path(__file__).parent / "templates"

    def collect_packages(self) -> Set[str]:
        """Every Lisp package the file must declare before using it."""
        packages: Set[str] = set()
        if self.lisp_package:
            packages.add(self.lisp_package)
            if self.services:
                packages.add(rpc_package(self.lisp_package))

        for message in self.messages:
            message.add_packages(packages)
        for ext in self.file.extensions:
            package = foreign_package(ext.extendee_package, self.file)
            if package:
                packages.add(package)
        return packages

    def generate(self, printer: Printer) -> None:
        """Write the complete Lisp source for the file."""
        logger.debug("Generating %s", self.file.name)

        printer.print_raw(self.render_template("header.lisp.j2", {"file_name": self.file.name}))

        # Just in case multiple schemas are written to the same file.
        printer.print_raw("\n\n(cl:in-package #:common-lisp-user)")

        if self.config.sbcl_optimize:
            printer.print_raw("\n\n" + SBCL_DECLAIM)

        # Sorted so output does not depend on set iteration order
        for package in sorted(self.collect_packages()):
            printer.print_raw(self.render_template("package.lisp.j2", {"package_name": package}))

        if self.lisp_package:
            printer.print(
                "\n\n(cl:in-package {{ package | lisp_string }})",
                package=self.lisp_package,
            )

        printer.print_raw(
            self.render_template(
                "schema.lisp.j2",
                {"schema_name": self.schema_name, "options": self._schema_options()},
            )
        )

        exports: List[str] = [self.schema_name]
        rpc_exports: List[str] = []

        self._generate_section(printer, "Top-Level enums", self.enums, exports)
        self._generate_section(printer, "Top-Level messages", self.messages, exports)

        if self.file.extensions:
            self._section_comment(printer, "Top-Level extensions")
            for ext in self.file.extensions:
                generate_extension(printer, ext, self.file)

        self._generate_section(printer, "Services", self.services, exports)
        for service in self.services:
            service.add_rpc_exports(rpc_exports)

        printer.print_raw(
            self.render_template(
                "register.lisp.j2",
                {"file_name": self.file.name, "schema_name": self.schema_name},
            )
        )

        if self.lisp_package:
            if exports:
                self._generate_exports(printer, self.lisp_package, exports)
            if rpc_exports:
                self._generate_exports(printer, rpc_package(self.lisp_package), rpc_exports)

        printer.print_raw("\n")

    def _schema_options(self) -> str:
        """Schema options, one per line: syntax, then package and imports if any."""
        options = [f":syntax {self.syntax}"]
        if self.file.package:
            options.append(f":package {lisp_string(self.file.package)}")
        if self.file.dependencies:
            continuation = "\n" + " " * len(IMPORT_PREFIX)
            imports = continuation.join(lisp_string(dep) for dep in self.file.dependencies)
            options.append(f"{IMPORT_PREFIX}{imports})")
        return "\n".join(options)

    def _section_comment(self, printer: Printer, title: str) -> None:
        if self.config.add_comments:
            printer.print("\n\n{{ title | comment(';;;') }}", title=title)

    def _generate_section(
        self,
        printer: Printer,
        title: str,
        generators: Sequence[DeclarationGenerator],
        exports: List[str],
    ) -> None:
        if not generators:
            return
        self._section_comment(printer, title)
        for generator in generators:
            generator.generate(printer)
            generator.add_exports(exports)

    def _generate_exports(self, printer: Printer, package: str, symbols: List[str]) -> None:
        continuation = "\n" + " " * len(EXPORT_PREFIX)
        printer.print_raw(
            self.render_template(
                "export.lisp.j2",
                {"package_name": package, "symbols": continuation.join(symbols)},
            )
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "file": self.file.name,
            "schema_name": self.schema_name,
            "lisp_package": self.lisp_package,
            "enum_count": len(self.enums),
            "message_count": len(self.messages),
            "extension_count": len(self.file.extensions),
            "service_count": len(self.services),
        }


def generate_source(file: FileDescriptor, config: Optional[GeneratorConfig] = None) -> str:
    """
    Generate the Lisp source for one file.

    Raises:
        UnknownSyntaxError: Before any output, for an unmappable syntax.
    """
    return FileGenerator(file, config).generate_source()


def generate_file(file: FileDescriptor, config: Optional[GeneratorConfig] = None) -> GenerationResult:
    """Generate one file, reporting failures through the result."""
    try:
        generator = FileGenerator(file, config)
    except GeneratorError as e:
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
    return generate_code(generator)
