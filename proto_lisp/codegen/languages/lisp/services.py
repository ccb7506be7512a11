"""Service declarations and their RPC stubs."""

from typing import List

from ...core.descriptors import MethodDescriptor, ServiceDescriptor
from ...core.generator import DeclarationGenerator, RpcExporter
from ...core.printer import Printer
from .names import lisp_type_reference, to_lisp_name

RPC_STUB_PREFIX = "call-"


class ServiceGenerator(DeclarationGenerator, RpcExporter):
    """Renders one service as a proto:define-service form."""

    def __init__(self, descriptor: ServiceDescriptor):
        self.descriptor = descriptor
        self.lisp_name = to_lisp_name(descriptor.name)

    def generate(self, printer: Printer) -> None:
        printer.print(
            "\n\n(proto:define-service {{ name }}\n    (:name {{ proto_name | lisp_string }})",
            name=self.lisp_name,
            proto_name=self.descriptor.name,
        )
        printer.indent()
        for method in self.descriptor.methods:
            self._generate_method(printer, method)
        printer.outdent()
        printer.print(")")

    def _generate_method(self, printer: Printer, method: MethodDescriptor) -> None:
        file = self.descriptor.file
        streaming = ""
        if method.client_streaming:
            streaming += " :input-streaming cl:t"
        if method.server_streaming:
            streaming += " :output-streaming cl:t"

        printer.print(
            "\n({{ name }} ({{ input }} => {{ output }})\n :name {{ proto_name | lisp_string }}{{ streaming }})",
            name=to_lisp_name(method.name),
            input=lisp_type_reference(method.input_type, method.input_package, file),
            output=lisp_type_reference(method.output_type, method.output_package, file),
            proto_name=method.name,
            streaming=streaming,
        )

    def add_exports(self, exports: List[str]) -> None:
        """Only the service symbol; RPC stubs go to the RPC package."""
        exports.append(self.lisp_name)

    def add_rpc_exports(self, rpc_exports: List[str]) -> None:
        """One call-<method> stub per RPC, in declaration order."""
        for method in self.descriptor.methods:
            rpc_exports.append(RPC_STUB_PREFIX + to_lisp_name(method.name))
