"""
Lisp code generator module.

Generates cl-protobufs schema source from protocol buffer descriptors.
"""

from .generator import FileGenerator, generate_file, generate_source
from .enums import EnumGenerator
from .messages import MessageGenerator
from .services import ServiceGenerator
from .fields import generate_extension, generate_field
from .names import (
    file_lisp_package,
    lisp_type_reference,
    qualified_lisp_name,
    rpc_package,
    to_lisp_name,
)

__all__ = [
    # File generator
    "FileGenerator",
    "generate_file",
    "generate_source",
    # Declaration generators
    "EnumGenerator",
    "MessageGenerator",
    "ServiceGenerator",
    "generate_extension",
    "generate_field",
    # Naming
    "file_lisp_package",
    "lisp_type_reference",
    "qualified_lisp_name",
    "rpc_package",
    "to_lisp_name",
]
