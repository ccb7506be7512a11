"""
proto-lisp: Common Lisp (cl-protobufs) source generation from
protocol buffer descriptors.
"""

from .codegen import (
    FileGenerator,
    GeneratorConfig,
    generate_file,
    generate_from_document,
    generate_source,
    load_config,
)

__version__ = "0.1.0"

__all__ = [
    "FileGenerator",
    "GeneratorConfig",
    "generate_file",
    "generate_from_document",
    "generate_source",
    "load_config",
]
