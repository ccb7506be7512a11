"""
Core code generation components.

Provides the descriptor model, base classes and utilities used by the
Lisp generator.
"""

from .generator import (
    CodeGenerator,
    DeclarationGenerator,
    PackageContributor,
    RpcExporter,
    GeneratorError,
    UnknownSyntaxError,
    GenerationResult,
    generate_code,
)
from .descriptors import (
    DescriptorError,
    Syntax,
    FieldLabel,
    FieldType,
    FileDescriptor,
    MessageDescriptor,
    FieldDescriptor,
    EnumDescriptor,
    EnumValueDescriptor,
    ServiceDescriptor,
    MethodDescriptor,
    convert_file,
    extract_files,
)
from .naming import NameConverter, NamingCase, schema_name_from_path, output_file_name
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine
from .printer import Printer

__all__ = [
    # Generator interfaces
    "CodeGenerator",
    "DeclarationGenerator",
    "PackageContributor",
    "RpcExporter",
    "GeneratorError",
    "UnknownSyntaxError",
    "GenerationResult",
    "generate_code",
    # Descriptor model
    "DescriptorError",
    "Syntax",
    "FieldLabel",
    "FieldType",
    "FileDescriptor",
    "MessageDescriptor",
    "FieldDescriptor",
    "EnumDescriptor",
    "EnumValueDescriptor",
    "ServiceDescriptor",
    "MethodDescriptor",
    "convert_file",
    "extract_files",
    # Naming utilities
    "NameConverter",
    "NamingCase",
    "schema_name_from_path",
    "output_file_name",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template and output system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    "Printer",
]
