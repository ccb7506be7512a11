"""
Code generation module.

Generates Lisp schema source from protocol buffer descriptors.
"""

from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.descriptors import (
    FileDescriptor,
    DescriptorError,
    Syntax,
    convert_file,
    extract_files,
)
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .languages.lisp import FileGenerator, generate_file, generate_source


def generate_from_document(document, config=None):
    """
    Generate code for every file named by a descriptor document.

    Args:
        document: Parsed descriptor JSON (single file, set or request)
        config: GeneratorConfig, override dict, or None for defaults

    Returns:
        List of (FileDescriptor, GenerationResult) pairs in document order
    """
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)

    return [(file, generate_file(file, config)) for file in extract_files(document)]


__all__ = [
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "FileDescriptor",
    "DescriptorError",
    "Syntax",
    "convert_file",
    "extract_files",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "FileGenerator",
    "generate_file",
    "generate_source",
    "generate_from_document",
]
