"""
Language-specific code generators.

This module contains generators for each target language.
"""

from .lisp import FileGenerator, generate_file, generate_source

__all__ = ["FileGenerator", "generate_file", "generate_source"]
