"""
Naming utilities for code generation.

Handles case conversions and the file-name derived identifiers
(schema names, output paths) shared by every target.
"""

import re
from typing import Dict, Tuple
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


class NameConverter:
    """Converts identifiers between case styles, caching results."""

    def __init__(self):
        self._cache: Dict[Tuple[str, NamingCase], str] = {}

    def convert(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE) -> str:
        """
        Convert a name to the target case style.

        Unlike a sanitizer, the same input always yields the same output:
        generated symbols must line up across declarations.
        """
        key = (name, target_case)
        if key not in self._cache:
            self._cache[key] = self._convert_case(name, target_case)
        return self._cache[key]

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        elif target_case == NamingCase.KEBAB_CASE:
            return self._to_kebab_case(name)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            return self._to_snake_case(name).upper()
        else:
            return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace('-', '_')

        # HTTPServer -> HTTP_Server, then PhoneNumber -> Phone_Number
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)

        return name.strip('_')

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        snake = self._to_snake_case(name)
        parts = snake.split('_')

        if not parts:
            return name

        return parts[0].lower() + ''.join(part.capitalize() for part in parts[1:])

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        parts = snake.split('_')
        return ''.join(part.capitalize() for part in parts if part)

    def _to_kebab_case(self, name: str) -> str:
        """Convert to kebab-case."""
        return self._to_snake_case(name).replace('_', '-')


_default_converter = NameConverter()


def convert_name(name: str, target_case: NamingCase) -> str:
    """Convert a name using the shared converter."""
    return _default_converter.convert(name, target_case)


def schema_name_from_path(path: str) -> str:
    """
    Derive the schema identifier from a source file path.

    Strips any directory prefix (either separator), the extension
    (last '.' onward) and lower-cases the rest. "Protos/Address.Book.proto"
    becomes "address.book". Empty input gives empty output.
    """
    base = re.split(r'[\\/]', path)[-1]
    period = base.rfind('.')
    if period != -1:
        base = base[:period]
    return base.lower()


def json_name(field_name: str) -> str:
    """Default JSON name of a field: underscores dropped, next letter upper-cased."""
    result = []
    capitalize_next = False
    for char in field_name:
        if char == '_':
            capitalize_next = True
        elif capitalize_next:
            result.append(char.upper())
            capitalize_next = False
        else:
            result.append(char)
    return ''.join(result)


def output_file_name(file_name: str, extension: str) -> str:
    """
    Output path for a source file: its extension replaced by ``extension``.

    "p/colors.proto" with ".lisp" gives "p/colors.lisp".
    """
    slash = max(file_name.rfind('/'), file_name.rfind('\\'))
    period = file_name.rfind('.')
    if period > slash:
        file_name = file_name[:period]
    return file_name + extension
