"""
Lisp-specific naming.

Maps proto identifiers to Lisp symbol names and proto packages to
Lisp package names.
"""

from typing import Optional, Union

from ...core.descriptors import (
    EnumDescriptor,
    FileDescriptor,
    MessageDescriptor,
)
from ...core.naming import NamingCase, convert_name

RPC_PACKAGE_SUFFIX = "-RPC"


def to_lisp_name(name: str) -> str:
    """PhoneNumber, phone_number and PHONE_NUMBER all become phone-number."""
    return convert_name(name, NamingCase.KEBAB_CASE)


def qualified_lisp_name(descriptor: Union[MessageDescriptor, EnumDescriptor]) -> str:
    """Symbol name of a possibly nested type: outer.inner."""
    parts = []
    current = descriptor
    while current is not None:
        parts.append(to_lisp_name(current.name))
        current = current.containing_type
    return ".".join(reversed(parts))


def file_lisp_package(file: FileDescriptor, override: Optional[str] = None) -> str:
    """
    Lisp package for a file's symbols; empty means no package scoping.

    An explicit override wins, then the file's ``lisp_package`` option,
    then the proto package itself.
    """
    if override is not None:
        return override
    option = file.options.get("lisp_package")
    if option:
        return option
    return file.package


def rpc_package(lisp_package: str) -> str:
    """Package holding the RPC stubs of a file's services."""
    return lisp_package + RPC_PACKAGE_SUFFIX


def foreign_package(type_package: Optional[str], file: Optional[FileDescriptor]) -> Optional[str]:
    """
    Lisp package of a referenced type when it lives outside ``file``'s package.

    Returns None for local references and for types in files without a
    package, which need no qualification.
    """
    if type_package is None or not type_package:
        return None
    current = file.package if file is not None else ""
    if type_package == current:
        return None
    return type_package


def lisp_type_reference(
    type_name: str,
    type_package: Optional[str],
    file: Optional[FileDescriptor],
) -> str:
    """
    Lisp symbol for a fully qualified proto type name.

    ".p.Person.PhoneNumber" in package "p" is person.phone-number;
    the same name referenced from package "q" is |p|::person.phone-number.
    """
    current = file.package if file is not None else ""
    package = current if type_package is None else type_package

    name = type_name.lstrip(".")
    if package and name.startswith(package + "."):
        name = name[len(package) + 1:]
    symbol = ".".join(to_lisp_name(part) for part in name.split("."))

    qualifier = foreign_package(type_package, file)
    if qualifier is None:
        return symbol
    return f"|{qualifier}|::{symbol}"
