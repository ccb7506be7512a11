"""
Field and extension rendering.

Fields are not declarations on their own: messages and extension blocks
call into here to render each slot definition.
"""

from typing import Optional, Union

from ...core.descriptors import (
    FieldDescriptor,
    FieldLabel,
    FieldType,
    FileDescriptor,
    MessageDescriptor,
    Syntax,
)
from ...core.naming import json_name
from ...core.printer import Printer
from ...core.templates import lisp_string
from .names import lisp_type_reference, qualified_lisp_name, to_lisp_name

SCALAR_TYPES = {
    FieldType.DOUBLE: "cl:double-float",
    FieldType.FLOAT: "cl:float",
    FieldType.INT64: "proto:int64",
    FieldType.UINT64: "proto:uint64",
    FieldType.INT32: "proto:int32",
    FieldType.FIXED64: "proto:fixed64",
    FieldType.FIXED32: "proto:fixed32",
    FieldType.BOOL: "cl:boolean",
    FieldType.STRING: "cl:string",
    FieldType.BYTES: "proto:byte-vector",
    FieldType.UINT32: "proto:uint32",
    FieldType.SFIXED32: "proto:sfixed32",
    FieldType.SFIXED64: "proto:sfixed64",
    FieldType.SINT32: "proto:sint32",
    FieldType.SINT64: "proto:sint64",
}

# IEEE specials have no reader syntax; cl-protobufs depends on float-features
SPECIAL_FLOATS = {
    FieldType.DOUBLE: {
        "inf": "float-features:double-float-positive-infinity",
        "-inf": "float-features:double-float-negative-infinity",
        "nan": "float-features:double-float-nan",
    },
    FieldType.FLOAT: {
        "inf": "float-features:single-float-positive-infinity",
        "-inf": "float-features:single-float-negative-infinity",
        "nan": "float-features:single-float-nan",
    },
}

FIELD_TEMPLATE = (
    "\n({{ name }}\n :index {{ number }} :type {{ type }} :kind {{ kind }}"
    " :label ({{ label }}){{ extra }} :json-name {{ json_name | lisp_string }})"
)


def field_kind(field: FieldDescriptor) -> str:
    if field.type == FieldType.MESSAGE:
        return ":message"
    if field.type == FieldType.GROUP:
        return ":group"
    if field.type == FieldType.ENUM:
        return ":enum"
    return ":scalar"


def field_lisp_type(field: FieldDescriptor) -> str:
    if field.type in SCALAR_TYPES:
        return SCALAR_TYPES[field.type]
    return lisp_type_reference(field.type_name or "", field.type_package, field.file)


def field_label(field: FieldDescriptor) -> str:
    """Label list contents: proto3 singular fields carry no presence."""
    if field.is_repeated:
        return ":repeated :list"
    if field.label == FieldLabel.REQUIRED:
        return ":required"
    proto3 = field.file is not None and field.file.syntax == Syntax.PROTO3
    if proto3 and not field.proto3_optional and not field.is_extension:
        return ":singular"
    return ":optional"


def default_literal(field: FieldDescriptor) -> str:
    """Lisp literal for a field's declared default value."""
    value = field.default_value
    if field.type in (FieldType.STRING, FieldType.BYTES):
        return lisp_string(value)
    if field.type == FieldType.BOOL:
        return "cl:t" if value == "true" else "cl:nil"
    if field.type == FieldType.ENUM:
        return ":" + to_lisp_name(value)
    if value in SPECIAL_FLOATS.get(field.type, {}):
        return SPECIAL_FLOATS[field.type][value]
    if field.type == FieldType.DOUBLE:
        # Double-float literals need a d exponent marker
        if "e" in value or "E" in value:
            return value.replace("e", "d").replace("E", "d")
        return value + "d0"
    return value


def generate_field(printer: Printer, field: FieldDescriptor, name: Optional[str] = None) -> None:
    """Render one slot definition at the printer's current indentation."""
    extra = ""
    if field.packed:
        extra += " :packed cl:t"
    if field.default_value is not None:
        extra += " :default " + default_literal(field)

    printer.print(
        FIELD_TEMPLATE,
        name=name or to_lisp_name(field.name),
        number=field.number,
        type=field_lisp_type(field),
        kind=field_kind(field),
        label=field_label(field),
        extra=extra,
        json_name=field.json_name or json_name(field.name),
    )


def generate_extension(
    printer: Printer,
    field: FieldDescriptor,
    scope: Union[FileDescriptor, MessageDescriptor],
) -> None:
    """
    Render an extension as a proto:define-extend form.

    Extensions declared inside a message get symbols qualified by that
    message, the way nested types do.
    """
    if isinstance(scope, MessageDescriptor):
        name = f"{qualified_lisp_name(scope)}.{to_lisp_name(field.name)}"
    else:
        name = to_lisp_name(field.name)

    printer.print(
        "\n\n(proto:define-extend {{ extendee }}\n    ()",
        extendee=lisp_type_reference(
            field.extendee or "", field.extendee_package, field.file
        ),
    )
    printer.indent()
    generate_field(printer, field, name=name)
    printer.outdent()
    printer.print(")")
