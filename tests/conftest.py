import re

import pytest

from proto_lisp.codegen.core.descriptors import (
    EnumDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    FieldLabel,
    FieldType,
    FileDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
    Syntax,
)
from proto_lisp.codegen.core.printer import Printer


def export_blocks(source):
    """Symbol lists of every (cl:export '(...)) form, in output order."""
    return [
        block.split()
        for block in re.findall(r"\(cl:export '\((.*?)\)\)", source, re.DOTALL)
    ]


def declared_packages(source):
    return re.findall(r'\(cl:defpackage "([^"]+)"', source)


def render(generator):
    """Run a declaration generator into a fresh printer and return the text."""
    printer = Printer()
    generator.generate(printer)
    return printer.getvalue()


@pytest.fixture
def colors_file():
    return FileDescriptor(
        name="p/colors.proto",
        package="p",
        syntax=Syntax.PROTO3,
        enums=[
            EnumDescriptor(
                name="Color",
                values=[
                    EnumValueDescriptor("RED", 0),
                    EnumValueDescriptor("GREEN", 1),
                ],
            )
        ],
    )


@pytest.fixture
def greeter_file():
    return FileDescriptor(
        name="greeter.proto",
        package="p",
        syntax=Syntax.PROTO3,
        messages=[
            MessageDescriptor(
                "HelloRequest",
                fields=[FieldDescriptor("name", 1, FieldType.STRING)],
            ),
            MessageDescriptor(
                "HelloReply",
                fields=[FieldDescriptor("message", 1, FieldType.STRING)],
            ),
        ],
        services=[
            ServiceDescriptor(
                "Greeter",
                methods=[MethodDescriptor("SayHello", ".p.HelloRequest", ".p.HelloReply")],
            )
        ],
    )


@pytest.fixture
def empty_file():
    return FileDescriptor(name="Empty.proto")


@pytest.fixture
def addressbook_file():
    person = MessageDescriptor(
        "Person",
        fields=[
            FieldDescriptor("name", 1, FieldType.STRING, FieldLabel.REQUIRED),
            FieldDescriptor("id", 2, FieldType.INT32),
            FieldDescriptor(
                "email", 3, FieldType.STRING, default_value="none@example.com"
            ),
            FieldDescriptor(
                "phones",
                4,
                FieldType.MESSAGE,
                FieldLabel.REPEATED,
                type_name=".tutorial.Person.PhoneNumber",
            ),
            FieldDescriptor(
                "last_updated",
                5,
                FieldType.MESSAGE,
                type_name=".google.protobuf.Timestamp",
                type_package="google.protobuf",
            ),
        ],
        nested_types=[
            MessageDescriptor(
                "PhoneNumber",
                fields=[
                    FieldDescriptor("number", 1, FieldType.STRING),
                    FieldDescriptor(
                        "type",
                        2,
                        FieldType.ENUM,
                        type_name=".tutorial.Person.PhoneType",
                        default_value="HOME",
                    ),
                ],
            )
        ],
        enums=[
            EnumDescriptor(
                "PhoneType",
                values=[EnumValueDescriptor("MOBILE", 0), EnumValueDescriptor("HOME", 1)],
            )
        ],
        extensions=[
            FieldDescriptor(
                "nickname",
                100,
                FieldType.STRING,
                extendee=".common.Base",
                extendee_package="common",
            )
        ],
    )
    address_book = MessageDescriptor(
        "AddressBook",
        fields=[
            FieldDescriptor(
                "people",
                1,
                FieldType.MESSAGE,
                FieldLabel.REPEATED,
                type_name=".tutorial.Person",
            )
        ],
    )
    return FileDescriptor(
        name="protos/AddressBook.proto",
        package="tutorial",
        syntax=Syntax.PROTO2,
        dependencies=["google/protobuf/timestamp.proto", "common/base.proto"],
        messages=[person, address_book],
        extensions=[
            FieldDescriptor(
                "tag",
                200,
                FieldType.INT32,
                extendee=".common.Base",
                extendee_package="common",
            )
        ],
        services=[
            ServiceDescriptor(
                "AddressService",
                methods=[
                    MethodDescriptor("GetPerson", ".tutorial.Person", ".tutorial.AddressBook"),
                    MethodDescriptor(
                        "StreamPeople",
                        ".tutorial.AddressBook",
                        ".tutorial.Person",
                        server_streaming=True,
                    ),
                ],
            )
        ],
    )
