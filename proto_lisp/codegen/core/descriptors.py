"""
Core descriptor representation for code generation.

Converts protobuf descriptor documents (FileDescriptorProto-shaped dicts)
into a normalized internal tree that generators can walk consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum


class DescriptorError(Exception):
    """Exception raised for malformed descriptor documents."""

    pass


class Syntax(Enum):
    """Syntax versions a .proto file may declare."""

    PROTO2 = "proto2"
    PROTO3 = "proto3"
    UNKNOWN = "unknown"


class FieldLabel(Enum):
    """Field cardinality."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    REPEATED = "repeated"


class FieldType(Enum):
    """Protocol buffer field types, in descriptor.proto numbering order."""

    DOUBLE = "double"
    FLOAT = "float"
    INT64 = "int64"
    UINT64 = "uint64"
    INT32 = "int32"
    FIXED64 = "fixed64"
    FIXED32 = "fixed32"
    BOOL = "bool"
    STRING = "string"
    GROUP = "group"
    MESSAGE = "message"
    BYTES = "bytes"
    UINT32 = "uint32"
    ENUM = "enum"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    SINT32 = "sint32"
    SINT64 = "sint64"


@dataclass
class EnumValueDescriptor:
    """A single enum constant."""

    name: str
    number: int


@dataclass
class EnumDescriptor:
    """An enum declaration, top-level or nested in a message."""

    name: str
    values: List[EnumValueDescriptor] = field(default_factory=list)

    file: Optional["FileDescriptor"] = field(default=None, repr=False, compare=False)
    containing_type: Optional["MessageDescriptor"] = field(
        default=None, repr=False, compare=False
    )


@dataclass
class FieldDescriptor:
    """A message field or an extension."""

    name: str
    number: int
    type: FieldType
    label: FieldLabel = FieldLabel.OPTIONAL

    # Fully qualified (".pkg.Outer.Inner") for message and enum fields
    type_name: Optional[str] = None
    # Proto package of the file declaring type_name, when it is another file
    type_package: Optional[str] = None

    json_name: Optional[str] = None
    default_value: Optional[str] = None
    packed: bool = False
    proto3_optional: bool = False

    # Extensions only
    extendee: Optional[str] = None
    extendee_package: Optional[str] = None

    file: Optional["FileDescriptor"] = field(default=None, repr=False, compare=False)
    containing_type: Optional["MessageDescriptor"] = field(
        default=None, repr=False, compare=False
    )

    @property
    def is_extension(self) -> bool:
        return self.extendee is not None

    @property
    def is_repeated(self) -> bool:
        return self.label == FieldLabel.REPEATED


@dataclass
class MessageDescriptor:
    """A message declaration with its nested declarations."""

    name: str
    fields: List[FieldDescriptor] = field(default_factory=list)
    nested_types: List["MessageDescriptor"] = field(default_factory=list)
    enums: List[EnumDescriptor] = field(default_factory=list)
    extensions: List[FieldDescriptor] = field(default_factory=list)

    file: Optional["FileDescriptor"] = field(default=None, repr=False, compare=False)
    containing_type: Optional["MessageDescriptor"] = field(
        default=None, repr=False, compare=False
    )


@dataclass
class MethodDescriptor:
    """A single RPC of a service."""

    name: str
    input_type: str
    output_type: str
    input_package: Optional[str] = None
    output_package: Optional[str] = None
    client_streaming: bool = False
    server_streaming: bool = False


@dataclass
class ServiceDescriptor:
    """A service declaration."""

    name: str
    methods: List[MethodDescriptor] = field(default_factory=list)

    file: Optional["FileDescriptor"] = field(default=None, repr=False, compare=False)


@dataclass
class FileDescriptor:
    """Represents one .proto file and every declaration in it."""

    name: str
    package: str = ""
    syntax: Syntax = Syntax.PROTO2
    dependencies: List[str] = field(default_factory=list)
    messages: List[MessageDescriptor] = field(default_factory=list)
    enums: List[EnumDescriptor] = field(default_factory=list)
    services: List[ServiceDescriptor] = field(default_factory=list)
    extensions: List[FieldDescriptor] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for enum in self.enums:
            enum.file = self
        for message in self.messages:
            _link_message(message, self, None)
        for ext in self.extensions:
            ext.file = self
        for service in self.services:
            service.file = self


def _link_message(
    message: MessageDescriptor,
    file: FileDescriptor,
    parent: Optional[MessageDescriptor],
) -> None:
    """Point a message and everything nested in it back at its file."""
    message.file = file
    message.containing_type = parent
    for fld in message.fields:
        fld.file = file
        fld.containing_type = message
    for ext in message.extensions:
        ext.file = file
        ext.containing_type = message
    for enum in message.enums:
        enum.file = file
        enum.containing_type = message
    for nested in message.nested_types:
        _link_message(nested, file, message)


# Conversion from descriptor documents

_SYNTAX_NAMES = {
    "": Syntax.PROTO2,
    "proto2": Syntax.PROTO2,
    "proto3": Syntax.PROTO3,
}


def _get(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Look up a snake_case key, accepting its protobuf-JSON camelCase form."""
    if key in data:
        return data[key]
    parts = key.split("_")
    camel = parts[0] + "".join(p.capitalize() for p in parts[1:])
    return data.get(camel, default)


def _enum_member(enum_cls, raw: Any, what: str):
    """Map 'TYPE_STRING', 'string' or 9 style values to an enum member."""
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise DescriptorError(f"Invalid {what}: {raw!r}")
    if isinstance(raw, int):
        members = list(enum_cls)
        if 1 <= raw <= len(members):
            return members[raw - 1]
        raise DescriptorError(f"Unknown {what} number: {raw}")

    value = raw.lower()
    for prefix in ("type_", "label_"):
        if value.startswith(prefix):
            value = value[len(prefix):]
    try:
        return enum_cls(value)
    except ValueError:
        raise DescriptorError(f"Unknown {what}: {raw}")


def _require_name(data: Any, kind: str) -> str:
    if not isinstance(data, dict):
        raise DescriptorError(
            f"{kind} descriptor must be an object, got {type(data).__name__}"
        )
    name = data.get("name")
    if not name:
        raise DescriptorError(f"{kind} descriptor has no name")
    return name


def convert_enum(data: Dict[str, Any]) -> EnumDescriptor:
    """Convert an EnumDescriptorProto-shaped dict."""
    name = _require_name(data, "Enum")
    values = [
        EnumValueDescriptor(
            name=_require_name(v, "Enum value"), number=int(v.get("number", 0))
        )
        for v in _get(data, "value", [])
    ]
    return EnumDescriptor(name=name, values=values)


def convert_field(data: Dict[str, Any]) -> FieldDescriptor:
    """Convert a FieldDescriptorProto-shaped dict."""
    name = _require_name(data, "Field")
    options = _get(data, "options", {}) or {}

    if "type" not in data:
        raise DescriptorError(f"Field '{name}' has no type")

    return FieldDescriptor(
        name=name,
        number=int(_get(data, "number", 0)),
        type=_enum_member(FieldType, data["type"], "field type"),
        label=_enum_member(FieldLabel, _get(data, "label", "optional"), "field label"),
        type_name=_get(data, "type_name"),
        type_package=_get(data, "type_package"),
        json_name=_get(data, "json_name"),
        default_value=_get(data, "default_value"),
        packed=bool(_get(options, "packed", False)),
        proto3_optional=bool(_get(data, "proto3_optional", False)),
        extendee=_get(data, "extendee"),
        extendee_package=_get(data, "extendee_package"),
    )


def convert_message(data: Dict[str, Any]) -> MessageDescriptor:
    """Convert a DescriptorProto-shaped dict, recursing into nested types."""
    name = _require_name(data, "Message")
    return MessageDescriptor(
        name=name,
        fields=[convert_field(f) for f in _get(data, "field", [])],
        nested_types=[convert_message(m) for m in _get(data, "nested_type", [])],
        enums=[convert_enum(e) for e in _get(data, "enum_type", [])],
        extensions=[convert_field(f) for f in _get(data, "extension", [])],
    )


def convert_service(data: Dict[str, Any]) -> ServiceDescriptor:
    """Convert a ServiceDescriptorProto-shaped dict."""
    name = _require_name(data, "Service")
    methods = []
    for m in _get(data, "method", []):
        methods.append(
            MethodDescriptor(
                name=_require_name(m, "Method"),
                input_type=_get(m, "input_type", ""),
                output_type=_get(m, "output_type", ""),
                input_package=_get(m, "input_package"),
                output_package=_get(m, "output_package"),
                client_streaming=bool(_get(m, "client_streaming", False)),
                server_streaming=bool(_get(m, "server_streaming", False)),
            )
        )
    return ServiceDescriptor(name=name, methods=methods)


def convert_file(data: Dict[str, Any]) -> FileDescriptor:
    """
    Convert a FileDescriptorProto-shaped dict into a FileDescriptor.

    Unrecognized syntax strings map to Syntax.UNKNOWN rather than failing
    here; the generator decides what an unknown syntax means.

    Args:
        data: Parsed descriptor document for one file

    Returns:
        Linked FileDescriptor tree
    """
    name = _require_name(data, "File")
    syntax = _SYNTAX_NAMES.get(str(data.get("syntax", "")).lower(), Syntax.UNKNOWN)

    return FileDescriptor(
        name=name,
        package=data.get("package", "") or "",
        syntax=syntax,
        dependencies=list(_get(data, "dependency", [])),
        messages=[convert_message(m) for m in _get(data, "message_type", [])],
        enums=[convert_enum(e) for e in _get(data, "enum_type", [])],
        services=[convert_service(s) for s in _get(data, "service", [])],
        extensions=[convert_field(f) for f in _get(data, "extension", [])],
        options=dict(_get(data, "options", {}) or {}),
    )


def extract_files(document: Dict[str, Any]) -> List[FileDescriptor]:
    """
    Extract the files to generate from a descriptor document.

    Accepts a single file descriptor, a descriptor set ({"file": [...]}),
    or a code generator request that also names "fileToGenerate".
    """
    if not isinstance(document, dict):
        raise DescriptorError("Descriptor document must be a JSON object")

    if "file" not in document:
        return [convert_file(document)]

    files = [convert_file(f) for f in document["file"]]
    wanted = _get(document, "file_to_generate")
    if wanted is None:
        return files

    by_name = {f.name: f for f in files}
    missing = [name for name in wanted if name not in by_name]
    if missing:
        raise DescriptorError(
            f"Files to generate not in descriptor set: {', '.join(missing)}"
        )
    return [by_name[name] for name in wanted]
