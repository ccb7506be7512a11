import pytest

from proto_lisp.codegen.core.descriptors import (
    DescriptorError,
    FieldLabel,
    FieldType,
    Syntax,
    convert_field,
    convert_file,
    extract_files,
)

ADDRESSBOOK_JSON = {
    "name": "tutorial/addressbook.proto",
    "package": "tutorial",
    "syntax": "proto3",
    "dependency": ["google/protobuf/timestamp.proto"],
    "messageType": [
        {
            "name": "Person",
            "field": [
                {"name": "name", "number": 1, "type": "TYPE_STRING", "label": "LABEL_OPTIONAL"},
                {
                    "name": "phones",
                    "number": 4,
                    "type": "TYPE_MESSAGE",
                    "label": "LABEL_REPEATED",
                    "typeName": ".tutorial.Person.PhoneNumber",
                },
            ],
            "nestedType": [
                {"name": "PhoneNumber", "field": [{"name": "number", "number": 1, "type": 9}]}
            ],
            "enumType": [
                {"name": "PhoneType", "value": [{"name": "MOBILE", "number": 0}]}
            ],
        }
    ],
    "service": [
        {
            "name": "Directory",
            "method": [
                {
                    "name": "Lookup",
                    "inputType": ".tutorial.Person",
                    "outputType": ".tutorial.Person",
                    "serverStreaming": True,
                }
            ],
        }
    ],
}


def test_convert_file_accepts_camel_case_keys():
    file = convert_file(ADDRESSBOOK_JSON)

    assert file.name == "tutorial/addressbook.proto"
    assert file.package == "tutorial"
    assert file.syntax == Syntax.PROTO3
    assert file.dependencies == ["google/protobuf/timestamp.proto"]

    person = file.messages[0]
    assert [f.name for f in person.fields] == ["name", "phones"]
    assert person.fields[1].label == FieldLabel.REPEATED
    assert person.fields[1].type_name == ".tutorial.Person.PhoneNumber"
    assert person.nested_types[0].fields[0].type == FieldType.STRING
    assert person.enums[0].values[0].name == "MOBILE"

    method = file.services[0].methods[0]
    assert method.input_type == ".tutorial.Person"
    assert method.server_streaming
    assert not method.client_streaming


def test_convert_file_links_back_references():
    file = convert_file(ADDRESSBOOK_JSON)
    person = file.messages[0]
    phone_number = person.nested_types[0]

    assert person.file is file
    assert person.containing_type is None
    assert phone_number.containing_type is person
    assert phone_number.fields[0].file is file
    assert person.enums[0].containing_type is person
    assert file.services[0].file is file


def test_snake_case_keys():
    field = convert_field(
        {"name": "tags", "number": 3, "type": "string", "label": "repeated",
         "json_name": "tagList", "options": {"packed": True}}
    )
    assert field.label == FieldLabel.REPEATED
    assert field.json_name == "tagList"
    assert field.packed


@pytest.mark.parametrize(
    "syntax, expected",
    [
        (None, Syntax.PROTO2),
        ("", Syntax.PROTO2),
        ("proto2", Syntax.PROTO2),
        ("proto3", Syntax.PROTO3),
        ("editions", Syntax.UNKNOWN),
    ],
)
def test_syntax_mapping(syntax, expected):
    data = {"name": "a.proto"}
    if syntax is not None:
        data["syntax"] = syntax
    assert convert_file(data).syntax == expected


@pytest.mark.parametrize(
    "field",
    [
        {"name": "f", "number": 1},
        {"name": "f", "number": 1, "type": "TYPE_COMPLEX"},
        {"name": "f", "number": 1, "type": 99},
        {"name": "f", "number": 1, "type": True},
        {"number": 1, "type": "string"},
    ],
)
def test_malformed_fields(field):
    with pytest.raises(DescriptorError):
        convert_field(field)


def test_extract_single_file():
    files = extract_files({"name": "a.proto"})
    assert [f.name for f in files] == ["a.proto"]


def test_extract_descriptor_set_keeps_order():
    files = extract_files({"file": [{"name": "b.proto"}, {"name": "a.proto"}]})
    assert [f.name for f in files] == ["b.proto", "a.proto"]


def test_extract_generator_request_filters_files():
    document = {
        "fileToGenerate": ["app.proto"],
        "file": [{"name": "dep.proto"}, {"name": "app.proto"}],
    }
    assert [f.name for f in extract_files(document)] == ["app.proto"]


def test_extract_generator_request_missing_file():
    with pytest.raises(DescriptorError, match="ghost.proto"):
        extract_files({"file_to_generate": ["ghost.proto"], "file": []})


def test_extract_rejects_non_objects():
    with pytest.raises(DescriptorError):
        extract_files([{"name": "a.proto"}])
    with pytest.raises(DescriptorError):
        extract_files({"file": ["not-a-dict"]})
