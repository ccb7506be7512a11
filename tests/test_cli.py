import json
from unittest import mock

import pytest

from proto_lisp.cli import main

COLORS = {
    "name": "p/colors.proto",
    "package": "p",
    "syntax": "proto3",
    "enumType": [
        {
            "name": "Color",
            "value": [{"name": "RED", "number": 0}, {"name": "GREEN", "number": 1}],
        }
    ],
}


def write_json(path, document):
    path.write_text(json.dumps(document))
    return str(path)


def test_writes_one_file_per_descriptor(tmp_path):
    descriptor = write_json(tmp_path / "colors.json", COLORS)
    out = tmp_path / "out"

    assert main([descriptor, "-o", str(out)]) == 0

    generated = (out / "p" / "colors.lisp").read_text()
    assert generated.startswith(";;; p/colors.proto.lisp\n")
    assert "(proto:define-enum color" in generated
    assert generated.endswith("green))\n")


def test_stdout(tmp_path, capsys):
    descriptor = write_json(tmp_path / "colors.json", COLORS)

    assert main([descriptor, "--stdout", "--no-comments", "--no-sbcl-optimize"]) == 0

    out = capsys.readouterr().out
    assert out.startswith(";;; p/colors.proto.lisp")
    assert ";;; Top-Level enums" not in out
    assert "#+sbcl" not in out


def test_package_flag(tmp_path, capsys):
    descriptor = write_json(tmp_path / "colors.json", COLORS)

    assert main([descriptor, "--stdout", "--package", "COLORS"]) == 0
    assert '(cl:defpackage "COLORS" (:use))' in capsys.readouterr().out


def test_failing_file_does_not_stop_others(tmp_path, capsys):
    descriptor = write_json(
        tmp_path / "set.json",
        {"file": [{"name": "bad.proto", "syntax": "proto4"}, COLORS]},
    )
    out = tmp_path / "out"

    assert main([descriptor, "-o", str(out)]) == 1

    assert (out / "p" / "colors.lisp").exists()
    assert not (out / "bad.lisp").exists()
    assert "bad.proto" in capsys.readouterr().err


def test_missing_descriptor_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.json"), "--stdout"]) == 1
    assert "absent.json" in capsys.readouterr().err


def test_malformed_descriptor(tmp_path):
    descriptor = write_json(tmp_path / "bad.json", {"package": "no-name"})
    assert main([descriptor, "--stdout"]) == 1


def test_config_file(tmp_path, capsys):
    descriptor = write_json(tmp_path / "colors.json", COLORS)
    config = write_json(tmp_path / "gen.json", {"indent_size": 4})

    assert main([descriptor, "--stdout", "--config", config]) == 0
    assert "\n    (:red :index 0)" in capsys.readouterr().out


def test_bad_config_file(tmp_path):
    descriptor = write_json(tmp_path / "colors.json", COLORS)
    assert main([descriptor, "--config", str(tmp_path / "absent.json")]) == 1


@mock.patch("proto_lisp.utils.requests.get")
def test_url_input(mock_get, capsys):
    mock_get.return_value.json.return_value = COLORS

    assert main(["--url", "https://example.com/colors.json", "--stdout"]) == 0
    assert "(proto:define-enum color" in capsys.readouterr().out


def test_no_inputs_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "0.1.0" in capsys.readouterr().out


def test_verbose_prints_metadata(tmp_path, capsys):
    descriptor = write_json(tmp_path / "colors.json", COLORS)

    assert main([descriptor, "--stdout", "--verbose"]) == 0
    assert "Generation Metadata" in capsys.readouterr().err


def test_non_object_descriptor(tmp_path, capsys):
    descriptor = write_json(tmp_path / "list.json", [COLORS])

    assert main([descriptor, "--stdout"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "list.json" in captured.err
