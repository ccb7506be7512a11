import json

import pytest

from proto_lisp.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


def test_defaults():
    config = load_config()
    assert config == GeneratorConfig()
    assert config.file_extension == ".lisp"
    assert config.sbcl_optimize
    assert config.add_comments
    assert config.package_override is None


def test_file_then_overrides(tmp_path):
    config_file = tmp_path / "gen.json"
    config_file.write_text(
        json.dumps({"indent_size": 4, "add_comments": False, "team": "infra"})
    )

    config = load_config(custom_config={"indent_size": 3}, config_file=config_file)

    assert config.indent_size == 3
    assert config.add_comments is False
    assert config.custom == {"team": "infra"}


@pytest.mark.parametrize(
    "name, content",
    [
        ("settings.yaml", "indent_size: 2"),
        ("broken.json", "{not json"),
        ("list.json", "[1, 2]"),
    ],
)
def test_bad_config_files(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(config_file=path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(config_file=tmp_path / "absent.json")


def test_save_round_trip(tmp_path):
    manager = ConfigManager()
    path = tmp_path / "saved.json"
    original = GeneratorConfig(package_override="P", custom={"team": "infra"})

    manager.save_config(original, path)

    assert json.loads(path.read_text())["team"] == "infra"
    assert manager.get_config(config_file=path) == original


def test_validate_config():
    manager = ConfigManager()
    assert manager.validate_config(GeneratorConfig()) == []

    warnings = manager.validate_config(
        GeneratorConfig(indent_size=-1, file_extension="lisp", package_override="  ")
    )
    assert len(warnings) == 3
