"""Tests for the YAML options file loader."""

import pytest

from saladplate.config import ConfigLoader
from saladplate.exceptions import ConfigValidationError


def write_config(tmp_path, content):
    path = tmp_path / "saladplate.yaml"
    path.write_text(content)
    return path


def test_loads_valid_options(tmp_path):
    path = write_config(tmp_path, """
debug: true
directory: build
suffix: .conf
environment:
  REGION: eu-west-1
  PORT: 8080
  ENABLED: yes
  EMPTY:
""")
    config = ConfigLoader().load(path)

    assert config['debug'] is True
    assert config['directory'] == "build"
    assert config['suffix'] == ".conf"
    assert config['environment'] == {
        "REGION": "eu-west-1",
        "PORT": "8080",
        "ENABLED": "true",
        "EMPTY": "",
    }


def test_empty_file_is_empty_options(tmp_path):
    assert ConfigLoader().load(write_config(tmp_path, "")) == {}


def test_unknown_field_is_rejected(tmp_path):
    path = write_config(tmp_path, "outptu: out.txt\n")

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigLoader().load(path)

    assert exc_info.value.exit_code == 2
    assert "Unknown field 'outptu'" in str(exc_info.value)


def test_all_errors_are_reported_together(tmp_path):
    path = write_config(tmp_path, """
debug: "yes"
output: 3
suffix: "  "
environment: [A, B]
""")
    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigLoader().load(path)

    messages = [error.message for error in exc_info.value.errors]
    assert "'debug' must be a boolean, got str" in messages
    assert "'output' must be a string, got int" in messages
    assert "'suffix' cannot be empty" in messages
    assert "'environment' must be a mapping of names to values" in messages
    assert all(error.path == str(path) for error in exc_info.value.errors)


def test_nested_environment_values_are_rejected(tmp_path):
    path = write_config(tmp_path, "environment:\n  A:\n    nested: 1\n")

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigLoader().load(path)

    assert "'environment.A' must be a scalar" in str(exc_info.value)


def test_non_mapping_document_is_rejected(tmp_path):
    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigLoader().load(write_config(tmp_path, "- a\n- b\n"))

    assert "must be a YAML mapping" in str(exc_info.value)


def test_invalid_yaml_is_rejected(tmp_path):
    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigLoader().load(write_config(tmp_path, "debug: [unclosed\n"))

    assert "Failed to load options file" in str(exc_info.value)


def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(ConfigValidationError):
        ConfigLoader().load(tmp_path / "absent.yaml")
