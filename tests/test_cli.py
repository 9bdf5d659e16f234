"""Tests for the typenorm command line."""

import json
import tempfile

import yaml
from click.testing import CliRunner

from typenorm import __version__
from typenorm.cli import main


def _write_yaml(data) -> str:
    """Write data to a temporary YAML file and return the path."""
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(data, f)
    f.close()
    return f.name


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_normalize_json():
    result = CliRunner().invoke(main, ["normalize", "int[]|null", "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert len(data) == 1
    assert data[0]["kind"] == "array"
    assert data[0]["nullable"] is True
    assert data[0]["collection_value_type"]["kind"] == "int"


def test_normalize_format_from_env():
    result = CliRunner().invoke(main, ["normalize", "string"], env={"TYPENORM_FORMAT": "yaml"})
    assert result.exit_code == 0
    assert yaml.safe_load(result.output)[0]["kind"] == "string"


def test_normalize_table():
    result = CliRunner().invoke(main, ["normalize", "int|string"])
    assert result.exit_code == 0
    assert "int" in result.output
    assert "string" in result.output


def test_normalize_mixed_reports_no_information():
    result = CliRunner().invoke(main, ["normalize", "mixed"])
    assert result.exit_code == 0
    assert "no type information" in result.output


def test_normalize_invalid_annotation():
    result = CliRunner().invoke(main, ["normalize", "Foo<int"])
    assert result.exit_code == 1
    assert "Invalid annotation" in result.output


def test_batch_mapping():
    path = _write_yaml({"id": "int", "tags": "string[]", "owner": "?User"})
    result = CliRunner().invoke(main, ["batch", path, "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert set(data) == {"id", "tags", "owner"}
    assert data["owner"][0]["class_name"] == "User"
    assert data["owner"][0]["nullable"] is True


def test_batch_list_with_error():
    path = _write_yaml(["int", "Foo<a, b, c>"])
    result = CliRunner().invoke(main, ["batch", path, "--format", "table"])
    assert result.exit_code == 1
    assert "Generics take at most" in result.output


def test_batch_rejects_scalar_document():
    path = _write_yaml("int")
    result = CliRunner().invoke(main, ["batch", path])
    assert result.exit_code == 1


def test_kinds():
    result = CliRunner().invoke(main, ["kinds"])
    assert result.exit_code == 0
    assert "integer" in result.output
    assert "resource" in result.output


def test_batch_json_errors_go_to_stderr():
    path = _write_yaml({"a": "int", "b": "int<"})
    result = CliRunner().invoke(main, ["batch", path, "--format", "json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert set(data) == {"a"}
    assert "Expected a type name" in result.stderr


def test_batch_list_keeps_duplicates():
    path = _write_yaml(["int", "int", "?string"])
    result = CliRunner().invoke(main, ["batch", path, "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert list(data) == ["0", "1", "2"]
    assert data["0"] == data["1"]
    assert data["2"][0]["nullable"] is True


def test_batch_reports_non_string_entries():
    path = _write_yaml({"id": "int", "missing": None, "count": 3})
    result = CliRunner().invoke(main, ["batch", path, "--format", "yaml"])
    assert result.exit_code == 1
    data = yaml.safe_load(result.stdout)
    assert set(data) == {"id"}
    assert "expected an annotation string" in result.stderr
