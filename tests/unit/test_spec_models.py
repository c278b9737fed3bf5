"""
Unit tests for file spec models.

Tests boolean override resolution and spec loading from JSON files.
"""

import json
from pathlib import Path

import pytest

from artup.core.exceptions import ConfigurationError, SpecFileError
from artup.core.models.spec import SpecFile, SpecFiles, parse_bool, parse_spec_vars


class TestParseBool:
    """Test boolean literal parsing."""

    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_literals(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_literals(self, value):
        assert parse_bool(value) is False

    @pytest.mark.parametrize("value", ["yes", "no", "tRuE", " true", "2"])
    def test_rejects_other_values(self, value):
        with pytest.raises(ValueError):
            parse_bool(value)


class TestSpecFileOverrides:
    """Test the get-or-default override lookups."""

    def test_missing_override_uses_default(self):
        entry = SpecFile(pattern="a/*")
        assert entry.is_recursive(True) is True
        assert entry.is_flat(False) is False

    def test_empty_override_uses_default(self):
        entry = SpecFile(pattern="a/*", recursive="")
        assert entry.is_recursive(True) is True

    def test_present_override_wins(self):
        entry = SpecFile(pattern="a/*", recursive="false", regexp="true")
        assert entry.is_recursive(True) is False
        assert entry.is_regexp(False) is True

    def test_malformed_override_raises_configuration_error(self):
        entry = SpecFile(pattern="a/*", flat="sometimes")
        with pytest.raises(ConfigurationError) as exc_info:
            entry.is_flat(True)
        assert exc_info.value.context["key"] == "flat"
        assert exc_info.value.context["value"] == "sometimes"

    def test_json_booleans_are_normalized(self):
        entry = SpecFile.model_validate({"pattern": "a/*", "explode": True, "includeDirs": False})
        assert entry.explode == "true"
        assert entry.is_explode(False) is True
        assert entry.is_include_dirs(True) is False

    def test_to_common_params(self):
        entry = SpecFile(pattern="a/*", target="repo/", props="k=v", exclusions=["*.tmp"])
        common = entry.to_common_params()
        assert common.pattern == "a/*"
        assert common.target == "repo/"
        assert common.props == "k=v"
        assert common.exclusions == ["*.tmp"]


class TestSpecFiles:
    """Test SpecFiles construction and loading."""

    def test_from_args_builds_single_entry(self):
        spec = SpecFiles.from_args("out/*.zip", "libs/", props="a=1", flat="false")
        assert len(spec) == 1
        entry = spec.get(0)
        assert entry.pattern == "out/*.zip"
        assert entry.flat == "false"
        assert entry.recursive is None

    def test_from_json_file(self, tmp_path: Path):
        spec_path = tmp_path / "spec.json"
        spec_path.write_text(
            json.dumps(
                {
                    "files": [
                        {"pattern": "a/*.txt", "target": "repo/a/", "recursive": "false"},
                        {"pattern": "b/*.bin", "target": "repo/b/", "props": "x=1"},
                    ]
                }
            )
        )
        spec = SpecFiles.from_json_file(spec_path)
        assert [f.pattern for f in spec.files] == ["a/*.txt", "b/*.bin"]
        assert spec.get(0).is_recursive(True) is False
        assert spec.get(1).props == "x=1"

    def test_from_json_file_substitutes_variables(self, tmp_path: Path):
        spec_path = tmp_path / "spec.json"
        spec_path.write_text('{"files": [{"pattern": "${dir}/*", "target": "${repo}/", "props": "${keep}"}]}')
        spec = SpecFiles.from_json_file(spec_path, {"dir": "out", "repo": "libs"})
        entry = spec.get(0)
        assert entry.pattern == "out/*"
        assert entry.target == "libs/"
        assert entry.props == "${keep}"

    def test_from_json_file_missing(self, tmp_path: Path):
        with pytest.raises(SpecFileError):
            SpecFiles.from_json_file(tmp_path / "missing.json")

    def test_from_json_file_invalid_json(self, tmp_path: Path):
        spec_path = tmp_path / "spec.json"
        spec_path.write_text("{not json")
        with pytest.raises(SpecFileError):
            SpecFiles.from_json_file(spec_path)

    def test_from_json_file_entry_without_pattern(self, tmp_path: Path):
        spec_path = tmp_path / "spec.json"
        spec_path.write_text('{"files": [{"target": "repo/"}]}')
        with pytest.raises(SpecFileError):
            SpecFiles.from_json_file(spec_path)

    def test_from_json_file_without_entries(self, tmp_path: Path):
        spec_path = tmp_path / "spec.json"
        spec_path.write_text('{"files": []}')
        with pytest.raises(SpecFileError):
            SpecFiles.from_json_file(spec_path)


class TestParseSpecVars:
    """Test spec variable parsing."""

    def test_parses_pairs(self):
        assert parse_spec_vars("a=1;b=x=y") == {"a": "1", "b": "x=y"}

    def test_empty(self):
        assert parse_spec_vars(None) == {}
        assert parse_spec_vars("") == {}

    def test_rejects_pair_without_separator(self):
        with pytest.raises(SpecFileError):
            parse_spec_vars("a=1;broken")
