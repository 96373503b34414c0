"""Tests for configuration models and the YAML loader."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from declarative_assertion.config import AssertionConfig, ConfigLoader


def test_defaults():
    config = AssertionConfig()

    assert config.log_level == "INFO"
    assert config.log_dispatch is True
    assert config.log_file is None
    assert config.require_evaluation is True


def test_log_level_is_normalized():
    assert AssertionConfig(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        AssertionConfig(log_level="verbose")


def test_load_explicit_file(tmp_path):
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("log_level: warning\nrequire_evaluation: false\n", encoding="utf-8")

    config = ConfigLoader.load("custom.yaml", tmp_path)

    assert config.log_level == "WARNING"
    assert config.require_evaluation is False


def test_load_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader.load("missing.yaml", tmp_path)


def test_load_empty_file(tmp_path):
    (tmp_path / "assertions.yaml").write_text("", encoding="utf-8")

    assert ConfigLoader.load(root_dir=tmp_path) == AssertionConfig()


def test_find_config_in_parent_directory(tmp_path):
    (tmp_path / ".assertions.yml").write_text("log_dispatch: false\n", encoding="utf-8")
    nested = tmp_path / "tests" / "api"
    nested.mkdir(parents=True)

    found = ConfigLoader.find_config_file(nested)
    assert found == (tmp_path / ".assertions.yml").resolve()

    config = ConfigLoader.load(root_dir=nested)
    assert config.log_dispatch is False


def test_merge_only_overrides_set_fields():
    base = AssertionConfig(log_level="WARNING", log_file=Path("dispatch.log"))
    override = AssertionConfig(require_evaluation=False)

    merged = ConfigLoader.merge_configs(base, override)

    assert merged.log_level == "WARNING"
    assert merged.log_file == Path("dispatch.log")
    assert merged.require_evaluation is False


def test_search_prefers_nearest_directory(tmp_path):
    (tmp_path / "assertions.yaml").write_text("log_level: ERROR\n", encoding="utf-8")
    nested = tmp_path / "suite"
    nested.mkdir()
    (nested / ".assertions.yaml").write_text("log_level: DEBUG\n", encoding="utf-8")

    assert ConfigLoader.load(root_dir=nested).log_level == "DEBUG"


def test_search_order_within_directory(tmp_path):
    (tmp_path / ".assertions.yml").write_text("log_level: DEBUG\n", encoding="utf-8")
    (tmp_path / "assertions.yml").write_text("log_level: ERROR\n", encoding="utf-8")

    assert ConfigLoader.find_config_file(tmp_path) == (tmp_path / "assertions.yml").resolve()


def test_invalid_value_in_file_rejected(tmp_path):
    (tmp_path / "bad.yaml").write_text("log_level: verbose\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        ConfigLoader.load("bad.yaml", tmp_path)


def test_non_mapping_file_rejected(tmp_path):
    (tmp_path / "bad.yaml").write_text("- log_level\n- INFO\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        ConfigLoader.load("bad.yaml", tmp_path)
