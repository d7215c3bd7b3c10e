"""
Unit tests for polysoup.project_config module.

Tests:
- Config dataclasses and defaults
- JSON (de)serialization
- Config file search hierarchy
- Merging and logging setup from config
"""

import json
import logging

import numpy as np
import pytest

from polysoup.logging_config import PACKAGE_LOGGER
from polysoup.project_config import (
    CONFIG_FILENAME,
    ImportConfig,
    LoggingConfig,
    ProjectConfig,
    apply_logging_config,
    find_config_file,
    load_config,
    merge_configs,
)


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Empty cwd and home so no real .polysoup.json is picked up."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return home, work


class TestConfigDataclasses:
    """Tests for section dataclasses."""

    def test_defaults(self):
        config = ProjectConfig()

        assert config.importer.precision == "float64"
        assert config.importer.default_patch_name == "_DEFAULT"
        assert config.importer.encoding == "utf-8"
        assert config.importer.validate_references is True
        assert config.logging.level == "INFO"
        assert config.logging.json_file is None

    def test_dtype_property(self):
        assert ImportConfig().dtype == np.float64
        assert ImportConfig(precision="float32").dtype == np.float32
        assert ImportConfig(precision="single").dtype == np.float32
        assert ImportConfig(precision="double").dtype == np.float64

    def test_invalid_precision(self):
        with pytest.raises(TypeError):
            ImportConfig(precision="float16").dtype

    def test_level_number(self):
        assert LoggingConfig(level="debug").level_number == logging.DEBUG
        assert LoggingConfig(level="WARNING").level_number == logging.WARNING
        assert LoggingConfig(level="chatty").level_number == logging.INFO


class TestSerialization:
    """Tests for dict/JSON conversion."""

    def test_from_dict_partial(self):
        config = ProjectConfig.from_dict({"importer": {"precision": "float32"}})

        assert config.importer.precision == "float32"
        assert config.importer.encoding == "utf-8"
        assert config.logging.level == "INFO"

    def test_from_dict_ignores_unknown(self):
        config = ProjectConfig.from_dict({
            "_comment": "ignored",
            "exporter": {"format": "ply"},
            "importer": {"tolerance": 0.1, "_note": "x", "encoding": "cp1251"},
            "logging": "not a section",
        })

        assert config.importer.encoding == "cp1251"
        assert not hasattr(config.importer, "tolerance")
        assert config.logging == LoggingConfig()

    def test_json_round_trip(self):
        original = ProjectConfig(
            importer=ImportConfig(precision="float32", default_patch_name="body"),
            logging=LoggingConfig(level="DEBUG", use_colors=False),
        )

        restored = ProjectConfig.from_json(original.to_json())
        assert restored == original

    def test_save_and_load(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        config = ProjectConfig(importer=ImportConfig(validate_references=False))

        config.save(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["importer"]["validate_references"] is False

        assert ProjectConfig.load(path) == config

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProjectConfig.load(tmp_path / "missing.json")


class TestFindConfigFile:
    """Tests for find_config_file search order."""

    def test_nothing_found(self, isolated_dirs):
        assert find_config_file() is None

    def test_explicit_wins(self, isolated_dirs, tmp_path):
        home, work = isolated_dirs
        explicit = tmp_path / "custom.json"
        explicit.write_text("{}")
        (work / CONFIG_FILENAME).write_text("{}")

        assert find_config_file(explicit_config=explicit) == explicit

    def test_missing_explicit_falls_back(self, isolated_dirs, tmp_path):
        home, work = isolated_dirs
        (work / CONFIG_FILENAME).write_text("{}")

        found = find_config_file(explicit_config=tmp_path / "nope.json")
        assert found == work / CONFIG_FILENAME

    def test_mesh_directory_before_cwd(self, isolated_dirs, tmp_path):
        home, work = isolated_dirs
        models = tmp_path / "models"
        models.mkdir()
        (models / CONFIG_FILENAME).write_text("{}")
        (work / CONFIG_FILENAME).write_text("{}")

        found = find_config_file(mesh_path=models / "bunny.obj.gz")
        assert found == models / CONFIG_FILENAME

    def test_home_last(self, isolated_dirs):
        home, work = isolated_dirs
        (home / CONFIG_FILENAME).write_text("{}")

        assert find_config_file() == home / CONFIG_FILENAME


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, isolated_dirs):
        assert load_config() == ProjectConfig()

    def test_reads_project_file(self, isolated_dirs):
        home, work = isolated_dirs
        (work / CONFIG_FILENAME).write_text(
            json.dumps({"importer": {"precision": "single"}})
        )

        config = load_config()
        assert config.importer.dtype == np.float32

    def test_broken_json_falls_back(self, isolated_dirs, caplog):
        home, work = isolated_dirs
        (work / CONFIG_FILENAME).write_text("{ not json")

        with caplog.at_level(logging.ERROR, logger="polysoup.project_config"):
            config = load_config()

        assert config == ProjectConfig()
        assert any("Failed to load config" in r.getMessage() for r in caplog.records)


class TestMergeAndApply:
    """Tests for merge_configs and apply_logging_config."""

    def test_override_non_defaults(self):
        base = ProjectConfig(
            importer=ImportConfig(precision="float32", encoding="cp1251"),
        )
        override = ProjectConfig(
            importer=ImportConfig(default_patch_name="hull"),
            logging=LoggingConfig(level="DEBUG"),
        )

        merged = merge_configs(base, override)

        assert merged.importer.precision == "float32"
        assert merged.importer.encoding == "cp1251"
        assert merged.importer.default_patch_name == "hull"
        assert merged.logging.level == "DEBUG"

    def test_merge_does_not_mutate_base(self):
        base = ProjectConfig()
        merge_configs(base, ProjectConfig(importer=ImportConfig(precision="float32")))
        assert base.importer.precision == "float64"

    def test_apply_logging_config(self, tmp_path):
        config = ProjectConfig(logging=LoggingConfig(
            level="WARNING",
            json_file=str(tmp_path / "log.json"),
            use_colors=False,
        ))

        logger = apply_logging_config(config)

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
