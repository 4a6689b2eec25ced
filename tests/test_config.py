"""Unit tests for Config and RenderOptions (skel.config).

Tests cover:
- Config defaults and binary suffix normalisation
- Config.is_binary
- Config save/load and from_env
- RenderOptions immutability
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from skel.config import DEFAULT_BINARY_SUFFIXES, Config, RenderOptions
from skel.errors import ConfigError, FilesystemError


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_default_file_names(self):
        config = Config()
        assert config.context_filename == "project.json"
        assert config.metadata_filename == "__metadata.json"
        assert config.template_dirname == "template"

    @pytest.mark.unit
    def test_default_dir_mode(self):
        assert Config().dir_mode == 0o755

    @pytest.mark.unit
    def test_debug_off_by_default(self):
        assert Config().debug is False

    @pytest.mark.unit
    def test_default_suffixes_include_png(self):
        config = Config()
        assert ".png" in config.binary_suffixes
        assert config.binary_suffixes == DEFAULT_BINARY_SUFFIXES

    @pytest.mark.unit
    def test_suffixes_not_shared_between_instances(self):
        a = Config()
        b = Config()
        a.binary_suffixes.append(".xyz")
        assert ".xyz" not in b.binary_suffixes

    @pytest.mark.unit
    def test_invalid_dir_mode_rejected(self):
        with pytest.raises(ValidationError):
            Config(dir_mode=-1)


class TestBinarySuffixes:
    @pytest.mark.unit
    def test_suffixes_normalised(self):
        config = Config(binary_suffixes=["PNG", " .Svg ", ""])
        assert config.binary_suffixes == [".png", ".svg"]

    @pytest.mark.unit
    def test_is_binary_matches_suffix(self):
        config = Config()
        assert config.is_binary("assets/logo.png")
        assert config.is_binary(Path("img/photo.JPG"))

    @pytest.mark.unit
    def test_is_binary_rejects_text(self):
        config = Config()
        assert not config.is_binary("README.md")
        assert not config.is_binary("png")

    @pytest.mark.unit
    def test_custom_suffix(self):
        config = Config(binary_suffixes=[".bin"])
        assert config.is_binary("firmware.bin")
        assert not config.is_binary("logo.png")


class TestConfigSerialisation:
    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = Config(template_dirname="tree", debug=True)
        path = config.save(tmp_path / "nested" / "skel.json")
        assert path.exists()

        loaded = Config.load(path)
        assert loaded == config

    @pytest.mark.unit
    def test_load_partial_file_keeps_defaults(self, tmp_path: Path):
        path = tmp_path / "skel.json"
        path.write_text('{"context_filename": "answers.json"}', encoding="utf-8")
        config = Config.load(path)
        assert config.context_filename == "answers.json"
        assert config.template_dirname == "template"

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Config file not found") as exc_info:
            Config.load(tmp_path / "nope.json")
        assert exc_info.value.path == tmp_path / "nope.json"

    @pytest.mark.unit
    def test_load_invalid_settings(self, tmp_path: Path):
        path = tmp_path / "skel.json"
        path.write_text('{"dir_mode": -1}', encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config file"):
            Config.load(path)

    @pytest.mark.unit
    def test_save_into_file_path_fails(self, tmp_path: Path):
        (tmp_path / "blocker").write_text("x")
        with pytest.raises(FilesystemError):
            Config().save(tmp_path / "blocker" / "skel.json")

    @pytest.mark.unit
    def test_from_env_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_from_env_overrides(self):
        env = {
            "SKEL_CONTEXT_FILENAME": "answers.json",
            "SKEL_METADATA_FILENAME": "meta.json",
            "SKEL_TEMPLATE_DIRNAME": "skeleton",
            "SKEL_BINARY_SUFFIXES": "png, .bin",
            "SKEL_DEBUG": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.context_filename == "answers.json"
        assert config.metadata_filename == "meta.json"
        assert config.template_dirname == "skeleton"
        assert config.binary_suffixes == [".png", ".bin"]
        assert config.debug is True

    @pytest.mark.unit
    def test_from_env_debug_false_values(self):
        with patch.dict(os.environ, {"SKEL_DEBUG": "0"}, clear=True):
            assert Config.from_env().debug is False


# ---------------------------------------------------------------------------
# RenderOptions
# ---------------------------------------------------------------------------


class TestRenderOptions:
    @pytest.mark.unit
    def test_interactive_by_default(self):
        assert RenderOptions().use_defaults is False

    @pytest.mark.unit
    def test_frozen(self):
        options = RenderOptions(use_defaults=True)
        with pytest.raises(ValidationError):
            options.use_defaults = False
