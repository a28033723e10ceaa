"""Tests for configuration loading and version resolution."""

import json
from pathlib import Path

import pytest

from osis_bible.config import Config, VersionInfo


class TestConfigFile:
    """Test config persistence."""

    def test_missing_file_defaults(self, tmp_path):
        config = Config.load(tmp_path / "nope.json")
        assert config.language == "en"
        assert config.version == "kjv"
        assert set(config.versions) == {"kjv", "aravd", "arasvd"}

    def test_roundtrip(self, tmp_path):
        path = tmp_path / "config.json"
        config = Config(language="ar", version="arasvd", bibles_dir=tmp_path, fetch_timeout=3.5)
        config.versions["svd"] = VersionInfo("svd", "ar", "svd/books", None, books=["Gen"])
        config.save(path)

        restored = Config.load(path)
        assert restored.language == "ar"
        assert restored.version == "arasvd"
        assert restored.bibles_dir == tmp_path
        assert restored.fetch_timeout == 3.5
        assert restored.versions["svd"].books == ["Gen"]
        assert restored.versions["svd"].fallback_file is None

    def test_invalid_json_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert Config.load(path).version == "kjv"

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"language": "ar"}), encoding="utf-8")
        config = Config.load(path)
        assert config.language == "ar"
        assert config.max_concurrency == 8


class TestVersions:
    """Test version lookup and resolution."""

    def test_version_info(self):
        config = Config()
        assert config.version_info().name == "kjv"
        assert config.version_info("aravd").language == "ar"
        with pytest.raises(KeyError):
            config.version_info("niv")

    def test_paths(self):
        info = Config().version_info("kjv")
        assert info.books_path(Path("/data")) == Path("/data/kjv/books")
        assert info.fallback_path(Path("/data")) == Path("/data/kjv/kjv.xml")
        assert VersionInfo("x", "en", "x").fallback_path(Path("/data")) is None

    def test_resolve_version(self):
        config = Config()
        assert config.resolve_version("ar", "kjv") == "aravd"
        assert config.resolve_version("ar", "arasvd") == "arasvd"
        assert config.resolve_version("en", "aravd") == "kjv"
        assert config.resolve_version("en") == "kjv"
