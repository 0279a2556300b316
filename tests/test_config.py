"""Tests for tureng.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tureng.api.types import Lang
from tureng.config import Config, config_from_dict, load_config


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TURENG_CONFIG_DIR", str(tmp_path))
    return tmp_path


class TestDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.lang is Lang.ENTR
        assert config.limit == 9
        assert config.debounce_ms == 250
        assert config.tick_ms == 20
        assert config.timeout == 10.0

    def test_merged_ignores_none(self) -> None:
        config = Config(limit=5).merged(limit=None, lang=Lang.ENDE)
        assert config.limit == 5
        assert config.lang is Lang.ENDE


class TestConfigFromDict:
    def test_all_fields(self) -> None:
        config = config_from_dict(
            {"lang": "enfr", "limit": 4, "debounce_ms": 100, "tick_ms": 50, "timeout": 3}
        )
        assert config == Config(
            lang=Lang.ENFR, limit=4, debounce_ms=100, tick_ms=50, timeout=3.0
        )

    @pytest.mark.parametrize(
        "data",
        [
            {"limit": 0},
            {"limit": "9"},
            {"debounce_ms": True},
            {"timeout": -1},
            {"lang": "xx"},
            {"colour": "always"},
        ],
    )
    def test_invalid(self, data: dict) -> None:
        with pytest.raises(ValueError):
            config_from_dict(data)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, config_dir: Path) -> None:
        assert load_config() == Config()

    def test_reads_file(self, config_dir: Path) -> None:
        (config_dir / "config.json").write_text(json.dumps({"lang": "ende", "limit": 5}))
        config = load_config()
        assert config.lang is Lang.ENDE
        assert config.limit == 5

    def test_bad_file_falls_back(
        self, config_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (config_dir / "config.json").write_text("{not json")
        assert load_config() == Config()
        assert "Error reading config" in capsys.readouterr().err
