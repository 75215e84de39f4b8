"""Tests for YAML configuration loading."""

import pytest

from feedlist.config import DEFAULT_STRIP_TAGS, AppConfig, ReaderConfig, load_config


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)
    assert isinstance(cfg, AppConfig)
    assert cfg.reader.item_location == "item"
    assert cfg.reader.strip_tags == DEFAULT_STRIP_TAGS
    assert cfg.fetch.retries == 2


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        """
reader:
  item_location: entry
  params:
    api_key: secret
  strip_tags: script
  unknown_option: 1
fetch:
  timeout_seconds: 5
logging:
  level: DEBUG
extra_section:
  ignored: true
""",
        encoding="utf-8",
    )
    cfg = load_config(str(path))

    assert cfg.reader.item_location == "entry"
    assert cfg.reader.params == {"api_key": "secret"}
    assert cfg.reader.strip_tags == "script"
    assert cfg.reader.convert_xml is True
    assert cfg.fetch.timeout_seconds == 5
    assert cfg.fetch.retries == 2
    assert cfg.logging.level == "DEBUG"


def test_empty_yaml_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_default_configs_are_independent():
    first = load_config(None)
    first.reader.params["k"] = "v"
    assert load_config(None).reader.params == {}


def test_reader_direction_is_validated(tmp_path):
    with pytest.raises(ValueError):
        ReaderConfig(direction="diagonal")

    path = tmp_path / "config.yaml"
    path.write_text("reader:\n  direction: sideways\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))
