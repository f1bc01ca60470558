from __future__ import annotations

from pathlib import Path

import pytest

from ariasense.config import (
    CONFIG_FILENAME,
    Configuration,
    RuleSetting,
    clamp_depth,
    discover_config,
    load_config,
    option_key,
)
from ariasense.types import ConfigError


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_option_keys_accept_camel_kebab_and_snake_case() -> None:
    assert option_key("maxSearchDepth") == "max_search_depth"
    assert option_key("max-search-depth") == "max_search_depth"
    assert option_key("max_search_depth") == "max_search_depth"


def test_depth_is_clamped() -> None:
    assert clamp_depth(None) == 2
    assert clamp_depth(-3) == 0
    assert clamp_depth(99) == 25
    assert Configuration(max_search_depth=40).max_search_depth == 25


def test_defaults() -> None:
    config = Configuration.default()
    assert config.max_search_depth == 2
    assert config.html_for_attributes == ("htmlFor", "for")
    assert dict(config.component_tag_map) == {}
    assert Configuration.default() is config


def test_from_options_normalizes_keys_and_aliases() -> None:
    config = Configuration.from_options(
        {
            "components": {"Button": "button", "Icon*": "svg"},
            "labelAttributes": ["label"],
            "depth": 4,
            "polymorphic-prop-name": "as",
        }
    )
    assert config.component_tag_map["Button"] == "button"
    assert config.label_attributes == ("label",)
    assert config.max_search_depth == 4
    assert config.polymorphic_prop_name == "as"


def test_schema_violations_are_reported_together() -> None:
    with pytest.raises(ConfigError) as excinfo:
        Configuration.from_options({"max_search_depth": "deep", "bogus": 1})
    assert len(excinfo.value.errors) >= 2


def test_rule_settings_parse_levels_and_options() -> None:
    assert RuleSetting.parse("warn").level == "warn"
    assert RuleSetting.parse(0).level == "off"
    setting = RuleSetting.parse(["error", {"components": ["Link"]}])
    assert setting.level == "error"
    assert setting.options["components"] == ["Link"]
    with pytest.raises(ConfigError):
        RuleSetting.parse("loud")
    with pytest.raises(ConfigError):
        RuleSetting.parse(True)


def test_rule_options_are_validated_per_rule() -> None:
    config = Configuration.from_options({"rules": {"anchor-is-valid": ["warn", {"specialLink": ["to"]}]}})
    setting = config.rule_setting("anchor-is-valid")
    assert setting.level == "warn"
    assert setting.options["special_link"] == ["to"]

    with pytest.raises(ConfigError, match="unknown rule"):
        Configuration.from_options({"rules": {"no-such-rule": "error"}})
    with pytest.raises(ConfigError, match="aspects"):
        Configuration.from_options({"rules": {"anchor-is-valid": ["error", {"aspects": ["nope"]}]}})


def test_as_options_round_trips_through_from_options() -> None:
    config = Configuration.from_options({"control_components": ["Field"], "rules": {"scope": "warn"}})
    again = Configuration.from_options(config.as_options())
    assert again == config


def test_load_config_reads_ariasense_toml(tmp_path: Path) -> None:
    path = _write(
        tmp_path / CONFIG_FILENAME,
        'max_search_depth = 5\n[component_tag_map]\nMyButton = "button"\n[rules]\nscope = "off"\n',
    )
    config = load_config(path)
    assert config.max_search_depth == 5
    assert config.component_tag_map["MyButton"] == "button"
    assert config.rule_setting("scope").level == "off"
    assert config.source == str(path)


def test_discover_config_walks_up_to_pyproject(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[tool.ariasense]\nlabel_attributes = ["label"]\n')
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert discover_config(nested) == tmp_path / "pyproject.toml"
    assert load_config(start=nested).label_attributes == ("label",)


def test_discover_prefers_ariasense_toml_in_same_directory(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[tool.ariasense]\nmax_search_depth = 3\n")
    _write(tmp_path / CONFIG_FILENAME, "max_search_depth = 7\n")
    assert load_config(start=tmp_path).max_search_depth == 7


def test_pyproject_without_table_is_an_error_when_explicit(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    path = _write(tmp_path / CONFIG_FILENAME, "max_search_depth = = 3\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(path)


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")
