# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import json
import re
import tomllib
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from jsonschema import Draft202012Validator

from .taxonomy import schema_path
from .types import ConfigError


CONFIG_FILENAME = "ariasense.toml"
DEFAULT_SEARCH_DEPTH = 2
MAX_SEARCH_DEPTH = 25

LEVEL_OFF = "off"
LEVEL_WARN = "warn"
LEVEL_ERROR = "error"
_NUMERIC_LEVELS = {0: LEVEL_OFF, 1: LEVEL_WARN, 2: LEVEL_ERROR}

_KEY_ALIASES = {
    "components": "component_tag_map",
    "component_map": "component_tag_map",
    "depth": "max_search_depth",
    "polymorphic_prop": "polymorphic_prop_name",
    "for_attributes": "html_for_attributes",
}

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def option_key(key: str) -> str:
    """``max-search-depth``, ``maxSearchDepth`` and ``max_search_depth`` are the same key."""
    text = _CAMEL_RE.sub(r"_\1", str(key).strip())
    return text.replace("-", "_").lower()


def clamp_depth(depth: int | None) -> int:
    if depth is None:
        return DEFAULT_SEARCH_DEPTH
    return max(0, min(int(depth), MAX_SEARCH_DEPTH))


@dataclass(frozen=True)
class RuleSetting:
    level: str = LEVEL_ERROR
    options: Mapping[str, Any] | None = None

    @property
    def enabled(self) -> bool:
        return self.level != LEVEL_OFF

    @classmethod
    def parse(cls, value: Any) -> RuleSetting:
        options = None
        if isinstance(value, (list, tuple)):
            if not value:
                raise ConfigError("Rule setting list must start with a level")
            level = value[0]
            if len(value) > 1:
                options = dict(value[1])
        else:
            level = value
        if isinstance(level, int) and not isinstance(level, bool):
            level = _NUMERIC_LEVELS.get(level, level)
        if not isinstance(level, str) or level not in (LEVEL_OFF, LEVEL_WARN, LEVEL_ERROR):
            raise ConfigError(f"Unsupported rule level {level!r}")
        return cls(level=level, options=MappingProxyType(options) if options is not None else None)


@dataclass(frozen=True)
class Configuration:
    component_tag_map: Mapping[str, str] = field(default_factory=dict)
    label_attributes: tuple[str, ...] = ()
    control_components: tuple[str, ...] = ()
    max_search_depth: int = DEFAULT_SEARCH_DEPTH
    polymorphic_prop_name: str | None = None
    polymorphic_allow_list: tuple[str, ...] = ()
    allowed_invalid_roles: tuple[str, ...] = ()
    html_for_attributes: tuple[str, ...] = ("htmlFor", "for")
    rules: Mapping[str, RuleSetting] = field(default_factory=dict)
    source: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "component_tag_map", MappingProxyType(dict(self.component_tag_map)))
        for name in (
            "label_attributes",
            "control_components",
            "polymorphic_allow_list",
            "allowed_invalid_roles",
            "html_for_attributes",
        ):
            object.__setattr__(self, name, tuple(str(v) for v in getattr(self, name)))
        object.__setattr__(self, "max_search_depth", clamp_depth(self.max_search_depth))
        rules = {str(k): v if isinstance(v, RuleSetting) else RuleSetting.parse(v) for k, v in self.rules.items()}
        object.__setattr__(self, "rules", MappingProxyType(rules))

    @classmethod
    def default(cls) -> Configuration:
        return _default_configuration()

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None, *, source: str | None = None) -> Configuration:
        """Build a configuration from user options (TOML table or plain dict).

        Keys may be kebab-case, camelCase or snake_case. Raises ``ConfigError``
        listing every schema violation, unknown rule id or invalid rule option.
        """
        normalized = normalize_options(options or {})
        errors = [_format_error(err) for err in _config_validator().iter_errors(normalized)]
        if errors:
            raise ConfigError(f"Invalid configuration{_where(source)}: " + "; ".join(errors), errors)
        rules = {rule_id: RuleSetting.parse(value) for rule_id, value in (normalized.get("rules") or {}).items()}
        rules = _validate_rules(rules, source)
        kwargs = {k: v for k, v in normalized.items() if k != "rules"}
        return cls(rules=rules, source=source, **kwargs)

    def rule_setting(self, rule_id: str) -> RuleSetting | None:
        return self.rules.get(rule_id)

    def replace(self, **changes: Any) -> Configuration:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update(changes)
        return Configuration(**values)

    def as_options(self) -> dict[str, Any]:
        return {
            "component_tag_map": dict(self.component_tag_map),
            "label_attributes": list(self.label_attributes),
            "control_components": list(self.control_components),
            "max_search_depth": self.max_search_depth,
            "polymorphic_prop_name": self.polymorphic_prop_name,
            "polymorphic_allow_list": list(self.polymorphic_allow_list),
            "allowed_invalid_roles": list(self.allowed_invalid_roles),
            "html_for_attributes": list(self.html_for_attributes),
            "rules": {
                rule_id: [setting.level, dict(setting.options)] if setting.options is not None else setting.level
                for rule_id, setting in self.rules.items()
            },
        }


@lru_cache(maxsize=1)
def _default_configuration() -> Configuration:
    return Configuration()


@lru_cache(maxsize=1)
def _config_validator() -> Draft202012Validator:
    schema = json.loads(schema_path("ariasense.config.v1").read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _where(source: str | None) -> str:
    return f" in {source}" if source else ""


def _format_error(err: Any) -> str:
    location = "/".join(str(p) for p in err.absolute_path)
    return f"{location or '<root>'}: {err.message}"


def normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in options.items():
        name = option_key(key)
        name = _KEY_ALIASES.get(name, name)
        if name == "rules" and isinstance(value, Mapping):
            value = {str(rule_id): _normalize_rule_value(v) for rule_id, v in value.items()}
        elif name == "component_tag_map" and isinstance(value, Mapping):
            value = dict(value)
        out[name] = value
    return out


def _normalize_rule_value(value: Any) -> Any:
    if isinstance(value, tuple):
        value = list(value)
    if isinstance(value, list) and len(value) > 1 and isinstance(value[1], Mapping):
        return [value[0], dict(value[1])]
    return value


def _validate_rules(rules: dict[str, RuleSetting], source: str | None) -> dict[str, RuleSetting]:
    from .rules import RULES

    errors: list[str] = []
    out: dict[str, RuleSetting] = {}
    for rule_id, setting in rules.items():
        rule = RULES.get(rule_id)
        if rule is None:
            errors.append(f"rules/{rule_id}: unknown rule")
            continue
        if setting.options is None:
            out[rule_id] = setting
            continue
        options = rule.normalize_options(setting.options)
        for err in rule.options_validator().iter_errors(options):
            errors.append(f"rules/{rule_id}/{_format_error(err)}")
        out[rule_id] = RuleSetting(level=setting.level, options=MappingProxyType(options))
    if errors:
        raise ConfigError(f"Invalid rule configuration{_where(source)}: " + "; ".join(errors), errors)
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _table_from(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    if path.name == "pyproject.toml":
        return (data.get("tool") or {}).get("ariasense")
    return data


def discover_config(start: Path | None = None) -> Path | None:
    """Find ``ariasense.toml`` or a ``pyproject.toml`` with ``[tool.ariasense]``.

    Searches ``start`` (default: the working directory) and its parents.
    """
    base = (start or Path.cwd()).resolve()
    for directory in (base, *base.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _table_from(pyproject, _read_toml(pyproject)) is not None:
            return pyproject
    return None


def load_config(path: str | Path | None = None, *, start: Path | None = None) -> Configuration:
    """Load configuration from an explicit file, or discover one.

    An explicit path that does not exist raises ``FileNotFoundError``; when
    nothing is discovered the default configuration is returned.
    """
    if path is None:
        found = discover_config(start)
        if found is None:
            return Configuration.default()
        path = found
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"No configuration file found at {path}")
    table = _table_from(path, _read_toml(path))
    if table is None:
        raise ConfigError(f"No [tool.ariasense] table in {path}")
    return Configuration.from_options(table, source=str(path))
