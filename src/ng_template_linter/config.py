"""
Linter configuration.

Settings come from a TOML file: either the `[tool.ng-template-linter]` table
of a `pyproject.toml`, or the top level of a standalone file:

    disabled-rules = ["cdk-focus-trap-selector"]
    log-level = "INFO"
    format = "json"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Literal

from .validation.rules import DEPRECATION_RULES
from .validation.rules import DeprecationRule

OutputFormat = Literal["text", "json"]

_TOOL_TABLE = "ng-template-linter"


@dataclass
class LinterConfig:
    disabled_rules: list[str] = field(default_factory=list)
    log_level: int = logging.WARNING
    output_format: OutputFormat = "text"


def load_config(path: Path) -> LinterConfig:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get(_TOOL_TABLE, {})
    if not isinstance(data, dict):
        raise ValueError(f"Invalid configuration table in {path}")
    return config_from_mapping(data, source=str(path))


def config_from_mapping(data: dict, *, source: str = "<config>") -> LinterConfig:
    config = LinterConfig()

    disabled = data.get("disabled-rules", [])
    if not isinstance(disabled, list) or not all(isinstance(r, str) for r in disabled):
        raise ValueError(f"{source}: 'disabled-rules' must be a list of strings")
    config.disabled_rules = list(disabled)

    level = data.get("log-level")
    if level is not None:
        if not isinstance(level, str) or not isinstance(
            logging.getLevelName(level.upper()), int
        ):
            raise ValueError(f"{source}: unknown log-level {level!r}")
        config.log_level = logging.getLevelName(level.upper())

    fmt = data.get("format", "text")
    if fmt not in ("text", "json"):
        raise ValueError(f"{source}: format must be 'text' or 'json', got {fmt!r}")
    config.output_format = fmt

    return config


def select_rules(
    config: LinterConfig,
    rules: tuple[DeprecationRule, ...] = DEPRECATION_RULES,
) -> tuple[DeprecationRule, ...]:
    known = {rule.name for rule in rules}
    unknown = sorted(set(config.disabled_rules) - known)
    if unknown:
        raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")
    disabled = set(config.disabled_rules)
    return tuple(rule for rule in rules if rule.name not in disabled)
