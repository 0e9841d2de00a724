from __future__ import annotations

"""
Configuration I/O (YAML loading and saving).

Functions for reading and writing the workspace config files:
- config/capture.yml            -> CaptureSettings
- config/category_rules.yml     -> CategoryRuleSet
- config/merchant_overrides.yml -> user merchant -> category corrections

Loaders are resilient: a missing or invalid file yields the defaults and the
problem is logged. Savers create parent directories and raise on failure.

Privacy
- All operations are local file I/O only
- No network access
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from paycapture.model.rules import CategoryRuleSet, default_rule_set
from paycapture.model.settings import CaptureSettings

logger = logging.getLogger(__name__)


def _read_yaml(path: Path) -> dict[str, Any] | None:
    """Return the mapping stored at path, or None when missing or unreadable."""
    if not path.exists():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return None
    return data


def _write_yaml(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _validate_or_default(model: type[BaseModel], data: dict[str, Any] | None, default, path: Path):
    if data is None:
        return default
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid config %s: %s", path, exc)
        return default


def load_settings(path: Path) -> CaptureSettings:
    """Load capture settings; defaults when the file is missing or invalid."""
    return _validate_or_default(CaptureSettings, _read_yaml(path), CaptureSettings(), path)


def save_settings(path: Path, settings: CaptureSettings) -> None:
    _write_yaml(path, settings.model_dump(mode="json"))


def load_category_rules(path: Path) -> CategoryRuleSet:
    """Load the ordered category rule table.

    Args:
        path: Path to category_rules.yml

    Returns:
        CategoryRuleSet from the file, or the built-in table if the file is
        missing, invalid, or declares no rules
    """
    rule_set = _validate_or_default(CategoryRuleSet, _read_yaml(path), default_rule_set(), path)
    if not rule_set.rules:
        return default_rule_set()
    return rule_set


def save_category_rules(path: Path, rule_set: CategoryRuleSet) -> None:
    _write_yaml(path, rule_set.model_dump(mode="json"))


def load_merchant_overrides(path: Path) -> dict[str, str]:
    """Load user merchant -> category corrections.

    Entries with a blank merchant or category are dropped.
    """
    data = _read_yaml(path)
    if data is None:
        return {}
    raw = data.get("overrides") or {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring overrides in %s: not a mapping", path)
        return {}
    overrides: dict[str, str] = {}
    for merchant, category in raw.items():
        merchant_text = str(merchant).strip() if merchant is not None else ""
        category_text = str(category).strip() if category is not None else ""
        if merchant_text and category_text:
            overrides[merchant_text] = category_text
    return overrides


def save_merchant_overrides(path: Path, overrides: dict[str, str]) -> None:
    _write_yaml(path, {"overrides": dict(sorted(overrides.items()))})


__all__ = [
    "load_category_rules",
    "load_merchant_overrides",
    "load_settings",
    "save_category_rules",
    "save_merchant_overrides",
    "save_settings",
]
