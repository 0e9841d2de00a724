from __future__ import annotations

from pathlib import Path

from paycapture.model.config_io import (
    load_category_rules,
    load_merchant_overrides,
    load_settings,
    save_category_rules,
    save_merchant_overrides,
    save_settings,
)
from paycapture.model.rules import CategoryRule, CategoryRuleSet, default_rule_set
from paycapture.model.settings import CaptureSettings


class DescribeSettingsIO:
    def it_should_return_defaults_when_file_missing(self, tmp_path: Path):
        settings = load_settings(tmp_path / "capture.yml")
        assert settings == CaptureSettings()

    def it_should_round_trip_custom_values(self, tmp_path: Path):
        path = tmp_path / "config" / "capture.yml"
        save_settings(path, CaptureSettings(cooldown_ms=5000, session_timeout_ms=2000))

        loaded = load_settings(path)

        assert loaded.cooldown_ms == 5000
        assert loaded.session_timeout_ms == 2000

    def it_should_return_defaults_for_invalid_values(self, tmp_path: Path):
        path = tmp_path / "capture.yml"
        path.write_text("cooldown_ms: -1\n", encoding="utf-8")
        assert load_settings(path) == CaptureSettings()

    def it_should_return_defaults_for_malformed_yaml(self, tmp_path: Path):
        path = tmp_path / "capture.yml"
        path.write_text("cooldown_ms: [unclosed\n", encoding="utf-8")
        assert load_settings(path) == CaptureSettings()


class DescribeCategoryRulesIO:
    def it_should_fall_back_to_builtin_rules_when_missing(self, tmp_path: Path):
        assert load_category_rules(tmp_path / "rules.yml") == default_rule_set()

    def it_should_preserve_rule_order(self, tmp_path: Path):
        path = tmp_path / "rules.yml"
        rule_set = CategoryRuleSet(
            rules=[
                CategoryRule(category="交通", keywords=["滴滴"]),
                CategoryRule(category="餐饮", keywords=["咖啡"]),
            ],
            default_category="未分类",
        )
        save_category_rules(path, rule_set)

        loaded = load_category_rules(path)

        assert [r.category for r in loaded.rules] == ["交通", "餐饮"]
        assert loaded.default_category == "未分类"

    def it_should_fall_back_when_rule_list_empty(self, tmp_path: Path):
        path = tmp_path / "rules.yml"
        path.write_text("rules: []\n", encoding="utf-8")
        assert load_category_rules(path) == default_rule_set()


class DescribeMerchantOverridesIO:
    def it_should_return_empty_when_missing(self, tmp_path: Path):
        assert load_merchant_overrides(tmp_path / "overrides.yml") == {}

    def it_should_round_trip_unicode_names(self, tmp_path: Path):
        path = tmp_path / "overrides.yml"
        save_merchant_overrides(path, {"星巴克咖啡": "娱乐", "Joe's Diner": "其他"})

        assert load_merchant_overrides(path) == {"星巴克咖啡": "娱乐", "Joe's Diner": "其他"}
        assert "星巴克咖啡" in path.read_text(encoding="utf-8")

    def it_should_drop_blank_entries(self, tmp_path: Path):
        path = tmp_path / "overrides.yml"
        path.write_text("overrides:\n  '': 餐饮\n  店: ''\n  好店: 购物\n", encoding="utf-8")
        assert load_merchant_overrides(path) == {"好店": "购物"}
