from __future__ import annotations

import pytest
from pydantic import ValidationError

from paycapture.model.rules import CategoryRule, CategoryRuleSet, default_rule_set


class DescribeCategoryRule:
    def it_should_match_on_substring(self):
        rule = CategoryRule(category="餐饮", keywords=["咖啡"])
        assert rule.matches("星巴克咖啡")
        assert not rule.matches("滴滴出行")

    def it_should_reject_blank_keywords(self):
        with pytest.raises(ValidationError):
            CategoryRule(category="餐饮", keywords=["咖啡", "  "])

    def it_should_require_at_least_one_keyword(self):
        with pytest.raises(ValidationError):
            CategoryRule(category="餐饮", keywords=[])


class DescribeCategoryRuleSet:
    def it_should_return_first_matching_rule(self):
        rule_set = CategoryRuleSet(
            rules=[
                CategoryRule(category="A", keywords=["x"]),
                CategoryRule(category="B", keywords=["x", "y"]),
            ]
        )
        assert rule_set.first_match("xy") == "A"
        assert rule_set.first_match("y") == "B"
        assert rule_set.first_match("z") is None

    def it_should_list_categories_with_default_last(self):
        rule_set = default_rule_set()
        assert rule_set.categories() == ["餐饮", "购物", "交通", "娱乐", "医疗", "住房", "其他"]

    def it_should_resolve_shared_keywords_by_rule_order(self):
        # 药店 is listed under both shopping and medical; shopping comes first
        assert default_rule_set().first_match("大药店") == "购物"
