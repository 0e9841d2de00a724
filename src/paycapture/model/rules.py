from __future__ import annotations

"""
Category keyword rules for merchant classification.

Scope
- Pure Pydantic v2 models for an ordered keyword rule table
- Mirrors config/category_rules.yml structure
- No I/O operations (handled by config_io.py)

Rule order is significant: the first rule whose keywords match wins.
"""

from pydantic import BaseModel, Field, model_validator

from paycapture.config import DEFAULT_CATEGORY


class CategoryRule(BaseModel):
    """Keyword set mapping to a single category label."""

    category: str = Field(min_length=1, description="Category label assigned on match")
    keywords: list[str] = Field(min_length=1, description="Substrings matched against the merchant")

    @model_validator(mode="after")
    def _validate_keywords(self) -> CategoryRule:
        """Reject blank keywords; an empty substring would match every merchant."""
        if any(not kw.strip() for kw in self.keywords):
            raise ValueError(f"Blank keyword in rule for category: {self.category}")
        return self

    def matches(self, merchant: str) -> bool:
        return any(kw in merchant for kw in self.keywords)


class CategoryRuleSet(BaseModel):
    """Root configuration for category rules.

    Wraps the ordered rule list and the fallback category for clean YAML
    serialization.
    """

    rules: list[CategoryRule] = Field(default_factory=list, description="Ordered rules")
    default_category: str = Field(default=DEFAULT_CATEGORY, min_length=1)

    def first_match(self, merchant: str) -> str | None:
        """Category of the first matching rule, or None."""
        for rule in self.rules:
            if rule.matches(merchant):
                return rule.category
        return None

    def categories(self) -> list[str]:
        """Distinct category labels in rule order, followed by the default."""
        seen: list[str] = []
        for rule in self.rules:
            if rule.category not in seen:
                seen.append(rule.category)
        if self.default_category not in seen:
            seen.append(self.default_category)
        return seen


FOOD_KEYWORDS = [
    "餐厅", "美食", "饭店", "小吃", "火锅", "烧烤", "快餐", "外卖",
    "食堂", "早餐", "午餐", "晚餐", "食品", "零食", "水果",
    "甜点", "烘焙", "咖啡", "茶", "饮料", "酒水",
]

SHOPPING_KEYWORDS = [
    "商场", "超市", "百货", "购物", "专卖店", "电商", "网购", "淘宝",
    "京东", "拼多多", "服装", "鞋帽", "箱包", "化妆品", "手机", "电器",
    "数码", "家具", "文具", "图书", "药店",
]

TRANSPORT_KEYWORDS = [
    "公交", "地铁", "出租车", "打车", "滴滴", "高铁", "火车", "飞机",
    "机票", "汽车", "加油", "停车", "高速", "过路费", "共享单车",
]

ENTERTAINMENT_KEYWORDS = [
    "电影", "游戏", "KTV", "酒吧", "演唱会", "音乐", "剧场", "门票",
    "景点", "旅游", "健身", "运动", "游泳", "球类", "玩具",
]

MEDICAL_KEYWORDS = [
    "医院", "诊所", "医疗", "药店", "药物", "保健", "体检", "牙科",
    "眼科", "理疗", "中医", "西医", "门诊", "住院", "手术",
]

HOUSING_KEYWORDS = [
    "房租", "水电", "燃气", "物业", "宽带", "装修", "家居", "家电",
    "家具", "日用品", "清洁", "维修", "搬家", "酒店", "住宿",
]


def default_rule_set() -> CategoryRuleSet:
    """Built-in rule table: food, shopping, transport, entertainment, medical, housing."""
    return CategoryRuleSet(
        rules=[
            CategoryRule(category="餐饮", keywords=FOOD_KEYWORDS),
            CategoryRule(category="购物", keywords=SHOPPING_KEYWORDS),
            CategoryRule(category="交通", keywords=TRANSPORT_KEYWORDS),
            CategoryRule(category="娱乐", keywords=ENTERTAINMENT_KEYWORDS),
            CategoryRule(category="医疗", keywords=MEDICAL_KEYWORDS),
            CategoryRule(category="住房", keywords=HOUSING_KEYWORDS),
        ],
        default_category=DEFAULT_CATEGORY,
    )


__all__ = [
    "CategoryRule",
    "CategoryRuleSet",
    "default_rule_set",
]
