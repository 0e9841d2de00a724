from __future__ import annotations

import pytest
from pydantic import ValidationError

from paycapture.model.ui_event import (
    ALIPAY_PACKAGE,
    WECHAT_PACKAGE,
    EventKind,
    SourceApp,
    UiEvent,
    UiNode,
)


class DescribeSourceApp:
    def it_should_resolve_wechat_package(self):
        assert SourceApp.from_package(WECHAT_PACKAGE) is SourceApp.wechat

    def it_should_resolve_alipay_package(self):
        assert SourceApp.from_package(ALIPAY_PACKAGE) is SourceApp.alipay

    def it_should_map_unrecognized_package_to_unknown(self):
        assert SourceApp.from_package("com.example.notes") is SourceApp.unknown

    def it_should_map_missing_package_to_unknown(self):
        assert SourceApp.from_package(None) is SourceApp.unknown
        assert SourceApp.from_package("") is SourceApp.unknown

    def it_should_require_an_exact_package_match(self):
        assert SourceApp.from_package(f" {WECHAT_PACKAGE} ") is SourceApp.unknown
        assert SourceApp.from_package(ALIPAY_PACKAGE.lower()) is SourceApp.unknown

    def it_should_expose_channel_labels(self):
        assert SourceApp.wechat.channel_label == "微信支付"
        assert SourceApp.alipay.channel_label == "支付宝"


class DescribeUiEvent:
    def it_should_parse_nested_tree_from_json(self):
        # Arrange
        payload = {
            "kind": "window_state_changed",
            "package_name": WECHAT_PACKAGE,
            "event_time_ms": 1000,
            "root": {"text": None, "children": [{"text": "支付成功"}, None, {"children": [{"text": "¥8.00"}]}]},
        }

        # Act
        event = UiEvent.model_validate(payload)

        # Assert
        assert event.kind == EventKind.window_state_changed
        assert event.root is not None
        assert event.root.children[0].text == "支付成功"
        assert event.root.children[1] is None
        assert event.root.children[2].children[0].text == "¥8.00"

    def it_should_accept_unrecognized_kinds_as_plain_strings(self):
        event = UiEvent(kind="view_clicked", package_name=WECHAT_PACKAGE)
        assert event.kind == "view_clicked"

    def it_should_be_immutable(self):
        node = UiNode(text="a")
        with pytest.raises(ValidationError):
            node.text = "b"

    def it_should_reject_negative_event_times(self):
        with pytest.raises(ValidationError):
            UiEvent(kind="window_state_changed", package_name=WECHAT_PACKAGE, event_time_ms=-5)

    def it_should_accept_the_epoch_as_event_time(self):
        event = UiEvent(kind="window_state_changed", package_name=WECHAT_PACKAGE, event_time_ms=0)
        assert event.event_time_ms == 0
