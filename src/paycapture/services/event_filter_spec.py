from __future__ import annotations

import pytest

from paycapture.model.ui_event import ALIPAY_PACKAGE, WECHAT_PACKAGE, SourceApp, UiEvent
from paycapture.services.event_filter import CooldownState, EventFilter


class DescribeCooldownState:
    def it_should_start_without_a_detection(self):
        state = CooldownState()
        assert state.last_detection_ms is None
        assert not state.is_cooling_down(0, 3000)

    def it_should_cool_down_for_the_interval_after_a_stamp(self):
        state = CooldownState()
        state.stamp(10_000)

        assert state.is_cooling_down(10_000, 3000)
        assert state.is_cooling_down(12_999, 3000)
        assert not state.is_cooling_down(13_000, 3000)


class DescribeEventFilter:
    @pytest.fixture
    def event_filter(self) -> EventFilter:
        return EventFilter(CooldownState(), cooldown_ms=3000)

    @pytest.mark.parametrize("kind", ["window_state_changed", "window_content_changed"])
    def it_should_accept_recognized_kinds_from_known_apps(self, event_filter: EventFilter, kind: str):
        event = UiEvent(kind=kind, package_name=WECHAT_PACKAGE)
        assert event_filter.accept(event, now_ms=1_000) is SourceApp.wechat

    def it_should_resolve_alipay(self, event_filter: EventFilter):
        event = UiEvent(kind="window_state_changed", package_name=ALIPAY_PACKAGE)
        assert event_filter.accept(event, now_ms=1_000) is SourceApp.alipay

    def it_should_reject_other_event_kinds(self, event_filter: EventFilter):
        event = UiEvent(kind="view_clicked", package_name=WECHAT_PACKAGE)
        assert event_filter.accept(event, now_ms=1_000) is None

    def it_should_reject_padded_package_identifiers(self, event_filter: EventFilter):
        event = UiEvent(kind="window_state_changed", package_name=f" {WECHAT_PACKAGE} ")

        assert event_filter.accept(event, now_ms=1_000) is None
        assert event_filter.cooldown.last_detection_ms is None

    def it_should_reject_unknown_packages(self, event_filter: EventFilter):
        event = UiEvent(kind="window_state_changed", package_name="com.example.notes")
        assert event_filter.accept(event, now_ms=1_000) is None

    def it_should_apply_cooldown_across_apps(self, event_filter: EventFilter):
        event_filter.cooldown.stamp(50_000)
        alipay = UiEvent(kind="window_state_changed", package_name=ALIPAY_PACKAGE)

        assert event_filter.accept(alipay, now_ms=52_000) is None
        assert event_filter.accept(alipay, now_ms=53_000) is SourceApp.alipay

    def it_should_not_stamp_the_cooldown_itself(self, event_filter: EventFilter):
        event = UiEvent(kind="window_state_changed", package_name=WECHAT_PACKAGE)

        event_filter.accept(event, now_ms=1_000)

        assert event_filter.cooldown.last_detection_ms is None
