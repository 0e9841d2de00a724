"""
UI accessibility event models.

Scope
- Pure Pydantic v2 models for the events delivered by the accessibility
  event source and the node tree attached to them
- The tree is an already-materialized, read-only value; nothing here holds a
  handle into the system that produced it
- No I/O operations
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class EventKind(StrEnum):
    """Accessibility event kinds the detector understands.

    Other kinds may still arrive on a UiEvent (the field is a plain string) and
    are rejected by the event filter.
    """

    window_state_changed = "window_state_changed"
    window_content_changed = "window_content_changed"


class SourceApp(StrEnum):
    """Payment application that originated an event."""

    wechat = "wechat"
    alipay = "alipay"
    unknown = "unknown"

    @classmethod
    def from_package(cls, package_name: str | None) -> SourceApp:
        """Resolve a package identifier; unrecognized or missing ids map to unknown."""
        if not package_name:
            return cls.unknown
        return _PACKAGE_TO_APP.get(package_name, cls.unknown)

    @property
    def channel_label(self) -> str:
        """Human-readable payment method label stored on records."""
        return _CHANNEL_LABELS[self]


WECHAT_PACKAGE = "com.tencent.mm"
ALIPAY_PACKAGE = "com.eg.android.AlipayGphone"

_PACKAGE_TO_APP: dict[str, SourceApp] = {
    WECHAT_PACKAGE: SourceApp.wechat,
    ALIPAY_PACKAGE: SourceApp.alipay,
}

_CHANNEL_LABELS: dict[SourceApp, str] = {
    SourceApp.wechat: "微信支付",
    SourceApp.alipay: "支付宝",
    SourceApp.unknown: "其他",
}


class UiNode(BaseModel):
    """One node of an accessibility tree snapshot.

    A child slot holding None stands for a node the system failed to hand
    over; walkers skip it silently.
    """

    model_config = ConfigDict(frozen=True)

    text: str | None = Field(default=None, description="Node's own text, if any")
    children: list[UiNode | None] = Field(default_factory=list, description="Child nodes in order")


class UiEvent(BaseModel):
    """An accessibility event as delivered by the event source."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(description="Event kind, see EventKind")
    package_name: str | None = Field(default=None, description="Originating package identifier")
    event_time_ms: int | None = Field(default=None, ge=0, description="Event time in epoch milliseconds")
    root: UiNode | None = Field(default=None, description="Root of the active window tree")


UiNode.model_rebuild()


__all__ = [
    "ALIPAY_PACKAGE",
    "EventKind",
    "SourceApp",
    "UiEvent",
    "UiNode",
    "WECHAT_PACKAGE",
]
