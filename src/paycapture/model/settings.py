"""Tunable capture settings, mirrored by config/capture.yml."""

from __future__ import annotations

from pydantic import BaseModel, Field

from paycapture.config import (
    DEFAULT_COOLDOWN_MS,
    DEFAULT_SESSION_TIMEOUT_MS,
    MAX_CHILDREN_PER_NODE,
    MAX_TREE_DEPTH,
)


class CaptureSettings(BaseModel):
    cooldown_ms: int = Field(default=DEFAULT_COOLDOWN_MS, gt=0, description="Global debounce between detections")
    session_timeout_ms: int = Field(
        default=DEFAULT_SESSION_TIMEOUT_MS, gt=0, description="Confirmation card lifetime"
    )
    max_tree_depth: int = Field(default=MAX_TREE_DEPTH, gt=0, description="Deepest node level walked")
    max_children_per_node: int = Field(
        default=MAX_CHILDREN_PER_NODE, gt=0, description="Children visited per node"
    )

    @property
    def session_timeout_seconds(self) -> float:
        return self.session_timeout_ms / 1000


__all__ = ["CaptureSettings"]
