"""
Workspace - centralized data path resolution for the payment capture application.

A Workspace represents the root directory containing the ledger database and
configuration. All paths are computed relative to this root.

Resolution priority:
1. Explicit path (--data-dir CLI option)
2. PAYCAPTURE_DATA environment variable
3. Current working directory
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Workspace:
    """Root directory for all capture data paths."""

    root: Path

    @classmethod
    def resolve(cls, explicit: Path | None = None) -> Workspace:
        """Resolve workspace root from explicit path, env var, or CWD.

        Args:
            explicit: Explicitly provided path (highest priority)

        Returns:
            Workspace with resolved root
        """
        if explicit is not None:
            return cls(root=explicit)
        env = os.environ.get("PAYCAPTURE_DATA")
        if env:
            return cls(root=Path(env))
        return cls(root=Path.cwd())

    @property
    def ledger_path(self) -> Path:
        return self.root / "data" / "ledger.db"

    @property
    def config_dir(self) -> Path:
        return self.root / "config"

    @property
    def settings_config(self) -> Path:
        return self.config_dir / "capture.yml"

    @property
    def category_rules_config(self) -> Path:
        return self.config_dir / "category_rules.yml"

    @property
    def merchant_overrides_config(self) -> Path:
        return self.config_dir / "merchant_overrides.yml"


__all__ = ["Workspace"]
