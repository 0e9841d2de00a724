"""Record a user category correction for a merchant."""

from __future__ import annotations

from paycapture.model.config_io import save_merchant_overrides
from paycapture.workspace import Workspace

from .util import build_classifier, console


def run(*, merchant: str, category: str, workspace: Workspace, write: bool = False) -> int:
    """Map merchant to category, ahead of the keyword rules.

    Returns an exit code (0 success; 1 for invalid input). Dry-run when write=False.
    """
    merchant = merchant.strip()
    category = category.strip()
    if not merchant or not category:
        console.print("[red]Merchant and category must not be blank[/]")
        return 1

    classifier = build_classifier(workspace)
    before = classifier.classify(merchant)
    classifier.override(merchant, category)

    console.print(f"[bold]{merchant}[/]: {before} → [green]{category}[/]")
    if not write:
        console.print("[dim]Dry-run: use --write to save the override[/]")
        return 0

    save_merchant_overrides(workspace.merchant_overrides_config, classifier.user_overrides())
    console.print(f"[green]Saved to[/] {workspace.merchant_overrides_config}")
    return 0
