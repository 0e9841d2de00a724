"""Show the category predicted for a merchant name."""

from __future__ import annotations

from paycapture.workspace import Workspace

from .util import build_classifier, console


def run(*, merchant: str, workspace: Workspace) -> int:
    classifier = build_classifier(workspace)
    category = classifier.classify(merchant)
    if merchant in classifier.user_overrides():
        source = "override"
    elif classifier.rule_set.first_match(merchant) is not None:
        source = "keyword rule"
    else:
        source = "default"
    console.print(f"[bold]{merchant}[/] → [green]{category}[/] [dim]({source})[/]")
    return 0
