from __future__ import annotations

from decimal import Decimal

from rich.console import Console
from rich.text import Text

from paycapture.model.config_io import load_category_rules, load_merchant_overrides
from paycapture.services.category_classifier import CategoryClassifier
from paycapture.workspace import Workspace

console = Console()


def build_classifier(workspace: Workspace) -> CategoryClassifier:
    """Classifier using the workspace rule table and saved user overrides."""
    return CategoryClassifier(
        rule_set=load_category_rules(workspace.category_rules_config),
        overrides=load_merchant_overrides(workspace.merchant_overrides_config),
    )


def fmt_amount(amt: Decimal) -> Text:
    s = f"{amt:,.2f}"
    if amt < 0:
        return Text(s, style="bold red")
    elif amt > 0:
        return Text(s, style="bold green")
    return Text(s)
