"""Initialize a new paycapture workspace directory."""

from __future__ import annotations

from paycapture.model.config_io import save_category_rules, save_settings
from paycapture.model.rules import default_rule_set
from paycapture.model.settings import CaptureSettings
from paycapture.workspace import Workspace

from .util import console

_STARTER_OVERRIDES_YML = """\
# Merchant category corrections
# Entries here win over the keyword rules in category_rules.yml.
# Use 'paycapture override' to manage them, or edit this file directly.
#
# Example:
#   overrides:
#     星巴克咖啡: 餐饮

overrides: {}
"""


def run(*, workspace: Workspace) -> int:
    """Create the workspace directories and starter config files.

    Skips anything that already exists (safe to run on an existing workspace).

    Returns:
        Exit code (0 = success)
    """
    root = workspace.root
    console.print(f"[bold cyan]Initializing workspace:[/] {root}\n")

    created = []
    skipped = []

    for directory in [workspace.ledger_path.parent, workspace.config_dir]:
        if directory.exists():
            skipped.append(str(directory.relative_to(root)) + "/")
        else:
            directory.mkdir(parents=True, exist_ok=True)
            created.append(str(directory.relative_to(root)) + "/")

    writers = [
        (workspace.settings_config, lambda p: save_settings(p, CaptureSettings())),
        (workspace.category_rules_config, lambda p: save_category_rules(p, default_rule_set())),
        (workspace.merchant_overrides_config, lambda p: p.write_text(_STARTER_OVERRIDES_YML, encoding="utf-8")),
    ]
    for path, write in writers:
        if path.exists():
            skipped.append(str(path.relative_to(root)))
        else:
            write(path)
            created.append(str(path.relative_to(root)))

    if created:
        console.print("[green]Created:[/]")
        for item in created:
            console.print(f"  {item}")
    if skipped:
        console.print("[dim]Already exists (skipped):[/dim]")
        for item in skipped:
            console.print(f"  [dim]{item}[/dim]")

    if not created:
        console.print("[green]Workspace already fully initialized.[/]")
    else:
        console.print(f"\n[green]Workspace ready at {root}[/]")
        console.print("\n[dim]Next steps:[/dim]")
        console.print("  1. Adjust config/category_rules.yml if needed")
        console.print("  2. Run: paycapture replay events.jsonl --write")

    return 0
