from __future__ import annotations

# Command implementations for the paycapture CLI.
# Each command module exposes a `run(...)` function that performs the action
# and prints to the console. Typer wrappers in paycapture.cli.app delegate here.

__all__ = [
    "init",
    "replay",
    "classify",
    "override",
    "records",
]
