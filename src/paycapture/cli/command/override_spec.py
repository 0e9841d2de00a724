from __future__ import annotations

from pathlib import Path

from paycapture.cli.command.override import run
from paycapture.cli.command.util import build_classifier
from paycapture.model.config_io import load_merchant_overrides, save_merchant_overrides
from paycapture.workspace import Workspace


class DescribeOverride:
    def it_should_be_dry_run_by_default(self, tmp_path: Path):
        workspace = Workspace(root=tmp_path)

        rc = run(merchant="某某工作室", category="娱乐", workspace=workspace)

        assert rc == 0
        assert not workspace.merchant_overrides_config.exists()

    def it_should_persist_with_write(self, tmp_path: Path):
        workspace = Workspace(root=tmp_path)

        rc = run(merchant="某某工作室", category="娱乐", workspace=workspace, write=True)

        assert rc == 0
        assert load_merchant_overrides(workspace.merchant_overrides_config) == {"某某工作室": "娱乐"}
        assert build_classifier(workspace).classify("某某工作室") == "娱乐"

    def it_should_keep_existing_overrides(self, tmp_path: Path):
        workspace = Workspace(root=tmp_path)
        save_merchant_overrides(workspace.merchant_overrides_config, {"全家便利店": "购物"})

        run(merchant="星巴克咖啡", category="娱乐", workspace=workspace, write=True)

        assert load_merchant_overrides(workspace.merchant_overrides_config) == {
            "全家便利店": "购物",
            "星巴克咖啡": "娱乐",
        }

    def it_should_reject_blank_input(self, tmp_path: Path):
        workspace = Workspace(root=tmp_path)

        assert run(merchant="  ", category="娱乐", workspace=workspace, write=True) == 1
        assert run(merchant="星巴克咖啡", category="", workspace=workspace, write=True) == 1
        assert not workspace.merchant_overrides_config.exists()
