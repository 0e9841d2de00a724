"""
Central configuration for the payment capture application.

Path resolution lives in paycapture.workspace.Workspace. Tunables that a user
may change are modelled by paycapture.model.settings.CaptureSettings; the
values here are its defaults and the fixed sentinels shared across modules.
"""

DEFAULT_COOLDOWN_MS = 3000
DEFAULT_SESSION_TIMEOUT_MS = 10000

UNKNOWN_MERCHANT = "未知商户"
DEFAULT_CATEGORY = "其他"
UNKNOWN_TIME = "未知时间"

MAX_TREE_DEPTH = 64
MAX_CHILDREN_PER_NODE = 256
