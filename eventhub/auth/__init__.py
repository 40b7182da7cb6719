"""认证领域模块。"""

from eventhub.auth.model import Identity

__all__ = ["Identity"]
