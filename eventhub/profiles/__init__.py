"""用户资料领域模块。"""

from eventhub.profiles.repo import ProfilesRepository
from eventhub.profiles.model import Profile

__all__ = ["ProfilesRepository", "Profile"]
