"""报名领域模块。"""

from eventhub.registrations.repo import RegistrationsRepository
from eventhub.registrations.model import Registration

__all__ = ["RegistrationsRepository", "Registration"]
