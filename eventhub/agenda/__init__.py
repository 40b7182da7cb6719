"""议程领域模块。"""

from eventhub.agenda.repo import AgendaRepository
from eventhub.agenda.model import AgendaItem, AgendaItemCreate

__all__ = ["AgendaRepository", "AgendaItem", "AgendaItemCreate"]
