"""活动领域模块。"""

from eventhub.events.repo import EventsRepository
from eventhub.events.model import Event, EventCreate, EventForm

__all__ = ["EventsRepository", "Event", "EventCreate", "EventForm"]
