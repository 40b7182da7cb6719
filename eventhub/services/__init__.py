from eventhub.services.aggregates import AggregateReader
from eventhub.services.registration import RegistrationController
from eventhub.services.view_model import (
    EventDetail,
    EventSummary,
    EventViewModel,
    OrganizerView,
    search,
    split_by_time,
)

__all__ = [
    "AggregateReader",
    "RegistrationController",
    "EventDetail",
    "EventSummary",
    "EventViewModel",
    "OrganizerView",
    "search",
    "split_by_time",
]
