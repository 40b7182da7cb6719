from eventhub.pages.base import Page, Toast, Toaster, ViewState
from eventhub.pages.home import HomePage
from eventhub.pages.events import EventsPage
from eventhub.pages.event_detail import EventDetailPage
from eventhub.pages.dashboard import DashboardPage, EventBuckets
from eventhub.pages.create_event import CreateEventPage

__all__ = [
    "Page",
    "Toast",
    "Toaster",
    "ViewState",
    "HomePage",
    "EventsPage",
    "EventDetailPage",
    "DashboardPage",
    "EventBuckets",
    "CreateEventPage",
]
