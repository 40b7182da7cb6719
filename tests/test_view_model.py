"""Event read model: detail composition, listing filters and search."""

import asyncio
from datetime import datetime, timezone

import pytest

from eventhub.agenda.model import AgendaItemCreate
from eventhub.agenda.repo import AgendaRepository
from eventhub.common.app_settings import settings
from eventhub.common.errors import NotFound, StoreUnavailable
from eventhub.events.repo import EventsRepository
from eventhub.profiles.repo import ProfilesRepository
from eventhub.registrations.repo import RegistrationsRepository
from eventhub.services.aggregates import AggregateReader
from eventhub.services.view_model import EventViewModel, search, split_by_time

from conftest import NOW


@pytest.fixture
def view_model(store, clock):
    return EventViewModel(
        EventsRepository(store),
        AgendaRepository(store),
        ProfilesRepository(store),
        AggregateReader(RegistrationsRepository(store)),
        clock=clock,
    )


def test_detail_composes_event_organizer_agenda_and_count(store, seeded, view_model):
    workshop = seeded["workshop"]["id"]
    store.seed("registrations", {"event_id": workshop, "user_id": "bob"})

    detail = asyncio.run(view_model.get_event_detail(workshop))

    assert detail.event.title == "Web Development Workshop"
    assert detail.organizer.display_name == "Alice Smith"
    assert detail.organizer.avatar_url == "https://img/alice.png"
    assert detail.attendee_count == 1
    assert detail.count_available


def test_agenda_comes_back_in_display_order_regardless_of_insertion(store, seeded, view_model):
    workshop = seeded["workshop"]["id"]
    agenda = AgendaRepository(store)
    items = [
        AgendaItemCreate(time="11:00", title="Talk", display_order=1),
        AgendaItemCreate(time="10:00", title="Open", display_order=0),
    ]

    async def scenario():
        await agenda.create_items(workshop, items)
        return await view_model.get_event_detail(workshop)

    detail = asyncio.run(scenario())

    assert [(a.time, a.title, a.display_order) for a in detail.agenda] == [
        ("10:00", "Open", 0),
        ("11:00", "Talk", 1),
    ]


def test_agenda_ties_keep_insertion_order(store, seeded, view_model):
    workshop = seeded["workshop"]["id"]
    store.seed(
        "agenda_items",
        {"event_id": workshop, "time": "", "title": "B", "display_order": 1},
        {"event_id": workshop, "time": "", "title": "C", "display_order": 1},
        {"event_id": workshop, "time": "", "title": "A", "display_order": 0},
    )

    detail = asyncio.run(view_model.get_event_detail(workshop))

    assert [a.title for a in detail.agenda] == ["A", "B", "C"]


def test_agenda_ties_follow_row_id_not_returned_order(store, seeded, view_model):
    workshop = seeded["workshop"]["id"]
    # stored out of id order, as an unordered scan may return them
    store.seed(
        "agenda_items",
        {"id": 502, "event_id": workshop, "time": "", "title": "C", "display_order": 1},
        {"id": 501, "event_id": workshop, "time": "", "title": "B", "display_order": 1},
        {"id": 503, "event_id": workshop, "time": "", "title": "A", "display_order": 0},
    )

    detail = asyncio.run(view_model.get_event_detail(workshop))

    assert [(a.id, a.title) for a in detail.agenda] == [(503, "A"), (501, "B"), (502, "C")]


def test_agenda_without_explicit_order_uses_position(store, seeded):
    workshop = seeded["workshop"]["id"]
    rows = asyncio.run(
        AgendaRepository(store).create_items(
            workshop, [AgendaItemCreate(title="first"), AgendaItemCreate(title="second")]
        )
    )
    assert [r["display_order"] for r in rows] == [0, 1]


def test_missing_organizer_profile_falls_back_to_placeholder(store, seeded, view_model):
    store.tables["profiles"] = []

    detail = asyncio.run(view_model.get_event_detail(seeded["workshop"]["id"]))

    assert detail.organizer.profile is None
    assert detail.organizer.display_name == settings.placeholder_name
    assert detail.organizer.avatar_url == settings.placeholder_avatar


def test_profile_without_name_uses_email(store, seeded, view_model):
    detail = asyncio.run(view_model.get_event_detail(seeded["mixer"]["id"]))
    assert detail.organizer.display_name == "bob@example.com"
    assert detail.organizer.avatar_url == settings.placeholder_avatar


def test_absent_event_is_not_found_not_a_store_error(store, seeded, view_model):
    with pytest.raises(NotFound):
        asyncio.run(view_model.get_event_detail(12345))


def test_store_failure_is_not_reported_as_not_found(store, seeded, view_model):
    store.unavailable.add("events")
    with pytest.raises(StoreUnavailable):
        asyncio.run(view_model.get_event_detail(seeded["workshop"]["id"]))


def test_future_only_listing_uses_now(store, seeded, view_model):
    events = asyncio.run(view_model.list_events(upcoming_only=True, now=NOW))
    assert [e.event.title for e in events] == ["Startup Networking Mixer"]


def test_full_listing_is_ordered_by_date(store, seeded, view_model):
    store.seed(
        "events",
        {"title": "Early", "date": "2023-05-01T09:00:00+00:00", "organizer_id": "alice"},
    )
    events = asyncio.run(view_model.list_events(upcoming_only=False))
    assert [e.event.title for e in events] == [
        "Early",
        "Web Development Workshop",
        "Startup Networking Mixer",
    ]


def test_listing_includes_counts_and_organizers(store, seeded, view_model):
    mixer = seeded["mixer"]["id"]
    store.seed(
        "registrations",
        {"event_id": mixer, "user_id": "alice"},
        {"event_id": mixer, "user_id": "carol"},
    )
    (item,) = asyncio.run(view_model.list_events())
    assert item.attendee_count == 2
    assert item.organizer.id == "bob"


def test_listing_renders_zero_counts_when_counts_unavailable(store, seeded, view_model):
    store.unavailable.add("registrations")
    (item,) = asyncio.run(view_model.list_events())
    assert item.attendee_count == 0
    assert item.count_available is False


def test_search_is_case_insensitive_over_title_description_location(store, seeded, view_model):
    events = asyncio.run(view_model.list_events(upcoming_only=False))

    assert [e.event.title for e in search(events, "network")] == ["Startup Networking Mixer"]
    assert [e.event.title for e in search(events, "HTML")] == ["Web Development Workshop"]
    assert [e.event.title for e in search(events, "san francisco")] == ["Startup Networking Mixer"]
    assert len(search(events, "  ")) == 2
    assert search(events, "no such thing") == []


def test_split_by_time(store, seeded, view_model):
    events = asyncio.run(view_model.list_events(upcoming_only=False))
    upcoming, past = split_by_time(events, datetime(2023, 7, 1, tzinfo=timezone.utc))
    assert [e.event.title for e in upcoming] == ["Startup Networking Mixer"]
    assert [e.event.title for e in past] == ["Web Development Workshop"]


def test_featured_respects_limit(store, seeded, view_model):
    store.seed(
        "events",
        {"title": "Later", "date": "2023-09-01T09:00:00+00:00", "organizer_id": "alice"},
        {"title": "Much later", "date": "2023-10-01T09:00:00+00:00", "organizer_id": "alice"},
    )
    featured = asyncio.run(view_model.featured(limit=2))
    assert [e.event.title for e in featured] == ["Startup Networking Mixer", "Later"]
