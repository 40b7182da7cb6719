"""Attendee count aggregation."""

import asyncio

import pytest

from eventhub.common.errors import StoreUnavailable
from eventhub.registrations.repo import RegistrationsRepository
from eventhub.services.aggregates import AggregateReader


def _reader(store, page_size=None):
    return AggregateReader(RegistrationsRepository(store, page_size=page_size))


def test_event_without_registrations_counts_zero(store, seeded):
    reader = _reader(store)
    assert asyncio.run(reader.count_registrations(seeded["mixer"]["id"])) == 0


def test_unknown_event_counts_zero_instead_of_not_found(store):
    reader = _reader(store)
    assert asyncio.run(reader.count_registrations(999)) == 0


def test_count_many_matches_individual_counts_in_one_read(store, seeded):
    workshop, mixer = seeded["workshop"]["id"], seeded["mixer"]["id"]
    store.seed(
        "registrations",
        {"event_id": workshop, "user_id": "bob"},
        {"event_id": workshop, "user_id": "carol"},
        {"event_id": mixer, "user_id": "carol"},
    )
    reader = _reader(store)

    async def scenario():
        store.calls.clear()
        grouped = await reader.count_many([workshop, mixer, 404])
        grouped_calls = list(store.calls)
        single = {eid: await reader.count_registrations(eid) for eid in (workshop, mixer, 404)}
        return grouped, grouped_calls, single

    grouped, grouped_calls, single = asyncio.run(scenario())

    assert grouped == single == {workshop: 2, mixer: 1, 404: 0}
    assert grouped_calls == [
        ("select", "registrations", {"event_id": {"in": [workshop, mixer, 404]}})
    ]


def test_count_many_pages_through_large_result_sets(store, seeded):
    workshop = seeded["workshop"]["id"]
    store.seed("registrations", *({"event_id": workshop, "user_id": f"u{i}"} for i in range(7)))
    reader = _reader(store, page_size=3)

    counts = asyncio.run(reader.count_many([workshop]))

    assert counts == {workshop: 7}
    assert [c[0] for c in store.calls] == ["select", "select", "select"]


def test_count_many_with_no_events_skips_the_store(store):
    assert asyncio.run(_reader(store).count_many([])) == {}
    assert store.calls == []


def test_store_unavailable_propagates(store, seeded):
    store.unavailable.add("registrations")
    with pytest.raises(StoreUnavailable):
        asyncio.run(_reader(store).count_registrations(seeded["mixer"]["id"]))
