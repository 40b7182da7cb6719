"""Event creation form and page."""

import asyncio
from datetime import datetime, timezone

from eventhub.agenda.model import AgendaItemCreate
from eventhub.common.errors import StoreUnavailable
from eventhub.events.model import EventForm
from eventhub.integrations.supabase.storage import event_image_storage
from eventhub.pages import CreateEventPage, EventDetailPage


class RecordingStorage:
    def __init__(self):
        self.uploads = []

    async def upload_event_image(self, data, filename="image.png"):
        self.uploads.append((data, filename))
        path = f"events/fixed.{filename.rsplit('.', 1)[-1]}"
        return {"path": path, "url": f"https://cdn.example/{path}"}


def _form(**overrides):
    values = dict(
        title=" Product Design Workshop ",
        description="Interactive product design.",
        day="2023-09-10",
        start_time="10:00",
        end_time="16:00",
        location="Design Studio, Seattle",
        agenda=[
            AgendaItemCreate(time="10:00", title="Welcome"),
            AgendaItemCreate(time="11:00", title="Prototyping"),
        ],
    )
    values.update(overrides)
    return EventForm(**values)


def test_form_reports_missing_required_fields():
    form = EventForm(title="Meetup", day="", start_time="  ")
    assert form.missing_fields() == ["description", "day", "start_time", "end_time", "location"]
    assert _form().missing_fields() == []


def test_form_combines_day_and_times():
    event = _form().to_event_create("alice", image_url="https://cdn.example/x.png")
    assert event.title == "Product Design Workshop"
    assert event.date == datetime(2023, 9, 10, 10, tzinfo=timezone.utc)
    assert event.end_time == datetime(2023, 9, 10, 16, tzinfo=timezone.utc)
    row = event.to_row()
    assert row["organizer_id"] == "alice"
    assert row["image_url"] == "https://cdn.example/x.png"


def test_row_omits_missing_image():
    assert "image_url" not in _form().to_event_create("alice").to_row()


def test_submit_creates_event_with_agenda_and_image(store, seeded, alice, clock):
    storage = RecordingStorage()
    page = CreateEventPage(store, storage=storage, identity=alice, clock=clock)

    event_id = asyncio.run(page.submit(_form(), image=b"\x89PNG", image_name="cover.PNG"))

    assert event_id is not None
    assert page.created_event_id == event_id
    assert page.submitting is False
    (row,) = store.rows("events", id=event_id)
    assert row["organizer_id"] == "alice"
    assert row["image_url"] == "https://cdn.example/events/fixed.PNG"
    assert storage.uploads == [(b"\x89PNG", "cover.PNG")]
    agenda = store.rows("agenda_items", event_id=event_id)
    assert [(a["title"], a["display_order"]) for a in agenda] == [("Welcome", 0), ("Prototyping", 1)]
    assert page.toaster.last.title == "Event Created!"


def test_created_event_is_visible_on_its_detail_page(store, seeded, alice, clock):
    page = CreateEventPage(store, identity=alice, clock=clock)

    async def scenario():
        event_id = await page.submit(_form())
        async with EventDetailPage(store, event_id, identity=alice, clock=clock) as detail:
            return detail.detail.data

    detail = asyncio.run(scenario())

    assert detail.event.title == "Product Design Workshop"
    assert detail.organizer.display_name == "Alice Smith"
    assert [a.title for a in detail.agenda] == ["Welcome", "Prototyping"]
    assert detail.attendee_count == 0


def test_submit_rejects_incomplete_form_without_writing(store, alice):
    page = CreateEventPage(store, identity=alice)

    result = asyncio.run(page.submit(_form(title="", location="")))

    assert result is None
    assert store.calls == []
    assert page.toaster.last.title == "Error"
    assert page.toaster.last.description == "Please fill in all required fields"


def test_submit_requires_sign_in(store):
    page = CreateEventPage(store)

    assert asyncio.run(page.submit(_form())) is None
    assert page.login_required
    assert store.calls == []


def test_end_before_start_is_accepted(store, alice):
    page = CreateEventPage(store, identity=alice)

    event_id = asyncio.run(page.submit(_form(start_time="18:00", end_time="09:00")))

    assert event_id is not None
    assert store.rows("events", id=event_id)


def test_store_failure_during_submit_reports_connection_problem(store, alice):
    store.unavailable.add("events")
    page = CreateEventPage(store, identity=alice)

    assert asyncio.run(page.submit(_form())) is None
    assert page.created_event_id is None
    assert page.submitting is False
    assert page.toaster.last.title == "Connection problem"


def test_failed_agenda_write_removes_the_event(store, alice, monkeypatch):
    page = CreateEventPage(store, identity=alice)

    async def refuse(event_id, items):
        raise StoreUnavailable("agenda insert failed")

    monkeypatch.setattr(page.agenda_repo, "create_items", refuse)

    assert asyncio.run(page.submit(_form())) is None
    assert store.rows("events") == []
    assert [(op, table) for op, table, _ in store.calls if op == "delete"] == [
        ("delete", "agenda_items"),
        ("delete", "registrations"),
        ("delete", "events"),
    ]
    assert page.created_event_id is None
    assert page.toaster.last.title == "Connection problem"


def test_pages_share_one_image_storage(store):
    first, second = CreateEventPage(store), CreateEventPage(store)
    assert first.storage is second.storage is event_image_storage
