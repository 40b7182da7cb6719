from dataclasses import dataclass, field
from typing import Any, List

from eventhub.common.errors import NotFound, Unauthenticated
from eventhub.pages.base import Page, ViewState
from eventhub.services.view_model import EventSummary, split_by_time


@dataclass
class EventBuckets:
    upcoming: List[EventSummary] = field(default_factory=list)
    past: List[EventSummary] = field(default_factory=list)

    def all(self) -> List[EventSummary]:
        return self.upcoming + self.past


class DashboardPage(Page):
    """控制台：我主办的活动 + 我报名的活动，均按即将开始/已结束拆分"""

    name = "dashboard"

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.my_events: ViewState[EventBuckets] = ViewState("my_events", EventBuckets())
        self.registered: ViewState[EventBuckets] = ViewState("registered_events", EventBuckets())

    async def mount(self) -> "DashboardPage":
        if self.identity is None:
            self.login_required = True
            raise Unauthenticated("Please sign in to view your dashboard")
        await super().mount()
        return self

    async def setup_subscriptions(self) -> None:
        await self.subscriptions.watch(
            "events", self.refresh, column="organizer_id", value=self.identity.id
        )
        # 任何报名变更都可能影响主办方的人数或我的报名列表
        await self.subscriptions.watch("registrations", self.refresh)

    async def refresh(self) -> None:
        if await self.load(self.my_events, self._fetch_my_events):
            self.warn_if_counts_unavailable(self.my_events.data.all())
        await self.load(self.registered, self._fetch_registered)

    async def _fetch_my_events(self) -> EventBuckets:
        events = await self.view_model.list_events(
            upcoming_only=False, organizer_id=self.identity.id
        )
        return EventBuckets(*split_by_time(events, self.clock()))

    async def _fetch_registered(self) -> EventBuckets:
        event_ids = await self.registrations_repo.get_event_ids_for_user(self.identity.id)
        events = await self.view_model.list_events(upcoming_only=False, event_ids=event_ids)
        return EventBuckets(*split_by_time(events, self.clock()))

    async def delete_event(self, event_id: Any) -> bool:
        """删除自己主办的活动（议程、报名、活动依次删除）"""
        try:
            row = await self.events_repo.get_event_by_id(event_id)
            if row is None or row.get("organizer_id") != self.identity.id:
                raise NotFound("Event", event_id)
            await self.events_repo.delete_event(event_id)
        except Exception as e:
            self.report(e)
            return False

        self.log.info(f"活动已删除: {event_id}")
        self.toaster.show("Event Deleted", "The event has been successfully deleted.")
        # 存储层的 DELETE 通知不带过滤列，主动刷新一次本页面
        await self.refresh()
        return True
