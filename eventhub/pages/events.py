from functools import partial
from typing import List, Optional

from eventhub.pages.base import Page, ViewState
from eventhub.services.view_model import EventSummary, search


class EventsPage(Page):
    """活动列表页：即将开始的活动 + 客户端搜索"""

    name = "events"

    def __init__(self, store, upcoming_only: bool = True, **kwargs):
        super().__init__(store, **kwargs)
        self.upcoming_only = upcoming_only
        self.term = ""
        self.events: ViewState[List[EventSummary]] = ViewState("events", [])

    async def setup_subscriptions(self) -> None:
        await self.subscriptions.watch("events", self.refresh)
        await self.subscriptions.watch("registrations", self.refresh)

    async def refresh(self) -> None:
        fetch = partial(self.view_model.list_events, upcoming_only=self.upcoming_only)
        if await self.load(self.events, fetch):
            self.warn_if_counts_unavailable(self.events.data)

    def search(self, term: Optional[str]) -> List[EventSummary]:
        """只在已拉取的结果里过滤，不发起查询"""
        self.term = term or ""
        return self.visible

    @property
    def visible(self) -> List[EventSummary]:
        return search(self.events.data or [], self.term)
