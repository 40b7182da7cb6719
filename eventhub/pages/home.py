from typing import List, Optional

from eventhub.pages.base import Page, ViewState
from eventhub.services.view_model import EventSummary


class HomePage(Page):
    """首页：展示最近即将开始的活动"""

    name = "home"

    def __init__(self, store, limit: Optional[int] = None, **kwargs):
        super().__init__(store, **kwargs)
        self.limit = limit
        self.featured: ViewState[List[EventSummary]] = ViewState("featured", [])

    async def setup_subscriptions(self) -> None:
        await self.subscriptions.watch("events", self.refresh)
        await self.subscriptions.watch("registrations", self.refresh)

    async def refresh(self) -> None:
        if await self.load(self.featured, lambda: self.view_model.featured(self.limit)):
            self.warn_if_counts_unavailable(self.featured.data)
