from typing import Any, Optional

from eventhub.common.errors import DuplicateRegistration, Unauthenticated
from eventhub.integrations.notice.mail import RegistrationMailer
from eventhub.pages.base import Page, ViewState
from eventhub.services.registration import RegistrationController
from eventhub.services.view_model import EventDetail


class EventDetailPage(Page):
    """活动详情页：详情读模型 + 当前用户的报名状态"""

    name = "event_detail"

    def __init__(
        self,
        store,
        event_id: Any,
        mailer: Optional[RegistrationMailer] = None,
        **kwargs,
    ):
        super().__init__(store, **kwargs)
        self.event_id = event_id
        self.mailer = mailer or RegistrationMailer(store)
        self.controller = RegistrationController(
            self.registrations_repo,
            event_id,
            identity=self.identity,
            mailer=self.mailer,
        )
        self.detail: ViewState[EventDetail] = ViewState("event_detail")
        self.membership: ViewState[bool] = ViewState("membership", False)

    @property
    def not_found(self) -> bool:
        return self.detail.not_found

    @property
    def is_registered(self) -> bool:
        return bool(self.membership.data)

    @property
    def attendee_count(self) -> int:
        return self.detail.data.attendee_count if self.detail.data else 0

    async def setup_subscriptions(self) -> None:
        await self.subscriptions.watch(
            "registrations", self.refresh, column="event_id", value=self.event_id
        )
        await self.subscriptions.watch(
            "events", self.refresh, column="id", value=self.event_id
        )
        await self.subscriptions.watch(
            "agenda_items", self.refresh, column="event_id", value=self.event_id
        )

    async def refresh(self) -> None:
        if await self.load(self.detail, lambda: self.view_model.get_event_detail(self.event_id)):
            if self.detail.data is not None:
                self.warn_if_counts_unavailable([self.detail.data])
        if not self.detail.not_found:
            await self.load(self.membership, self.controller.load)

    #! 报名操作
    async def register(self) -> bool:
        title = self.detail.data.event.title if self.detail.data else "this event"
        try:
            await self.controller.register()
        except DuplicateRegistration as e:
            self.toaster.show("Already registered", e.message, "destructive")
            await self.load(self.membership, self.controller.load)
            return False
        except Unauthenticated as e:
            # 跳转登录由外层页面处理
            self.report(e)
            return False
        except Exception as e:
            self.report(e)
            return False

        self.membership.set(self.controller.is_registered)
        self.toaster.show(
            "Registration Successful!",
            f"You're registered for {title}. Check your email for details.",
        )
        self.render()
        return True

    async def unregister(self) -> bool:
        try:
            await self.controller.unregister()
        except Exception as e:
            self.report(e)
            return False

        self.membership.set(self.controller.is_registered)
        self.toaster.show("Registration cancelled", "You are no longer registered for this event.")
        self.render()
        return True
