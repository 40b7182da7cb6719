"""页面基类：每个页面独立拉取、独立持有视图状态，页面之间没有共享缓存。

并发约定：
- 每次拉取带上所属视图的 generation，返回时不是最新 generation 的结果直接丢弃，
  避免两次通知触发的拉取乱序返回时旧数据覆盖新数据
- 页面卸载后返回的结果一律丢弃
- 最新一次拉取无论成功失败都会把 loading 置回 False
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

from eventhub.agenda.repo import AgendaRepository
from eventhub.auth.model import Identity
from eventhub.common.errors import (
    EventHubError,
    NotFound,
    StoreUnavailable,
    Unauthenticated,
)
from eventhub.common.log import logger, view_logger
from eventhub.events.repo import EventsRepository
from eventhub.profiles.repo import ProfilesRepository
from eventhub.realtime.subscriptions import SubscriptionManager
from eventhub.registrations.repo import RegistrationsRepository
from eventhub.services.aggregates import AggregateReader
from eventhub.services.view_model import Clock, EventViewModel, utc_now
from eventhub.store import Store

T = TypeVar("T")


@dataclass
class Toast:
    title: str
    description: str = ""
    variant: str = "default"


class Toaster:
    """非阻塞提示（toast/banner），同时写日志"""

    def __init__(self) -> None:
        self.toasts: List[Toast] = []

    def show(self, title: str, description: str = "", variant: str = "default") -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self.toasts.append(toast)
        if variant == "destructive":
            logger.warning(f"[toast] {title}: {description}")
        else:
            logger.info(f"[toast] {title}: {description}")
        return toast

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None


class ViewState(Generic[T]):
    """单个视图的状态"""

    def __init__(self, name: str, default: Optional[T] = None):
        self.name = name
        self.data: Optional[T] = default
        self.loading = False
        self.not_found = False
        self.error: Optional[Exception] = None
        self.generation = 0

    def begin(self) -> int:
        self.generation += 1
        self.loading = True
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def set(self, data: T) -> None:
        """直接写入（操作成功后的本地状态），同时作废进行中的拉取"""
        self.generation += 1
        self.data = data
        self.loading = False
        self.not_found = False
        self.error = None


class Page:
    name = "page"

    def __init__(
        self,
        store: Store,
        identity: Optional[Identity] = None,
        toaster: Optional[Toaster] = None,
        clock: Clock = utc_now,
        on_render: Optional[Callable[["Page"], None]] = None,
    ):
        self.store = store
        self.identity = identity
        self.toaster = toaster or Toaster()
        self.clock = clock
        self.on_render = on_render
        self.log = view_logger(self.name)

        self.events_repo = EventsRepository(store)
        self.agenda_repo = AgendaRepository(store)
        self.registrations_repo = RegistrationsRepository(store)
        self.profiles_repo = ProfilesRepository(store)
        self.aggregates = AggregateReader(self.registrations_repo)
        self.view_model = EventViewModel(
            self.events_repo,
            self.agenda_repo,
            self.profiles_repo,
            self.aggregates,
            clock=clock,
        )

        self.subscriptions = SubscriptionManager(store, name=self.name)
        self.mounted = False
        self.login_required = False

    #! 生命周期
    async def mount(self) -> "Page":
        await self.subscriptions.open()
        self.mounted = True
        try:
            try:
                await self.setup_subscriptions()
            except EventHubError as e:
                # 订阅失败不影响首次拉取，页面只是收不到实时更新
                self.log.warning(f"订阅失败，页面不会自动刷新: {e}")
                self.report(e)
            await self.refresh()
        except BaseException:
            await self.unmount()
            raise
        return self

    async def unmount(self) -> None:
        self.mounted = False
        await self.subscriptions.close()

    async def __aenter__(self):
        return await self.mount()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.unmount()

    async def setup_subscriptions(self) -> None:
        """子类在此声明关心的 (table, filter)"""

    async def refresh(self) -> None:
        """完整拉取本页面的所有视图"""

    async def settle(self) -> None:
        """等待通知触发的拉取结束"""
        await self.subscriptions.drain()

    #! 拉取与错误处理
    def _accept(self, state: ViewState, generation: int) -> bool:
        if not self.mounted:
            self.log.debug(f"页面已卸载，丢弃 {state.name} 的结果")
            return False
        if not state.is_current(generation):
            self.log.debug(
                f"丢弃过期结果 {state.name}: gen={generation}, latest={state.generation}"
            )
            return False
        return True

    async def load(self, state: ViewState[T], fetch: Callable[[], Awaitable[T]]) -> bool:
        """执行一次带 generation 的拉取，返回结果是否被采用"""
        generation = state.begin()
        accepted = False
        try:
            data = await fetch()
        except NotFound as e:
            if self._accept(state, generation):
                accepted = True
                state.not_found = True
                state.data = None
                state.error = None
                self.log.info(f"{state.name} 未找到: {e}")
        except Exception as e:
            if self._accept(state, generation):
                accepted = True
                state.error = e
                self.report(e)
        else:
            if self._accept(state, generation):
                accepted = True
                state.data = data
                state.not_found = False
                state.error = None
        finally:
            if self._accept(state, generation):
                state.loading = False
                self.render()
        return accepted

    def report(self, e: Exception) -> None:
        """把错误转换为用户提示，不向上抛"""
        if isinstance(e, Unauthenticated):
            self.login_required = True
            self.toaster.show("Sign in required", e.message, "destructive")
        elif isinstance(e, StoreUnavailable):
            self.toaster.show(
                "Connection problem",
                "We couldn't reach the server. Showing the last loaded data.",
                "destructive",
            )
        elif isinstance(e, NotFound):
            self.toaster.show("Not found", e.message, "destructive")
        elif isinstance(e, EventHubError):
            self.toaster.show("Error", e.message, "destructive")
        else:
            self.log.opt(exception=e).error(f"未归类的错误: {e}")
            self.toaster.show("Something went wrong", "Please try again later.", "destructive")

    def warn_if_counts_unavailable(self, items: Any) -> None:
        if any(not getattr(item, "count_available", True) for item in items or []):
            self.toaster.show(
                "Attendee counts unavailable",
                "Attendee numbers may be out of date.",
                "destructive",
            )

    def render(self) -> None:
        if self.on_render is not None:
            try:
                self.on_render(self)
            except Exception as e:
                self.log.error(f"渲染回调失败: {e}")
