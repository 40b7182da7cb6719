"""页面级订阅管理。

页面激活时打开订阅，失活时无条件释放（正常离开、卸载、异常退出都会释放）。
收到任何匹配的变更通知（insert/update/delete）都重新执行完整的拉取，不做增量合并，
也不信任通知的 payload。
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from eventhub.common.log import view_logger
from eventhub.store import Store

Refresh = Callable[[], Awaitable[Any]]


@dataclass
class Subscription:
    table: str
    refresh: Refresh
    column: Optional[str] = None
    value: Any = None
    handle: Any = None
    notifications: int = 0

    @property
    def label(self) -> str:
        if self.column:
            return f"{self.table}[{self.column}={self.value}]"
        return self.table


class SubscriptionManager:
    def __init__(self, store: Store, name: str = "page"):
        self.store = store
        self.name = name
        self.log = view_logger(f"{name}.subscriptions")
        self._active = False
        self._subscriptions: List[Subscription] = []
        self._tasks: Set[asyncio.Task] = set()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def subscriptions(self) -> List[Subscription]:
        return list(self._subscriptions)

    async def open(self) -> "SubscriptionManager":
        self._active = True
        self.log.debug("订阅管理器已打开")
        return self

    async def watch(
        self,
        table: str,
        refresh: Refresh,
        column: Optional[str] = None,
        value: Any = None,
    ) -> Subscription:
        """为 (table, 可选过滤) 打开一个订阅，通知到达时调用 refresh"""
        if not self._active:
            raise RuntimeError("订阅管理器未打开")

        sub = Subscription(table=table, refresh=refresh, column=column, value=value)

        def on_change(payload: Dict[str, Any]) -> None:
            self._on_change(sub, payload)

        sub.handle = await self.store.subscribe(table, on_change, column=column, value=value)
        self._subscriptions.append(sub)
        self.log.info(f"已订阅 {sub.label}")
        return sub

    def _on_change(self, sub: Subscription, payload: Dict[str, Any]) -> None:
        if not self._active:
            self.log.debug(f"已关闭，忽略 {sub.label} 的通知")
            return
        sub.notifications += 1
        event_type = (payload or {}).get("eventType") or (payload or {}).get("type")
        self.log.debug(f"收到 {sub.label} 变更({event_type})，重新拉取")
        task = asyncio.get_running_loop().create_task(self._run(sub))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, sub: Subscription) -> None:
        try:
            await sub.refresh()
        except Exception as e:
            self.log.exception(f"{sub.label} 通知触发的拉取失败: {e}")

    async def drain(self) -> None:
        """等待通知触发的拉取全部完成（包括拉取期间新触发的）"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """释放全部订阅。进行中的拉取不取消，由页面的存活检查丢弃结果"""
        self._active = False
        subscriptions, self._subscriptions = self._subscriptions, []
        for sub in subscriptions:
            try:
                await self.store.unsubscribe(sub.handle)
                self.log.debug(f"已取消订阅 {sub.label}")
            except Exception as e:
                self.log.error(f"取消订阅 {sub.label} 失败: {e}")

    async def __aenter__(self) -> "SubscriptionManager":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
