import asyncio
from typing import Any, Optional, Set

from eventhub.common.app_settings import settings
from eventhub.common.log import logger
from eventhub.store import Store


class RegistrationMailer:
    """报名确认邮件触发器（fire-and-forget，不重试）"""

    def __init__(self, store: Store, function_name: Optional[str] = None):
        self.store = store
        self.function_name = function_name or settings.email_function
        self._pending: Set[asyncio.Task] = set()

    async def send(self, registration_id: Any) -> bool:
        """调用邮件函数，失败只记录日志"""
        try:
            await self.store.invoke(
                self.function_name, {"registration_id": registration_id}
            )
            logger.info(f"报名确认邮件已触发: registration_id={registration_id}")
            return True
        except Exception as e:
            logger.error(f"报名确认邮件发送失败: registration_id={registration_id}, {e}")
            return False

    def dispatch(self, registration_id: Any) -> asyncio.Task:
        """后台发送，不阻塞调用方"""
        task = asyncio.create_task(self.send(registration_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """等待所有已触发的邮件任务结束"""
        while self._pending:
            await asyncio.gather(*list(self._pending))
