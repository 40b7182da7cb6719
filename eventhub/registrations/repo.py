from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from eventhub.common.app_settings import settings


class RegistrationsRepository:
    """registrations 表仓储类"""

    TABLE_NAME = "registrations"

    def __init__(self, client: Any, page_size: Optional[int] = None) -> None:
        self.client = client
        self.page_size = page_size or settings.page_size

    async def count_for_event(self, event_id: Any) -> int:
        """统计单个活动的报名人数"""
        return int(await self.client.count(self.TABLE_NAME, filters={"event_id": event_id}))

    async def count_for_events(self, event_ids: Sequence[Any]) -> Dict[Any, int]:
        """一次分组读取多个活动的报名人数，未出现的活动计 0"""
        counts: Dict[Any, int] = {event_id: 0 for event_id in event_ids}
        if not counts:
            return counts

        tally: Counter = Counter()
        offset = 0
        # 分页读取，避免被服务端 max-rows 截断
        while True:
            rows = await self.client.select(
                self.TABLE_NAME,
                filters={"event_id": {"in": list(counts)}},
                columns="event_id",
                order="id",
                limit=self.page_size,
                offset=offset,
            )
            tally.update(row["event_id"] for row in rows)
            if len(rows) < self.page_size:
                break
            offset += self.page_size

        for event_id in counts:
            counts[event_id] = tally.get(event_id, 0)
        return counts

    async def get_registration(self, event_id: Any, user_id: str) -> Optional[Dict[str, Any]]:
        rows = await self.client.select(
            self.TABLE_NAME,
            filters={"event_id": event_id, "user_id": user_id},
            limit=1,
        )
        return rows[0] if rows else None

    async def create_registration(self, event_id: Any, user_id: str) -> Dict[str, Any]:
        """写入报名记录，唯一约束由存储层保证"""
        rows = await self.client.insert(
            self.TABLE_NAME, {"event_id": event_id, "user_id": user_id}
        )
        return rows[0] if rows else {}

    async def delete_registration(self, event_id: Any, user_id: str) -> int:
        """删除报名记录，返回删除行数（0 行不算错误）"""
        rows = await self.client.delete(
            self.TABLE_NAME, filters={"event_id": event_id, "user_id": user_id}
        )
        return len(rows)

    async def get_event_ids_for_user(self, user_id: str) -> List[Any]:
        """获取用户报名过的活动 ID"""
        rows = await self.client.select(
            self.TABLE_NAME,
            filters={"user_id": user_id},
            columns="event_id",
        )
        return [row["event_id"] for row in rows]
