from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence


class EventsRepository:

    EVENT_TABLE = "events"
    AGENDA_TABLE = "agenda_items"
    REGISTRATION_TABLE = "registrations"

    def __init__(self, client: Any):
        self.client = client

    async def get_event_by_id(self, event_id: Any) -> Optional[Dict[str, Any]]:
        """根据 ID 获取活动"""
        result = await self.client.select(
            self.EVENT_TABLE,
            filters={"id": event_id},
            limit=1,
        )
        return result[0] if result else None

    async def get_events(
        self,
        starts_after: Optional[datetime] = None,
        organizer_id: Optional[str] = None,
        event_ids: Optional[Sequence[Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """获取活动列表，按开始时间升序"""
        filters: Dict[str, Any] = {}
        if starts_after is not None:
            filters["date"] = {"gte": starts_after.isoformat()}
        if organizer_id is not None:
            filters["organizer_id"] = organizer_id
        if event_ids is not None:
            if not event_ids:
                return []
            filters["id"] = {"in": list(event_ids)}

        return await self.client.select(
            self.EVENT_TABLE,
            filters=filters or None,
            order="date",
            limit=limit,
        )

    async def create_event(self, event_data: Dict) -> Dict[str, Any]:
        """创建活动"""
        rows = await self.client.insert(self.EVENT_TABLE, event_data)
        return rows[0] if rows else {}

    async def delete_event(self, event_id: Any) -> bool:
        """删除活动。存储层没有级联删除，按依赖顺序删：议程 -> 报名 -> 活动"""
        await self.client.delete(self.AGENDA_TABLE, filters={"event_id": event_id})
        await self.client.delete(self.REGISTRATION_TABLE, filters={"event_id": event_id})
        result = await self.client.delete(self.EVENT_TABLE, filters={"id": event_id})
        return bool(result)
