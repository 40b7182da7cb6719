from typing import Any, Dict, List, Sequence

from eventhub.agenda.model import AgendaItemCreate


class AgendaRepository:
    """agenda_items 表仓储类"""

    TABLE_NAME = "agenda_items"

    def __init__(self, client: Any) -> None:
        self.client = client

    async def get_items(self, event_id: Any) -> List[Dict[str, Any]]:
        """获取活动议程，按 display_order 升序；相同序号按写入顺序（id）"""
        rows = await self.client.select(
            self.TABLE_NAME,
            filters={"event_id": event_id},
            order="display_order,id",
        )
        return sorted(rows, key=lambda row: (row.get("display_order") or 0, row.get("id") or 0))

    async def create_items(
        self, event_id: Any, items: Sequence[AgendaItemCreate]
    ) -> List[Dict[str, Any]]:
        """批量写入议程"""
        if not items:
            return []
        payload = [
            {
                "event_id": event_id,
                "time": item.time,
                "title": item.title,
                "display_order": item.display_order if item.display_order is not None else index,
            }
            for index, item in enumerate(items)
        ]
        return await self.client.insert(self.TABLE_NAME, payload)
