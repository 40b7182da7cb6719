from typing import Any, Dict, Sequence

from eventhub.registrations.repo import RegistrationsRepository


class AggregateReader:
    """报名人数等派生聚合，不做缓存，每次都从存储重新计算"""

    def __init__(self, registrations: RegistrationsRepository):
        self.registrations = registrations

    async def count_registrations(self, event_id: Any) -> int:
        """单个活动的报名人数，没有报名时为 0"""
        return max(0, await self.registrations.count_for_event(event_id))

    async def count_many(self, event_ids: Sequence[Any]) -> Dict[Any, int]:
        """多个活动的报名人数（单次分组读取），结果与逐个统计一致"""
        return await self.registrations.count_for_events(event_ids)
