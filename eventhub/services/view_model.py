"""活动读模型：把活动、主办方、议程和报名人数组合成页面直接渲染的结构。"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from eventhub.agenda.model import AgendaItem
from eventhub.agenda.repo import AgendaRepository
from eventhub.common.app_settings import settings
from eventhub.common.errors import NotFound, StoreUnavailable
from eventhub.common.log import logger
from eventhub.events.model import Event
from eventhub.events.repo import EventsRepository
from eventhub.profiles.model import Profile
from eventhub.profiles.repo import ProfilesRepository
from eventhub.services.aggregates import AggregateReader

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrganizerView(BaseModel):
    """主办方展示信息；profile 缺失时使用占位名称和头像"""

    id: Optional[str] = None
    display_name: str
    avatar_url: str
    profile: Optional[Profile] = None

    @classmethod
    def from_profile(cls, organizer_id: Optional[str], profile: Optional[Profile]) -> "OrganizerView":
        if profile is None:
            return cls(
                id=organizer_id,
                display_name=settings.placeholder_name,
                avatar_url=settings.placeholder_avatar,
            )
        return cls(
            id=profile.id,
            display_name=profile.full_name or profile.email or settings.placeholder_name,
            avatar_url=profile.avatar_url or settings.placeholder_avatar,
            profile=profile,
        )


class EventSummary(BaseModel):
    event: Event
    organizer: OrganizerView
    attendee_count: int = 0
    # 人数读取失败时按 0 展示并提示
    count_available: bool = True


class EventDetail(EventSummary):
    agenda: List[AgendaItem] = Field(default_factory=list)


def search(events: Iterable[EventSummary], term: Optional[str]) -> List[EventSummary]:
    """客户端搜索：标题、描述、地点不区分大小写的子串匹配"""
    items = list(events)
    needle = (term or "").strip().lower()
    if not needle:
        return items
    return [
        item
        for item in items
        if needle in item.event.title.lower()
        or needle in (item.event.description or "").lower()
        or needle in (item.event.location or "").lower()
    ]


def split_by_time(
    events: Iterable[EventSummary], now: datetime
) -> Tuple[List[EventSummary], List[EventSummary]]:
    """按开始时间拆分为 (即将开始, 已结束)"""
    upcoming: List[EventSummary] = []
    past: List[EventSummary] = []
    for item in events:
        (upcoming if item.event.date >= now else past).append(item)
    return upcoming, past


class EventViewModel:
    def __init__(
        self,
        events: EventsRepository,
        agenda: AgendaRepository,
        profiles: ProfilesRepository,
        aggregates: AggregateReader,
        clock: Clock = utc_now,
    ):
        self.events = events
        self.agenda = agenda
        self.profiles = profiles
        self.aggregates = aggregates
        self.clock = clock

    async def get_event_detail(self, event_id: Any) -> EventDetail:
        """活动详情。活动不存在抛 NotFound，与存储错误区分"""
        row = await self.events.get_event_by_id(event_id)
        if row is None:
            raise NotFound("Event", event_id)
        event = Event.model_validate(row)

        profile_row = await self.profiles.get_profile(event.organizer_id) if event.organizer_id else None
        agenda_rows = await self.agenda.get_items(event.id)
        count, count_available = 0, True
        try:
            count = await self.aggregates.count_registrations(event.id)
        except StoreUnavailable as e:
            logger.warning(f"读取活动 {event.id} 报名人数失败，按 0 展示: {e}")
            count_available = False

        return EventDetail(
            event=event,
            organizer=OrganizerView.from_profile(
                event.organizer_id,
                Profile.model_validate(profile_row) if profile_row else None,
            ),
            agenda=[AgendaItem.model_validate(item) for item in agenda_rows],
            attendee_count=count,
            count_available=count_available,
        )

    async def list_events(
        self,
        upcoming_only: bool = True,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
        organizer_id: Optional[str] = None,
        event_ids: Optional[Sequence[Any]] = None,
    ) -> List[EventSummary]:
        """活动列表（不含议程），按开始时间升序"""
        starts_after = (now or self.clock()) if upcoming_only else None
        rows = await self.events.get_events(
            starts_after=starts_after,
            organizer_id=organizer_id,
            event_ids=event_ids,
            limit=limit,
        )
        events = sorted((Event.model_validate(row) for row in rows), key=lambda e: e.date)
        if not events:
            return []

        profiles = await self.profiles.get_profiles(
            [e.organizer_id for e in events if e.organizer_id]
        )
        counts: Dict[Any, int] = {}
        count_available = True
        try:
            counts = await self.aggregates.count_many([e.id for e in events])
        except StoreUnavailable as e:
            logger.warning(f"读取报名人数失败，按 0 展示: {e}")
            count_available = False
        logger.debug(f"活动列表读取完成: {len(events)} 条")

        return [
            EventSummary(
                event=event,
                organizer=OrganizerView.from_profile(
                    event.organizer_id,
                    _profile_or_none(profiles.get(event.organizer_id or "")),
                ),
                attendee_count=counts.get(event.id, 0),
                count_available=count_available,
            )
            for event in events
        ]

    async def featured(self, limit: Optional[int] = None) -> List[EventSummary]:
        """首页推荐：最近即将开始的几场活动"""
        return await self.list_events(upcoming_only=True, limit=limit or settings.featured_limit)


def _profile_or_none(row: Union[dict, None]) -> Optional[Profile]:
    return Profile.model_validate(row) if row else None
