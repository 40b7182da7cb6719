from datetime import date as date_type, datetime, time as time_type, timezone
from typing import ClassVar, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from eventhub.agenda.model import AgendaItemCreate


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """无时区的时间按 UTC 处理"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Event(BaseModel):
    id: Union[int, str]
    title: str
    description: str = ""
    date: datetime
    end_time: Optional[datetime] = None
    location: str = ""
    image_url: Optional[str] = None
    organizer_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("date", "end_time", "created_at")
    @classmethod
    def normalize_tz(cls, value):
        return ensure_aware(value)


class EventCreate(BaseModel):
    """写入 events 表的数据"""

    title: str
    description: str
    date: datetime
    end_time: datetime
    location: str
    image_url: Optional[str] = None
    organizer_id: str

    @field_validator("date", "end_time")
    @classmethod
    def normalize_tz(cls, value):
        return ensure_aware(value)

    def to_row(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class EventForm(BaseModel):
    """创建活动页面的表单，字段允许为空以便统一校验"""

    REQUIRED: ClassVar[Tuple[str, ...]] = (
        "title",
        "description",
        "day",
        "start_time",
        "end_time",
        "location",
    )

    title: str = ""
    description: str = ""
    day: Optional[date_type] = None
    start_time: Optional[time_type] = None
    end_time: Optional[time_type] = None
    location: str = ""
    agenda: List[AgendaItemCreate] = Field(default_factory=list)

    @field_validator("day", "start_time", "end_time", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_fields(self) -> List[str]:
        missing = []
        for name in self.REQUIRED:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def to_event_create(
        self,
        organizer_id: str,
        image_url: Optional[str] = None,
        tz=timezone.utc,
    ) -> EventCreate:
        return EventCreate(
            title=self.title.strip(),
            description=self.description.strip(),
            date=datetime.combine(self.day, self.start_time, tzinfo=tz),
            end_time=datetime.combine(self.day, self.end_time, tzinfo=tz),
            location=self.location.strip(),
            image_url=image_url,
            organizer_id=organizer_id,
        )
