from typing import Optional, Union
from pydantic import BaseModel


class AgendaItem(BaseModel):
    id: Union[int, str, None] = None
    event_id: Union[int, str]
    time: str = ""
    title: str
    display_order: int = 0


class AgendaItemCreate(BaseModel):
    time: str = ""
    title: str
    # 为空时按在列表中的位置补齐
    display_order: Optional[int] = None
