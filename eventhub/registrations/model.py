from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel


class Registration(BaseModel):
    """报名记录，(event_id, user_id) 唯一"""

    id: Union[int, str]
    event_id: Union[int, str]
    user_id: str
    created_at: Optional[datetime] = None
