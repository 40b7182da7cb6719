from typing import Optional
from pydantic import BaseModel


class Identity(BaseModel):
    """当前登录用户（与 profiles.id 共用同一 ID）"""

    id: str
    email: Optional[str] = None
