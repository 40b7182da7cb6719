from typing import Optional
from pydantic import BaseModel, Field


class Profile(BaseModel):
    """ 用户扩展资料模型 """

    id: str = Field(..., description="Supabase Auth 用户 ID")
    full_name: Optional[str] = Field(None, description="姓名")
    avatar_url: Optional[str] = Field(None, description="头像 URL")
    email: Optional[str] = Field(None, description="邮箱")
