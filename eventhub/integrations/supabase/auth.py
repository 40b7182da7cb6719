from typing import Optional

from eventhub.auth.model import Identity
from eventhub.common.errors import Unauthenticated
from eventhub.common.log import logger
from eventhub.integrations.supabase.client import SupabaseClient, classify_error


async def sign_in(client: SupabaseClient, email: str, password: str) -> Identity:
    """邮箱 + 密码登录，会话保存在客户端内，后续查询携带用户身份"""
    raw = await client.get_client()
    try:
        auth_response = await raw.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except Exception as e:
        logger.error(f"用户登录失败: {e}")
        raise classify_error(e) from e

    user = getattr(auth_response, "user", None)
    if not user:
        raise Unauthenticated("Invalid email or password")

    logger.info(f"用户登录成功: {email}")
    return Identity(id=str(user.id), email=user.email)


async def current_identity(client: SupabaseClient) -> Optional[Identity]:
    """读取当前会话用户，未登录返回 None"""
    raw = await client.get_client()
    try:
        resp = await raw.auth.get_user()
    except Exception as e:
        logger.warning(f"读取当前用户失败: {e}")
        return None

    user = getattr(resp, "user", None) if resp else None
    if not user:
        return None
    return Identity(id=str(user.id), email=user.email)
