from typing import Any, Dict, Optional, Sequence


class ProfilesRepository:
    """profiles 表仓储类（只读）"""

    TABLE_NAME = "profiles"

    def __init__(self, client: Any) -> None:
        self.client = client

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """根据 Supabase Auth 的用户 ID 获取 profile 记录"""
        rows = await self.client.select(
            self.TABLE_NAME,
            filters={"id": user_id},
            limit=1,
        )
        return rows[0] if rows else None

    async def get_profiles(self, user_ids: Sequence[str]) -> Dict[str, Dict[str, Any]]:
        """批量获取 profile，按 ID 建索引"""
        ids = [uid for uid in dict.fromkeys(user_ids) if uid]
        if not ids:
            return {}
        rows = await self.client.select(
            self.TABLE_NAME,
            filters={"id": {"in": ids}},
        )
        return {row["id"]: row for row in rows}
