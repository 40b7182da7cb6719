import uuid
from typing import Optional, Dict, List, Union, Any, cast

import httpx
from postgrest.exceptions import APIError
from supabase import acreate_client, AsyncClient

from eventhub.integrations.supabase.settings import settings
from eventhub.common.errors import (
    ConstraintViolation,
    StoreError,
    StoreUnavailable,
)
from eventhub.common.log import logger
from eventhub.store import Store, ChangeCallback

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"

_COMPARE_OPS = ("gt", "gte", "lt", "lte", "neq", "like", "ilike")


def classify_error(e: Exception) -> StoreError:
    """把 Supabase/网络异常归类为领域错误"""
    if isinstance(e, StoreError):
        return e
    if isinstance(e, APIError):
        code = str(e.code or "")
        message = e.message or str(e)
        if code == UNIQUE_VIOLATION:
            return ConstraintViolation(message)
        # PGRST00x: PostgREST 连不上数据库; 08xxx: 连接类 SQLSTATE
        if code.startswith("PGRST00") or code.startswith("08") or code.startswith("5"):
            return StoreUnavailable(message)
        return StoreError(message)
    if isinstance(e, (httpx.HTTPError, OSError, TimeoutError)):
        return StoreUnavailable(str(e) or e.__class__.__name__)
    return StoreError(str(e) or e.__class__.__name__)


def apply_filters(query, filters: Optional[Dict]):
    """按字典条件追加过滤，如 {"event_id": 1} 或 {"date": {"gte": ...}}"""
    if not filters:
        return query
    for key, value in filters.items():
        if isinstance(value, dict):
            for op, val in value.items():
                if op == "in":
                    query = query.in_(key, list(val))
                elif op in _COMPARE_OPS:
                    query = getattr(query, op)(key, val)
                else:
                    raise ValueError(f"不支持的过滤运算: {op}")
        else:
            query = query.eq(key, value)
    return query


def apply_order(query, order: Optional[str]):
    """解析 "date" / "date.desc" / "display_order,id" 形式的排序"""
    if not order:
        return query
    for part in order.split(","):
        column, _, direction = part.strip().partition(".")
        if column:
            query = query.order(column, desc=direction.lower() == "desc")
    return query


class SupabaseClient(Store):
    """Supabase数据库客户端（异步）"""

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        self.url = url if url is not None else settings.url
        self.key = key if key is not None else (settings.anon_key or settings.service_key)
        self.client: Optional[AsyncClient] = None
        self._initialized = False

    async def init(self):
        """初始化Supabase客户端"""
        if not self.url or not self.key:
            raise ValueError("SUPABASE_URL和SUPABASE_ANON_KEY环境变量必须设置")

        if self._initialized:
            return

        try:
            self.client = await acreate_client(self.url, self.key)
            self._initialized = True
            logger.info("Supabase客户端初始化成功")
        except Exception as e:
            logger.error(f"Supabase客户端初始化失败: {e}")
            raise classify_error(e) from e

    async def get_client(self) -> AsyncClient:
        """获取Supabase客户端实例"""
        if not self._initialized or not self.client:
            await self.init()

        if not self.client:
            raise RuntimeError("Supabase客户端尚未成功初始化")

        return self.client

    async def from_table(self, table_name: str):
        """获取表操作对象"""
        return (await self.get_client()).table(table_name)

    #! 以下为基础CRUD操作
    async def select(
        self,
        table: str,
        filters: Optional[Dict] = None,
        columns: str = "*",
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """查询数据"""
        try:
            query = (await self.from_table(table)).select(columns)
            query = apply_filters(query, filters)
            query = apply_order(query, order)

            # 添加分页
            if limit is not None and offset:
                query = query.range(offset, offset + limit - 1)
            elif limit is not None:
                query = query.limit(limit)
            elif offset:
                query = query.offset(offset)

            response = await query.execute()
            return response.data if response.data else []

        except Exception as e:
            logger.error(f"查询表 {table} 失败: {e}")
            raise classify_error(e) from e

    async def count(self, table: str, filters: Optional[Dict] = None) -> int:
        """统计记录数量"""
        try:
            query = (await self.from_table(table)).select(
                "*", count=cast(Any, "exact"), head=True
            )
            query = apply_filters(query, filters)
            response = await query.execute()
            return int(response.count or 0)

        except Exception as e:
            logger.error(f"统计表 {table} 记录数量失败: {e}")
            raise classify_error(e) from e

    async def insert(
        self, table: str, data: Union[Dict, List[Dict]]
    ) -> List[Dict[str, Any]]:
        """插入数据"""
        try:
            response = await (await self.from_table(table)).insert(data).execute()
            return response.data if response.data else []
        except Exception as e:
            logger.error(f"插入数据到表 {table} 失败: {e}")
            raise classify_error(e) from e

    async def delete(self, table: str, filters: Dict) -> List[Dict[str, Any]]:
        """删除数据"""
        if not filters:
            raise ValueError("删除操作必须带过滤条件")
        try:
            query = (await self.from_table(table)).delete()
            query = apply_filters(query, filters)
            response = await query.execute()
            return response.data if response.data else []

        except Exception as e:
            logger.error(f"删除表 {table} 数据失败: {e}")
            raise classify_error(e) from e

    #! 以下为实时订阅与远端函数
    async def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        column: Optional[str] = None,
        value: Any = None,
    ):
        """订阅 postgres_changes，返回 channel 句柄"""
        row_filter = f"{column}=eq.{value}" if column else None
        name = f"{table}:{row_filter or '*'}:{uuid.uuid4().hex[:8]}"
        try:
            client = await self.get_client()
            channel = client.channel(name)
            channel.on_postgres_changes(
                "*",
                schema=settings.schema,
                table=table,
                filter=row_filter,
                callback=callback,
            )
            await channel.subscribe()
            logger.debug(f"已订阅 {name}")
            return channel
        except Exception as e:
            logger.error(f"订阅表 {table} 变更失败: {e}")
            raise classify_error(e) from e

    async def unsubscribe(self, handle: Any) -> None:
        """移除 channel"""
        try:
            client = await self.get_client()
            await client.remove_channel(handle)
        except Exception as e:
            logger.error(f"取消订阅失败: {e}")
            raise classify_error(e) from e

    async def invoke(self, function_name: str, body: Dict[str, Any]) -> Any:
        """调用 Edge Function"""
        try:
            client = await self.get_client()
            return await client.functions.invoke(
                function_name, invoke_options={"body": body}
            )
        except Exception as e:
            logger.error(f"调用函数 {function_name} 失败: {e}")
            raise classify_error(e) from e


supabase_client = SupabaseClient()
