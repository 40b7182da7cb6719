"""存储接口（仓储模式）。

所有仓储与页面只依赖此接口，Supabase 实现与测试用内存实现可互换。

过滤条件沿用字典写法：
- ``{"event_id": 1}`` 等值匹配
- ``{"date": {"gte": "2023-07-01T00:00:00+00:00"}}`` 比较运算，支持
  gt / gte / lt / lte / neq / like / ilike / in
排序写法为 ``"date"`` 或 ``"date.desc"``，多列用逗号分隔。
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union

ChangeCallback = Callable[[Dict[str, Any]], None]


class Store(ABC):
    """托管关系型存储 + 变更通知通道"""

    @abstractmethod
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
        ...

    @abstractmethod
    async def count(self, table: str, filters: Optional[Dict] = None) -> int:
        """统计记录数量，无匹配时返回 0"""
        ...

    @abstractmethod
    async def insert(
        self, table: str, data: Union[Dict, List[Dict]]
    ) -> List[Dict[str, Any]]:
        """插入数据，返回写入后的行"""
        ...

    @abstractmethod
    async def delete(self, table: str, filters: Dict) -> List[Dict[str, Any]]:
        """删除数据，返回被删除的行（可能为空）"""
        ...

    @abstractmethod
    async def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        column: Optional[str] = None,
        value: Any = None,
    ) -> Any:
        """订阅表的 insert/update/delete 变更，可按 column=value 过滤，返回句柄"""
        ...

    @abstractmethod
    async def unsubscribe(self, handle: Any) -> None:
        """取消订阅"""
        ...

    @abstractmethod
    async def invoke(self, function_name: str, body: Dict[str, Any]) -> Any:
        """调用远端函数（Edge Function）"""
        ...
