"""领域错误定义。

错误按处理方式分类：
- StoreUnavailable: 网络或后端故障，页面保留旧数据并提示
- NotFound: 实体不存在，页面进入“未找到”状态
- Unauthenticated: 未登录，拦截操作并提示登录
- ConstraintViolation / DuplicateRegistration / InvalidEventData: 校验类提示
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence


class ErrorCode(Enum):
    """领域错误码"""

    STORE_ERROR = "STORE_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_EVENT_DATA = "INVALID_EVENT_DATA"


@dataclass(frozen=True)
class EventHubError(Exception):
    """带错误码和用户可读信息的基础错误"""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class StoreError(EventHubError):
    """存储层返回的未归类错误"""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORE_ERROR) -> None:
        super().__init__(code=code, message=message)


class StoreUnavailable(StoreError):
    """存储不可达（网络、超时、5xx）"""

    def __init__(self, message: str = "Store is unavailable") -> None:
        super().__init__(message, code=ErrorCode.STORE_UNAVAILABLE)


class ConstraintViolation(StoreError):
    """违反存储层约束（如唯一索引）"""

    def __init__(
        self,
        message: str = "Constraint violated",
        code: ErrorCode = ErrorCode.CONSTRAINT_VIOLATION,
    ) -> None:
        super().__init__(message, code=code)


class DuplicateRegistration(ConstraintViolation):
    def __init__(self, event_id: Any, user_id: Any) -> None:
        super().__init__(
            "You are already registered for this event",
            code=ErrorCode.DUPLICATE_REGISTRATION,
        )
        object.__setattr__(self, "event_id", event_id)
        object.__setattr__(self, "user_id", user_id)


class NotFound(EventHubError):
    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=f"{entity} not found")
        object.__setattr__(self, "entity", entity)
        object.__setattr__(self, "entity_id", entity_id)


class Unauthenticated(EventHubError):
    def __init__(self, message: str = "Please sign in to continue") -> None:
        super().__init__(code=ErrorCode.UNAUTHENTICATED, message=message)


class InvalidEventData(EventHubError):
    """创建活动表单校验失败"""

    def __init__(self, fields: Sequence[str]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_DATA,
            message="Please fill in all required fields",
        )
        object.__setattr__(self, "fields", tuple(fields))
