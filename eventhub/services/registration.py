from typing import Any, Optional

from eventhub.auth.model import Identity
from eventhub.common.errors import ConstraintViolation, DuplicateRegistration, Unauthenticated
from eventhub.common.log import logger
from eventhub.integrations.notice.mail import RegistrationMailer
from eventhub.registrations.model import Registration
from eventhub.registrations.repo import RegistrationsRepository


class RegistrationController:
    """单个 (用户, 活动) 的报名状态机：unregistered <-> registered

    只在存储返回成功后更新本地 is_registered，不主动推送其他视图，
    其他页面通过变更通知重新拉取。
    """

    def __init__(
        self,
        registrations: RegistrationsRepository,
        event_id: Any,
        identity: Optional[Identity] = None,
        mailer: Optional[RegistrationMailer] = None,
    ):
        self.registrations = registrations
        self.event_id = event_id
        self.identity = identity
        self.mailer = mailer
        self.is_registered = False

    def _require_identity(self) -> Identity:
        if self.identity is None:
            raise Unauthenticated("Please sign in to register for this event")
        return self.identity

    async def load(self) -> bool:
        """读取当前报名状态，未登录视为未报名"""
        if self.identity is None:
            self.is_registered = False
            return False
        row = await self.registrations.get_registration(self.event_id, self.identity.id)
        self.is_registered = row is not None
        return self.is_registered

    async def register(self) -> Registration:
        """报名。不做预检查，直接写入并根据唯一约束错误判定重复报名"""
        identity = self._require_identity()
        try:
            row = await self.registrations.create_registration(self.event_id, identity.id)
        except ConstraintViolation as e:
            logger.warning(f"重复报名: event_id={self.event_id}, user_id={identity.id}")
            raise DuplicateRegistration(self.event_id, identity.id) from e

        registration = Registration.model_validate(row)
        self.is_registered = True
        logger.info(f"报名成功: event_id={self.event_id}, user_id={identity.id}")

        if self.mailer is not None:
            self.mailer.dispatch(registration.id)
        return registration

    async def unregister(self) -> int:
        """取消报名，幂等：删除 0 行不报错"""
        identity = self._require_identity()
        deleted = await self.registrations.delete_registration(self.event_id, identity.id)
        self.is_registered = False
        logger.info(
            f"取消报名: event_id={self.event_id}, user_id={identity.id}, deleted={deleted}"
        )
        return deleted
