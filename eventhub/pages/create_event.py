from typing import Any, Optional

from eventhub.common.errors import InvalidEventData, Unauthenticated
from eventhub.events.model import EventForm
from eventhub.integrations.supabase.storage import SupabaseStorage, event_image_storage
from eventhub.pages.base import Page


class CreateEventPage(Page):
    """创建活动页：校验表单、上传封面、写入活动与议程"""

    name = "create_event"

    def __init__(self, store, storage: Optional[SupabaseStorage] = None, **kwargs):
        super().__init__(store, **kwargs)
        self.storage = storage or event_image_storage
        self.submitting = False
        self.created_event_id: Optional[Any] = None

    async def submit(
        self,
        form: EventForm,
        image: Optional[bytes] = None,
        image_name: str = "image.png",
    ) -> Optional[Any]:
        """提交表单，成功返回新活动 ID，失败返回 None 并给出提示"""
        self.submitting = True
        try:
            if self.identity is None:
                raise Unauthenticated("Please sign in to create an event")

            missing = form.missing_fields()
            if missing:
                raise InvalidEventData(missing)
            if form.end_time < form.start_time:
                # 结束早于开始不拦截，只记录
                self.log.warning(f"活动结束时间早于开始时间: {form.title}")

            image_url = None
            if image:
                uploaded = await self.storage.upload_event_image(image, image_name)
                image_url = uploaded["url"]

            event = form.to_event_create(self.identity.id, image_url=image_url)
            row = await self.events_repo.create_event(event.to_row())
            event_id = row["id"]
            try:
                await self.agenda_repo.create_items(event_id, form.agenda)
            except Exception:
                # 议程写入失败时撤销已写入的活动
                await self._discard_event(event_id)
                raise
        except Exception as e:
            self.report(e)
            return None
        finally:
            self.submitting = False

        self.log.info(f"活动已创建: {event_id}")
        self.created_event_id = event_id
        self.toaster.show("Event Created!", "Your event has been created successfully.")
        return event_id

    async def _discard_event(self, event_id: Any) -> None:
        try:
            await self.events_repo.delete_event(event_id)
            self.log.info(f"议程写入失败，已撤销活动: {event_id}")
        except Exception as e:
            self.log.error(f"撤销活动 {event_id} 失败: {e}")
