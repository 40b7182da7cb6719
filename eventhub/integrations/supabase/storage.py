import uuid
from typing import Optional

import httpx

from eventhub.common.errors import StoreError, StoreUnavailable
from eventhub.common.log import logger
from eventhub.integrations.supabase.settings import settings

_CONTENT_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}


class SupabaseStorage:
    def __init__(
        self,
        bucket_key: str = "event_images",
        key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = settings.url
        self.key = key if key is not None else (settings.anon_key or settings.service_key)

        bucket_conf = settings.buckets.get(bucket_key)
        if bucket_conf is None:
            raise ValueError(
                f"Bucket configuration '{bucket_key}' not found in settings.buckets"
            )

        self.bucket = bucket_conf.name
        self.path = bucket_conf.path
        self._client = http_client or httpx.AsyncClient(timeout=30.0)

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        h = {"Authorization": f"Bearer {self.key}", "apikey": self.key}
        if content_type:
            h["Content-Type"] = content_type
        return h

    async def upload_bytes(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        url = f"{self.url}/storage/v1/object/{self.bucket}/{path}"
        try:
            resp = await self._client.post(
                url,
                headers=self._headers(content_type),
                content=data,
            )
        except httpx.HTTPError as e:
            logger.error(f"上传文件 {path} 失败: {e}")
            raise StoreUnavailable(str(e) or "upload failed") from e
        if resp.status_code >= 500:
            raise StoreUnavailable(resp.text)
        if resp.status_code not in (200, 201):
            raise StoreError(resp.text)
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{path}"

    async def upload_event_image(self, data: bytes, filename: str = "image.png") -> dict[str, str]:
        """上传活动封面，按生成的路径存储，返回 path 与公开 URL"""
        ext = (filename.rsplit(".", 1)[-1] if "." in filename else "png").lower()
        path = self.path.format(uuid=str(uuid.uuid4()), ext=ext)

        url = await self.upload_bytes(
            path, data, _CONTENT_TYPES.get(ext, "application/octet-stream")
        )
        logger.info(f"活动封面已上传: {path}")

        return {"path": path, "url": url}


event_image_storage = SupabaseStorage("event_images")
