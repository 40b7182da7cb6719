import os
from typing import Dict
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class BucketConfig:
    name: str
    path: str


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    anon_key: str
    service_key: str
    schema: str
    buckets: Dict[str, BucketConfig]


def _load_settings() -> SupabaseSettings:
    buckets = {
        "event_images": BucketConfig(
            name=os.getenv("STORAGE_EVENT_IMAGE_BUCKET", "event-images"),
            path=os.getenv("SUPABASE_EVENT_IMAGE_PATH", "events/{uuid}.{ext}"),
        ),
    }

    return SupabaseSettings(
        url=os.getenv("SUPABASE_URL", "").rstrip("/"),
        anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
        service_key=os.getenv("SUPABASE_SERVICE_KEY", ""),
        schema=os.getenv("SUPABASE_SCHEMA", "public"),
        buckets=buckets,
    )


settings = _load_settings()
