from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _as_int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except Exception:
        return default


@dataclass(frozen=True)
class AppSettings:
    app_name: str
    log_level: str
    log_file: str
    featured_limit: int
    page_size: int
    placeholder_name: str
    placeholder_avatar: str
    email_function: str


def load_app_settings() -> AppSettings:
    return AppSettings(
        app_name=os.getenv("APP_NAME", "eventhub"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
        featured_limit=max(1, _as_int(os.getenv("FEATURED_LIMIT"), 3)),
        page_size=max(1, _as_int(os.getenv("PAGE_SIZE"), 1000)),
        placeholder_name=os.getenv("PLACEHOLDER_ORGANIZER_NAME", "Event Organizer"),
        placeholder_avatar=os.getenv(
            "PLACEHOLDER_ORGANIZER_AVATAR",
            "https://ui-avatars.com/api/?name=Event+Organizer",
        ),
        email_function=os.getenv("EMAIL_FUNCTION", "send-registration-email"),
    )


settings = load_app_settings()
