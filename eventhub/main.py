import argparse
import asyncio
import os
from typing import Optional

from eventhub import __version__
from eventhub.auth.model import Identity
from eventhub.common.app_settings import settings
from eventhub.common.log import configure_logger, logger
from eventhub.integrations.supabase import current_identity, sign_in, supabase_client
from eventhub.pages import EventDetailPage, EventsPage


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="eventhub")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="列出活动")
    list_cmd.add_argument("--search", default="", help="按标题/描述/地点过滤")
    list_cmd.add_argument("--all", action="store_true", help="包含已结束的活动")

    watch_cmd = sub.add_parser("watch", help="打开活动详情并持续输出变更")
    watch_cmd.add_argument("event_id")
    return parser.parse_args(argv)


def log_app_banner() -> None:
    logger.info(f"名称:{settings.app_name} 版本:{__version__}")


async def resolve_identity() -> Optional[Identity]:
    email = os.getenv("EVENTHUB_EMAIL")
    password = os.getenv("EVENTHUB_PASSWORD")
    if email and password:
        return await sign_in(supabase_client, email, password)
    return await current_identity(supabase_client)


def render_event_detail(page: EventDetailPage) -> None:
    if page.not_found:
        logger.warning(f"活动不存在: {page.event_id}")
        return
    detail = page.detail.data
    if detail is None:
        return
    logger.info(
        f"{detail.event.title} | {detail.event.date:%Y-%m-%d %H:%M} | {detail.event.location} | "
        f"主办: {detail.organizer.display_name} | 报名人数: {detail.attendee_count} | "
        f"已报名: {page.is_registered}"
    )


async def run_list(search_term: str, include_past: bool) -> int:
    page = EventsPage(supabase_client, upcoming_only=not include_past)
    async with page:
        for item in page.search(search_term):
            print(
                f"{item.event.id}\t{item.event.date:%Y-%m-%d %H:%M}\t"
                f"{item.event.title}\t{item.event.location}\t{item.attendee_count}"
            )
    return 0 if page.events.error is None else 1


async def run_watch(event_id: str) -> int:
    identity = await resolve_identity()
    page = EventDetailPage(
        supabase_client,
        event_id,
        identity=identity,
        on_render=render_event_detail,
    )
    async with page:
        if page.not_found:
            return 1
        while True:
            await asyncio.sleep(3600)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logger(level=settings.log_level, log_file=settings.log_file)
    log_app_banner()
    try:
        if args.command == "list":
            return asyncio.run(run_list(args.search, args.all))
        return asyncio.run(run_watch(args.event_id))
    except KeyboardInterrupt:
        logger.info("已退出")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
