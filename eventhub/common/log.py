import sys

from loguru import logger

from eventhub.common.app_settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> - <level>{level}</level> - "
    "<cyan>{extra[view]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} - {level} - {extra[view]} - {message}"


def configure_logger(level: str | None = None, log_file: str | None = None, colorize: bool = True):
    """控制台输出 + 可选的滚动日志文件。每行带上产生日志的视图名（无则为 -）"""
    level = str(level or settings.log_level).upper()
    log_file = log_file if log_file is not None else settings.log_file

    # 重复调用时先清掉旧 sink
    logger.remove()
    logger.configure(extra={"view": "-"})

    logger.add(
        sys.stderr,
        level=level,
        colorize=colorize,
        backtrace=False,
        diagnose=False,
        format=CONSOLE_FORMAT,
    )

    if log_file:
        logger.add(
            f"{log_file}.log",
            level=level,
            rotation="1 MB",
            retention=7,
            encoding="utf-8",
            diagnose=False,
            format=FILE_FORMAT,
        )

    return logger


def view_logger(view: str):
    """绑定视图名的 logger，页面和订阅管理器用它记录日志"""
    return logger.bind(view=view)


logger = configure_logger()
