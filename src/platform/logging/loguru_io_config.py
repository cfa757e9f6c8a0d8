"""
Loguru setup for the whole process.

Importing this module configures the sinks once:
- stdout, always
- an hourly rotated file under LOG_DIR, in DEBUG mode only
- stdlib `logging` records are routed into loguru

Every record carries the ExtraField values, so sinks can format them.
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import Settings, settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Argument / return values whose key matches one of these are masked
SENSITIVE_KEYWORDS = frozenset({'password', 'card_number', 'transaction_id'})

# Longest rendered argument / return value before truncation
MAX_CONTENT_LENGTH = 300

# Timestamp of the outermost @Logger.io call of the current chain
chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
# Nesting depth of @Logger.io calls, 0 outside any decorated call
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def default_extra() -> dict[str, Any]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


def build_log_format() -> str:
    """service | level | call site=>decorated target | message | elapsed | chain start"""
    return ' | '.join(
        (
            f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
            '<lvl>{level:<8}</>',
            f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
            '{message}',
            '<lk>{elapsed}</>',
            f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
        )
    )


def resolve_log_level(config: Settings) -> str:
    if config.LOG_LEVEL:
        return config.LOG_LEVEL.upper()
    return 'DEBUG' if config.DEBUG else 'INFO'


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru, keeping the original call site"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: Settings) -> 'LoguruLogger':
    loguru_logger.remove()
    bound_logger = loguru_logger.bind(**default_extra())
    log_format = build_log_format()
    level = resolve_log_level(config)

    bound_logger.add(sys.stdout, format=log_format, level=level)

    if config.DEBUG:
        prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
        log_filename = f'{prefix}{datetime.now().astimezone():%Y-%m-%d_%H}.log'
        bound_logger.add(
            LOG_DIR / log_filename,
            format=log_format,
            rotation=config.LOG_FILE_ROTATION,
            retention=config.LOG_FILE_RETENTION,
            compression='gz',
            level=level,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return bound_logger


custom_logger = configure_logging(settings)
