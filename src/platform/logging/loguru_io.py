"""
Logger facade

    Logger.base.info('Seat A1 selected')     # business messages

    @Logger.io                               # call tracing
    def select(self, code): ...

@Logger.io logs the arguments and the return value of the decorated call at
DEBUG level (sensitive keys masked, long values truncated) and logs a raised
exception once, however many decorated frames it passes through.
"""

from functools import wraps
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, call_depth_var, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_P = ParamSpec('_P')
_T = TypeVar('_T')

# Frames from a logging helper up to the decorated function's caller
_CALLER_DEPTH = 2


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            self._enter(args, kwargs)
            try:
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                result = func(*args, **kwargs)
            except Exception as e:
                self._log_exception(e)
                if self.reraise:
                    raise
                return None
            else:
                self._debug(f'return: {self._render(result)}')
                return result
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))

    def _enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        self._debug(
            f'args: {self._render(args)}, kwargs: {self._render(kwargs)}', depth=_CALLER_DEPTH + 1
        )

    def _debug(self, message: str, *, depth: int = _CALLER_DEPTH) -> None:
        # Rendering masked content is not free, skip it when DEBUG is off
        if settings.DEBUG:
            self._bound(depth).debug(message)

    def _log_exception(self, e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        message = f'{type(e).__name__}: {e}'
        if isinstance(e, CustomBaseError):
            # Expected business failure, no traceback
            self._bound().error(message)
        else:
            self._bound().exception(message)

    def _bound(self, depth: int = _CALLER_DEPTH) -> 'LoguruLogger':
        return self._custom_logger.bind(**self.extra).opt(depth=depth)

    def _render(self, data: Any) -> Any:
        if isinstance(data, dict):
            rendered: Any = {
                key: self._render(should_mask_keyword(key, value)) for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            rendered = type(data)(self._render(item) for item in data)
        else:
            rendered = mask_sensitive(data)
        return truncate_content(rendered) if self.truncate_content else rendered

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator
