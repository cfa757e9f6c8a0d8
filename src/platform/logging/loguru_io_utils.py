import inspect
from inspect import Parameter
from pathlib import Path
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    MAX_CONTENT_LENGTH,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MASK = '********'

# key=value or 'key': value inside a rendered repr
_SENSITIVE_PATTERN = re.compile(
    r"\b({keys})(=|': ?)('[^']*'|\"[^\"]*\"|[^,)\s]+)".format(
        keys='|'.join(sorted(SENSITIVE_KEYWORDS))
    )
)

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_KEYWORD_KINDS = (Parameter.POSITIONAL_OR_KEYWORD, Parameter.KEYWORD_ONLY)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def reset_call_depth() -> None:
    depth = call_depth_var.get() - 1
    call_depth_var.set(depth)
    if not depth:
        # Outermost call finished, next call starts a new chain
        chain_start_time_var.set(0)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    """e.g. seat_registry_aggregate.py::SeatRegistry.select:104"""
    target = inspect.unwrap(getattr(func, '__func__', func))
    filename = Path(inspect.getfile(target)).name
    lineno = inspect.getsourcelines(target)[1]
    return f'{filename}::{target.__qualname__}:{lineno}'


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Drop the positional and keyword arguments func cannot accept"""
    params = list(inspect.signature(inspect.unwrap(func)).parameters.values())
    kinds = {param.kind for param in params}

    if Parameter.VAR_KEYWORD not in kinds:
        accepted = {param.name for param in params if param.kind in _KEYWORD_KINDS}
        kwargs = {key: value for key, value in kwargs.items() if key in accepted}

    if Parameter.VAR_POSITIONAL not in kinds:
        positional = [
            param.name
            for param in params
            if param.kind in _POSITIONAL_KINDS and param.name not in kwargs
        ]
        args = args[: len(positional)]

    return args, kwargs


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def mask_sensitive(data: Any) -> Any:
    """Mask sensitive values inside the text form of data; data itself if nothing matched"""
    try:
        text = str(data)
    except Exception:
        return data
    masked = _SENSITIVE_PATTERN.sub(rf"\1\2'{MASK}'", text)
    return data if masked == text else masked


def truncate_content(data: Any, max_length: int = MAX_CONTENT_LENGTH) -> Any:
    text = str(data)
    if len(text) <= max_length:
        return data
    return f'{text[:max_length]}... ({len(text)} chars)'
