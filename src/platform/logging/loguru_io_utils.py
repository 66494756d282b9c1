from inspect import getfile, getsourcelines
from os.path import basename
from re import IGNORECASE, compile as re_compile
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    TRUNCATE_LIMIT,
    call_depth_var,
    chain_start_time_var,
)


_SENSITIVE_PATTERN = re_compile(
    r"""(['"]?)(\w*(?:%s)\w*)\1(\s*[=:]\s*)(['"]?)[^'",\s)}]+\4"""
    % '|'.join(sorted(SENSITIVE_KEYWORDS)),
    IGNORECASE,
)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def mask_sensitive(data: Any) -> Any:
    data_str = str(data)
    masked = _SENSITIVE_PATTERN.sub(r"\1\2\1\3\4********\4", data_str)
    return data if masked == data_str else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    if isinstance(keyword, str) and keyword.lower() in SENSITIVE_KEYWORDS:
        return '********'
    return value


def truncate_content(data: Any) -> Any:
    data_str = str(data)
    if len(data_str) <= TRUNCATE_LIMIT:
        return data
    return f'{data_str[:TRUNCATE_LIMIT]}... ({len(data_str) - TRUNCATE_LIMIT} more chars)'
