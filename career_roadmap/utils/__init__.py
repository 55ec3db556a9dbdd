"""Utility exports."""

from .helpers import (
    coerce_str_list,
    dedupe_preserve_order,
    parse_llm_json,
    strip_code_fence,
    truncate_text,
)
from .logger import get_logger
from .retry import backoff_delay, retry_on_rate_limit
from .timestamps import to_datetime, to_datetime_or_now, utcnow

__all__ = [
    "get_logger",
    "parse_llm_json",
    "strip_code_fence",
    "truncate_text",
    "coerce_str_list",
    "dedupe_preserve_order",
    "retry_on_rate_limit",
    "backoff_delay",
    "to_datetime",
    "to_datetime_or_now",
    "utcnow",
]
