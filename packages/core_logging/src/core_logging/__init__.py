from .logger import (
    ENV_DEVELOPMENT,
    ENV_PRODUCTION,
    JsonFormatter,
    TextFormatter,
    get_logger,
    log_stage,
    bind_request_id,
    reset_request_id,
    current_request_id,
    cache_key_fp,
    log_cache_hit,
    log_cache_miss,
    log_cache_set,
    log_cache_error,
)

__all__ = [
    "ENV_DEVELOPMENT",
    "ENV_PRODUCTION",
    "JsonFormatter",
    "TextFormatter",
    "get_logger",
    "log_stage",
    "bind_request_id",
    "reset_request_id",
    "current_request_id",
    "cache_key_fp",
    "log_cache_hit",
    "log_cache_miss",
    "log_cache_set",
    "log_cache_error",
]
