import logging, sys, orjson, os, time
from typing import Any, Optional, Dict, IO
import contextvars
from core_utils.fingerprints import sha256_hex

ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"

# ────────────────────────────────────────────────────────────
# Request-id binding
# ────────────────────────────────────────────────────────────
_REQUEST_ID: contextvars.ContextVar[Optional[str]] = \
    contextvars.ContextVar("_REQUEST_ID", default=None)

def bind_request_id(request_id: Optional[str]) -> contextvars.Token:
    """Bind the current request_id into the local context for log injection."""
    return _REQUEST_ID.set(request_id)

def reset_request_id(token: contextvars.Token) -> None:
    _REQUEST_ID.reset(token)

def current_request_id() -> Optional[str]:
    """Return the currently bound request_id (if any)."""
    return _REQUEST_ID.get()

class _RequestIdFilter(logging.Filter):
    """Inject the bound request_id (if any) into LogRecords that lack it."""
    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            rid = _REQUEST_ID.get()
            if rid:
                record.request_id = rid
        return True

# Reserved LogRecord attributes we must not overwrite
_RESERVED: set[str] = {
    "name","msg","args","levelname","levelno",
    "pathname","filename","module","exc_info","exc_text","stack_info",
    "lineno","funcName","created","msecs","relativeCreated",
    "thread","threadName","processName","process","message","asctime",
    "taskName",
}

# Fields kept flat in the JSON envelope; everything else is nested under ``meta``
_TOP_LEVEL: set[str] = {
    "request_id",
    "stage",
    "latency_ms",
    "key_fp",
    "status_code",
    "path",
    "method",
    "error",
}

def _default(obj):
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="ignore")
    if isinstance(obj, BaseException):
        return f"{obj.__class__.__name__}: {obj}"
    return str(obj)

def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED}

class JsonFormatter(logging.Formatter):
    """Emit one JSON object per line.

    ``ts``/``level``/``service``/``event`` are always present; known
    correlation fields stay top-level, everything else goes under ``meta``.
    """

    def __init__(self, prefix: Optional[str] = None) -> None:
        super().__init__()
        self.prefix = prefix

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(getattr(record, "created", time.time()))),
            "level": record.levelname,
            "service": os.getenv("SERVICE_NAME", record.name),
            "event": record.getMessage(),
        }
        if self.prefix:
            base["prefix"] = self.prefix

        meta: Dict[str, Any] = {}
        for key, val in _extras(record).items():
            if key in _TOP_LEVEL:
                base[key] = val
            else:
                meta[key] = val

        # A human message passed as ``message=`` by callers is preserved verbatim
        msg_extra = meta.pop("message_extra", None)
        if msg_extra is not None:
            base["message"] = msg_extra
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        if meta:
            base["meta"] = meta

        return orjson.dumps(base, default=_default).decode("utf-8")

class TextFormatter(logging.Formatter):
    """Human-readable single line for local development:

        3:04PM INFO prefix: event key=value ...
    """

    def __init__(self, prefix: Optional[str] = None) -> None:
        super().__init__()
        self.prefix = prefix

    def format(self, record: logging.LogRecord) -> str:
        clock = time.strftime("%I:%M%p", time.localtime(record.created)).lstrip("0")
        parts = [clock, record.levelname]
        if self.prefix:
            parts.append(f"{self.prefix}:")
        parts.append(record.getMessage())
        for key, val in _extras(record).items():
            if isinstance(val, (dict, list, tuple)):
                val = orjson.dumps(val, default=_default).decode("utf-8")
            parts.append(f"{key}={val}")
        line = " ".join(str(p) for p in parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

class StructuredLogger(logging.Logger):
    """
    A drop-in `logging.Logger` replacement that **accepts arbitrary keyword
    arguments** (e.g. `logger.info("msg", key="k")`) and transparently
    merges them into the `extra` mapping.
    """

    def _log(                                   # noqa: PLR0913 – keep signature
        self,
        level: int,
        msg: str,
        args,
        exc_info=None,
        extra: Dict[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **kwargs: Any,
    ) -> None:
        if kwargs:                              # merge kw-args → extra-dict
            extra = {**(extra or {}), **kwargs}
        extra = _sanitize_extra(extra)
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel,
        )

class DynamicStdoutHandler(logging.StreamHandler):
    """Default handler: writes to whatever `sys.stdout` is at emit time, so a
    stdout swapped after logger creation still receives the lines."""

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self.setStream(sys.stdout)
        super().emit(record)

# Make the subclass the default for *new* loggers created after this import
logging.setLoggerClass(StructuredLogger)

def _resolve_environment(environment: Optional[str]) -> str:
    env = (environment or os.getenv("ENVIRONMENT") or ENV_PRODUCTION).strip().lower()
    return ENV_DEVELOPMENT if env in ("dev", "development", "local") else ENV_PRODUCTION

def get_logger(
    name: str = "app",
    level: str | int | None = None,
    *,
    environment: Optional[str] = None,
    prefix: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Build (or fetch) a logger.

    Top-level names (no dot) own a single handler and stop propagation;
    dotted names never own handlers and bubble up to their root. Passing
    ``environment``, ``prefix`` or ``stream`` rebuilds the root handler.
    """
    logger = logging.getLogger(name)
    is_service_root = "." not in name

    if is_service_root:
        reconfigure = environment is not None or prefix is not None or stream is not None
        if reconfigure:
            for h in list(logger.handlers):
                logger.removeHandler(h)
        if not logger.handlers:
            handler: logging.Handler = (
                logging.StreamHandler(stream) if stream is not None else DynamicStdoutHandler()
            )
            if _resolve_environment(environment) == ENV_DEVELOPMENT:
                handler.setFormatter(TextFormatter(prefix))
            else:
                handler.setFormatter(JsonFormatter(prefix))
            logger.addHandler(handler)
        logger.propagate = False
    else:
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.propagate = True

    lvl = level or os.getenv("SERVICE_LOG_LEVEL", "INFO")
    logger.setLevel(lvl.upper() if isinstance(lvl, str) else lvl)
    if not any(isinstance(f, _RequestIdFilter) for f in logger.filters):
        logger.addFilter(_RequestIdFilter())
    return logger

def _sanitize_extra(extra: Dict[str, Any] | None) -> Dict[str, Any]:
    """
    Remove/rename keys in `extra` that would collide with LogRecord attributes.
    - `message` is remapped to `message_extra` to preserve content.
    - all other collisions are namespaced as `meta_<key>`.
    """
    if not extra:
        return {}
    safe: Dict[str, Any] = {}
    for k, v in extra.items():
        lk = str(k)
        if lk in _RESERVED:
            if lk == "message":
                safe["message_extra"] = v
            else:
                safe[f"meta_{lk}"] = v
        else:
            safe[lk] = v
    return safe

# ---------------------------------------------------------------------------#
# log_stage – one structured line tagged with its pipeline stage             #
# ---------------------------------------------------------------------------#
def log_stage(logger: logging.Logger, stage: str, event: str, *, level: int = logging.INFO, **fixed: Any) -> None:
    """``log_stage(logger, "cache", "cache.hit", key_fp=fp)``"""
    logger.log(level, event, extra=_sanitize_extra({"stage": stage, **fixed}))

# ────────────────────────────────────────────────────────────
# Cache logging helpers
# ────────────────────────────────────────────────────────────
def cache_key_fp(key: Any) -> str:
    """Deterministic fingerprint for cache keys (avoid logging raw keys)."""
    return "sha256:" + sha256_hex(str(key))[:16]

def log_cache_hit(logger: logging.Logger, *, key: Any, backend: str = "redis",
                  latency_ms: Optional[float] = None) -> None:
    log_stage(logger, "cache", "cache.hit", key_fp=cache_key_fp(key),
              backend=backend, latency_ms=latency_ms)

def log_cache_miss(logger: logging.Logger, *, key: Any, backend: str = "redis",
                   reason: str = "absent", latency_ms: Optional[float] = None) -> None:
    log_stage(logger, "cache", "cache.miss", key_fp=cache_key_fp(key),
              backend=backend, reason=reason, latency_ms=latency_ms)

def log_cache_set(logger: logging.Logger, *, key: Any, backend: str = "redis",
                  ttl_ms: Optional[int] = None, bytes: Optional[int] = None) -> None:
    log_stage(logger, "cache", "cache.set", key_fp=cache_key_fp(key),
              backend=backend, ttl_ms=ttl_ms, bytes=bytes)

def log_cache_error(logger: logging.Logger, *, key: Any, event: str, error: BaseException,
                    backend: str = "redis") -> None:
    """WARNING-level cache breadcrumb; the caller keeps going."""
    log_stage(logger, "cache", event, level=logging.WARNING, key_fp=cache_key_fp(key),
              backend=backend, error=str(error), error_type=error.__class__.__name__)
