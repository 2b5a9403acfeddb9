from __future__ import annotations
import logging
from typing import Any, Optional

import uvicorn

from core_config import Settings, get_settings
from core_config.constants import (
    SERVER_PORT,
    SERVER_SHUTDOWN_TIMEOUT_S,
    SERVER_TIMEOUT_KEEP_ALIVE_S,
)
from core_logging import log_stage

class Server:
    """
    uvicorn bootstrap for an ASGI app.

    ``serve()`` blocks until SIGINT/SIGTERM, then stops accepting connections
    and gives in-flight requests up to ``shutdown_timeout`` seconds to finish.
    """
    def __init__(
        self,
        app: Any,
        *,
        host: str = "0.0.0.0",
        port: int = SERVER_PORT,
        timeout_keep_alive: int = SERVER_TIMEOUT_KEEP_ALIVE_S,
        shutdown_timeout: float = SERVER_SHUTDOWN_TIMEOUT_S,
        log_level: str = "info",
        access_log: bool = True,
        log_config: Optional[dict] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.host = host
        self.port = int(port)
        self.shutdown_timeout = shutdown_timeout
        self.logger = logger
        self.config = uvicorn.Config(
            app,
            host=host,
            port=self.port,
            timeout_keep_alive=timeout_keep_alive,
            timeout_graceful_shutdown=int(shutdown_timeout),
            log_level=log_level,
            access_log=access_log,
            log_config=log_config,
        )
        self._server = uvicorn.Server(self.config)

    @classmethod
    def from_settings(cls, app: Any, settings: Optional[Settings] = None, **kwargs: Any) -> "Server":
        s = settings or get_settings()
        return cls(
            app,
            host=s.server_host,
            port=s.server_port,
            timeout_keep_alive=s.server_timeout_keep_alive_s,
            shutdown_timeout=s.server_shutdown_timeout_s,
            log_level=s.service_log_level.lower(),
            **kwargs,
        )

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"

    def serve(self) -> None:
        if self.logger is not None:
            log_stage(self.logger, "server", "starting", addr=self.addr)
        self._server.run()
        if self.logger is not None:
            log_stage(self.logger, "server", "stopped", addr=self.addr)

    async def serve_async(self) -> None:
        """Run on the current event loop; same shutdown behaviour as :meth:`serve`."""
        if self.logger is not None:
            log_stage(self.logger, "server", "starting", addr=self.addr)
        await self._server.serve()
        if self.logger is not None:
            log_stage(self.logger, "server", "stopped", addr=self.addr)

    def shutdown(self) -> None:
        """Ask a running server to stop, as if it had received SIGTERM."""
        self._server.should_exit = True

__all__ = ["Server"]
