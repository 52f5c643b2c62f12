# src/shop_backend/api/server.py

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import uvicorn

from ..core.state import AppState
from .app import create_app

logger = logging.getLogger(__name__)


@dataclass
class HTTPBackgroundRunner:
    server: uvicorn.Server
    thread: threading.Thread

    def stop(self) -> None:
        """Ask uvicorn to stop accepting connections and finish in-flight requests."""
        self.server.should_exit = True

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the server thread. Returns True if it has exited."""
        self.thread.join(timeout=timeout)
        return not self.thread.is_alive()


def start_http_in_background(state: AppState) -> HTTPBackgroundRunner:
    """
    Start the HTTP API in a background thread.

    Why a thread:
    - the main thread owns signal handling and the shutdown sequence,
    - uvicorn skips installing its own signal handlers outside the main thread,
      so Ctrl+C reaches our handler and shutdown order stays under our control
      (listener first, worker pool second).
    """
    settings = state.settings
    config = uvicorn.Config(
        create_app(state),
        host=settings.server_host,
        port=int(settings.server_port),
        log_config=None,  # keep our logging_setup handlers
        timeout_graceful_shutdown=max(1, int(settings.shutdown_timeout_seconds)),
    )
    server = uvicorn.Server(config)

    def runner() -> None:
        try:
            server.run()
        except Exception:
            logger.exception("HTTP server crashed.")

    t = threading.Thread(target=runner, name="http-server", daemon=True)
    t.start()

    logger.info("HTTP server thread started on %s:%s", settings.server_host, settings.server_port)
    return HTTPBackgroundRunner(server=server, thread=t)
