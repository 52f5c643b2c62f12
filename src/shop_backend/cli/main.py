# src/shop_backend/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then:
- starts the HTTP API in a background thread (optional),
- waits for SIGINT/SIGTERM,
- shuts down: HTTP listener first, worker pool second.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.ports import BackgroundServer, StoppablePool
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def shutdown(
        pool: StoppablePool,
        server: BackgroundServer | None,
        *,
        timeout: float,
) -> None:
    """
    Graceful shutdown (no exceptions should escape).

    Order matters: stop accepting requests first, so nothing new can be
    submitted, then stop the pool and let already accepted background tasks finish.
    """
    if server is not None:
        try:
            server.stop()
            if not server.join(timeout=timeout):
                logger.warning("HTTP server did not stop within %.1fs; continuing shutdown.", timeout)
        except Exception:
            logger.exception("HTTP server shutdown failed.")

    try:
        pool.stop()
    except Exception:
        logger.exception("Worker pool shutdown failed.")


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(log_dir=settings.data_dir, level=settings.log_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    runner = None
    if settings.http_enabled:
        from ..api.server import start_http_in_background

        runner = start_http_in_background(state)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        logger.info("Running. Press Ctrl+C to stop.")
        stop_main.wait()
    finally:
        shutdown(state.worker_pool, runner, timeout=settings.shutdown_timeout_seconds)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
