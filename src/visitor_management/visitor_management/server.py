"""Run the API with a threaded Werkzeug server and graceful shutdown.

On SIGTERM/SIGINT: stop accepting requests, stop the database monitor, close
the pool, exit. If that stalls past SHUTDOWN_TIMEOUT the process is killed.
"""

from __future__ import annotations

import importlib
import logging
import os
import signal
import threading

from werkzeug.serving import make_server

from config import get_settings_module

from .main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings_module = get_settings_module()
    app = create_app(settings_module=settings_module)
    settings = importlib.import_module(settings_module)
    container = app.extensions["visitor_container"]

    host = str(getattr(settings, "HOST", "0.0.0.0"))
    port = int(getattr(settings, "PORT", 3001))
    shutdown_timeout = float(getattr(settings, "SHUTDOWN_TIMEOUT", 10))

    server = make_server(host, port, app, threaded=True)
    stopping = threading.Event()

    def _force_exit() -> None:
        logger.error("Graceful shutdown timed out after %.0fs, forcing exit", shutdown_timeout)
        os._exit(1)

    def _on_signal(signum, _frame) -> None:
        if stopping.is_set():
            return
        stopping.set()
        logger.info("%s received. Closing server...", signal.Signals(signum).name)
        killer = threading.Timer(shutdown_timeout, _force_exit)
        killer.daemon = True
        killer.start()
        # shutdown() blocks until serve_forever returns, so it cannot run on the serving thread.
        threading.Thread(target=server.shutdown, name="shutdown", daemon=True).start()

    signal.signal(signal.SIGTERM, _on_signal)
    signal.signal(signal.SIGINT, _on_signal)

    logger.info("Visitor management API listening on http://%s:%s/api (health: /api/health)", host, port)
    try:
        server.serve_forever()
    finally:
        container.monitor.stop()
        container.db.close()
        logger.info("Server closed. Database pool ended.")


if __name__ == "__main__":
    main()
