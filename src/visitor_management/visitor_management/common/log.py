from __future__ import annotations

import logging
import sys
import threading

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))


def install_exception_hooks() -> None:
    """Log uncaught errors from the main thread and from background threads.

    A thread that dies this way only loses itself; the server keeps serving.
    """

    logger = logging.getLogger("visitor_management.uncaught")

    def _excepthook(exc_type, exc, tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc, tb)
            return
        logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))

    def _thread_excepthook(args: threading.ExceptHookArgs):
        if args.exc_type is SystemExit:
            return
        thread_name = args.thread.name if args.thread else "?"
        logger.critical(
            "Uncaught exception in thread %s",
            thread_name,
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook
