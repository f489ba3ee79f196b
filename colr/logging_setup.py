# colr/logging_setup.py
from __future__ import annotations

import logging
import logging.handlers
import queue
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List

from colr.io.json_store import ensure_dir
from colr.logging_context import current_fields

LOG_FORMAT = (
    "%(asctime)s %(levelname)s "
    "[tid=%(thread)d] "
    "%(name)s:%(funcName)s:%(lineno)d "
    "corr=%(corr_id)s action=%(action)s - %(message)s"
)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # explicit extra={"action": ...} wins over the context var
        for name, value in current_fields().items():
            if not hasattr(record, name):
                setattr(record, name, value)
        return True


@dataclass
class LoggingRuntime:
    listener: logging.handlers.QueueListener

    def stop(self) -> None:
        try:
            self.listener.stop()
        except Exception:
            pass


def setup_logging(
    *,
    app_data_dir: Path,
    level: str = "INFO",
    keep_days_app: int = 14,
    keep_days_error: int = 30,
    console: bool = False,
) -> LoggingRuntime:
    """
    Root logger gets a single QueueHandler; a QueueListener thread owns the
    file handlers (logs/app.log, logs/error.log, rotated at midnight).
    """
    logs_dir = app_data_dir / "logs"
    ensure_dir(logs_dir)

    log_q: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=20_000)
    formatter = logging.Formatter(fmt=LOG_FORMAT)

    app_fh = logging.handlers.TimedRotatingFileHandler(
        filename=str(logs_dir / "app.log"),
        when="midnight",
        backupCount=int(keep_days_app),
        encoding="utf-8",
    )
    app_fh.setLevel(logging.INFO)
    app_fh.setFormatter(formatter)

    err_fh = logging.handlers.TimedRotatingFileHandler(
        filename=str(logs_dir / "error.log"),
        when="midnight",
        backupCount=int(keep_days_error),
        encoding="utf-8",
    )
    err_fh.setLevel(logging.ERROR)
    err_fh.setFormatter(formatter)

    handlers: List[logging.Handler] = [app_fh, err_fh]

    if console:
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.DEBUG)
        ch.setFormatter(formatter)
        handlers.append(ch)

    # 上下文字段在入队前注入（listener 线程里 contextvars 已经不是调用方的值）
    qh = logging.handlers.QueueHandler(log_q)
    qh.setLevel(logging.DEBUG)
    qh.addFilter(ContextFilter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(qh)

    listener = logging.handlers.QueueListener(log_q, *handlers, respect_handler_level=True)
    listener.start()

    _install_global_exception_hooks()

    logging.getLogger(__name__).info("logging initialized", extra={"action": "boot"})
    return LoggingRuntime(listener=listener)


def _install_global_exception_hooks() -> None:
    log = logging.getLogger("unhandled")

    def excepthook(exc_type, exc, tb):
        log.critical("unhandled exception (main thread)", exc_info=(exc_type, exc, tb))

    def th_excepthook(args: threading.ExceptHookArgs):
        log.critical(
            "unhandled exception (thread %s)",
            getattr(args.thread, "name", "?"),
            extra={"action": "thread_excepthook"},
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = excepthook
    threading.excepthook = th_excepthook
