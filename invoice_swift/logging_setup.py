import logging
import sys
from logging.handlers import RotatingFileHandler

from invoice_swift.env import is_debug, load_env, log_dir


_LOG_FILE_NAME = "invoice_swift.log"
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5

# httpx logs every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _quiet_http_loggers(debug: bool) -> None:
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)


def setup_logging(log_to_file: bool = True) -> None:
    load_env()
    debug = is_debug()
    log_level = logging.DEBUG if debug else logging.INFO
    root_logger = logging.getLogger()
    _quiet_http_loggers(debug)

    if getattr(root_logger, "_is_logging_configured", False):
        root_logger.setLevel(log_level)
        for handler in root_logger.handlers:
            handler.setLevel(log_level)
        return

    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_to_file:
        directory = log_dir()
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                directory / _LOG_FILE_NAME,
                maxBytes=_MAX_LOG_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
        )

    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger._is_logging_configured = True
