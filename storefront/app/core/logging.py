import json
import logging
from typing import Optional

from storefront.app.core.config import Settings, get_settings

# Chatty per-request loggers from the HTTP order sink's client stack
_NOISY_LOGGERS = ("httpx", "httpcore")

# Extra attributes copied into JSON lines when a call site passes them,
# e.g. logger.info("...", extra={"session": sid[:8], "order_id": oid})
_CONTEXT_FIELDS = ("session", "order_id", "path", "method")


class StorefrontJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        doc = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                doc[key] = value
        if record.exc_info:
            doc["exc"] = self.formatException(record.exc_info)
        return json.dumps(doc, ensure_ascii=False, default=str)


def _make_console_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(cfg: Optional[Settings] = None) -> logging.Handler:
    """
    Configure the root logger from Settings (LOG_LEVEL / LOG_FORMAT are read
    by pydantic-settings). Returns the installed handler.

    httpx/httpcore stay at WARNING unless the service itself runs at DEBUG.
    """
    cfg = cfg or get_settings()
    log_level = logging.getLevelName(cfg.log_level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    json_mode = cfg.log_format.lower() == "json"

    handler = logging.StreamHandler()
    handler.setFormatter(StorefrontJsonFormatter() if json_mode else _make_console_formatter())

    root = logging.getLogger()
    # uvicorn installs its own handlers; replace them with ours
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers = [handler]
        lg.setLevel(log_level)

    noisy_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    return handler
