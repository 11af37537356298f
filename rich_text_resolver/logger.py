import logging
import os

DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger("rich_text_resolver")
trace_logger = logging.getLogger("rich_text_resolver.trace")

# Create a custom logging level
DETAIL = 15
logging.addLevelName(DETAIL, "DETAIL")


# Create a custom log method for the "DETAIL" level
def detail(self, message, *args, **kws):
    if self.isEnabledFor(DETAIL):
        self._log(DETAIL, message, args, **kws)


# Add the custom log method to the logging.Logger class
logging.Logger.detail = detail  # type: ignore


def get_logger() -> logging.Logger:
    """The package logger with its level taken from the `LOG_LEVEL` environment variable."""
    level = os.environ.get("LOG_LEVEL", "") or DEFAULT_LOG_LEVEL
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logger


def log_streaming_init(level: int) -> None:
    handler = logging.StreamHandler()
    handler.name = "rich_text_resolver_log_handler"
    formatter = logging.Formatter("%(asctime)s %(name)-30s %(levelname)-8s %(message)s")
    handler.setFormatter(formatter)

    # Only want to add the handler once
    if "rich_text_resolver_log_handler" not in [h.name for h in logger.handlers]:
        logger.addHandler(handler)

    logger.setLevel(level)
