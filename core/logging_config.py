import logging
from datetime import datetime, timezone
from typing import Optional

class UTCFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%d %H:%M:%S UTC")

    def format(self, record: logging.LogRecord) -> str:
        # Extract just the module name from the dotted path
        record.name = record.name.split('.')[-1]
        return super().format(record)

def setup_logging(level: Optional[str] = None) -> None:
    formatter = UTCFormatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s"
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel((level or "INFO").upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Remove existing handlers and add our custom handler
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
