"""Logging setup helpers."""

from __future__ import annotations

import logging
import sys

from tqdm import tqdm


_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class TqdmLoggingHandler(logging.Handler):
    """Emit records through ``tqdm.write`` so active bars are redrawn below them."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def configure_logging(level: str = "INFO", *, progress_aware: bool = False) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handlers: list[logging.Handler] | None = None
    if progress_aware:
        handler = TqdmLoggingHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handlers = [handler]
    logging.basicConfig(level=numeric_level, format=_LOG_FORMAT, handlers=handlers, force=True)
