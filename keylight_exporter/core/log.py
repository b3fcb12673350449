import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_NAMES = ("keylight-console", "keylight-file")


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Re-running (tests, --file mode) must not stack handlers
    for h in list(logger.handlers):
        if h.get_name() in _HANDLER_NAMES:
            logger.removeHandler(h)

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    # Console
    ch = logging.StreamHandler()
    ch.set_name("keylight-console")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=5)
        fh.set_name("keylight-file")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    # Silence per-request client logging; one line per poll comes from the poller
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
