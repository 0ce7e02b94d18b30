import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# the access-log middleware writes one line per request already
QUIET_LOGGERS = ("uvicorn.access",)


def configure_logging(level: str = "INFO") -> None:
    """
    Root logging for the API process and the `blog` CLI.

    Repeated calls (one per ``create_app``) keep the first configuration.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stdout)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
