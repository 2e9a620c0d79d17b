import logging

import colorama

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def init_logging(level: str = "INFO") -> None:
    """Initialize logging and colorama"""
    colorama.init()
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # Request lines from httpx are noise next to the per-variant logs.
    logging.getLogger("httpx").setLevel(logging.WARNING)
