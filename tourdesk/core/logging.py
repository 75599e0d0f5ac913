from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

# httpx logs every PostgREST round trip at INFO.
CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Optional[str] = None, quiet: Iterable[str] = CHATTY_LOGGERS) -> None:
    log_level = (level or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if log_level != "DEBUG":
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)
