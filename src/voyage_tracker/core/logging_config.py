"""Console logging setup and timing helper."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from rich.logging import RichHandler


logger = logging.getLogger("voyage_tracker")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_path=False)],
        force=True,
    )


@contextmanager
def timed(task: str) -> Iterator[None]:
    """Log how long the wrapped block took, including when it raises."""
    t0 = time.perf_counter()
    try:
        yield
    except Exception:
        logger.debug("[TIMING] %s failed after %.1fms", task, (time.perf_counter() - t0) * 1000)
        raise
    logger.debug("[TIMING] %s: %.1fms", task, (time.perf_counter() - t0) * 1000)
