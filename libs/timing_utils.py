from typing import Optional
import contextlib
import time as time_stdlib

import structlog

_logger = structlog.get_logger()


@contextlib.contextmanager
def time(description: Optional[str] = None, **logging_args):
    """Logs the wall clock time spent in the `with` block."""
    start = time_stdlib.perf_counter()
    yield
    elapsed = time_stdlib.perf_counter() - start
    _logger.info(f"Elapsed: {elapsed:.3f}s", description=description, **logging_args)
