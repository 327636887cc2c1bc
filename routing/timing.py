# routing/timing.py

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager


@contextmanager
def timeblock(label: str, log_list: list[str] | None = None) -> Iterator[None]:
    """
    Log the wall time of a UI step (geocoding run, Nextmv submit, ...).

    Args:
        label: Text label describing the step.
        log_list: Optional list that collects human-readable timing lines
            for display in the UI.
    """
    start_s = time.perf_counter()
    logging.info('START: %s', label)
    try:
        yield
    finally:
        msg = f'{label}: {time.perf_counter() - start_s:.3f} seconds'
        logging.info('END:   %s', msg)
        if log_list is not None:
            log_list.append(msg)
