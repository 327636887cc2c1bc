# passengers/pacing.py

import logging
import time
from collections.abc import Callable

from planner.config import PACING_EVERY, PACING_PAUSE_S


class FixedPacer:
    """
    Fixed-rate pacing for sequential API calls.

    Sleeps `pause_s` before the call at position `index` whenever `index` is a
    positive multiple of `every`. It does not look at the server's rate-limit
    headers and never adapts.
    """

    def __init__(
        self,
        *,
        every: int = PACING_EVERY,
        pause_s: float = PACING_PAUSE_S,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if every <= 0:
            raise ValueError('every must be a positive integer.')
        self.every = int(every)
        self.pause_s = float(pause_s)
        self._sleep = sleep
        self.pauses = 0

    def should_pause(self, index: int) -> bool:
        return index > 0 and index % self.every == 0

    def wait(self, index: int) -> bool:
        """
        Pause if the call at `index` is due for pacing.

        Args:
            index: Zero-based position of the upcoming call.

        Returns:
            True if a pause happened.
        """
        if not self.should_pause(index):
            return False

        logging.info('Pacing: sleeping %.3f s before record %d', self.pause_s, index + 1)
        self._sleep(self.pause_s)
        self.pauses += 1
        return True
