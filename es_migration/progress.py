# progress.py

import logging
import time
from datetime import timedelta

logger = logging.getLogger("es_migration.progress")


class ProgressTracker:
    """
    Reindex progress for a single run.

    update() is handed to the store as the bulk progress callback. A percentage
    is emitted (logged, and passed to `listener` if given) only when its integer
    value grows past the last one emitted.
    """

    def __init__(self, listener=None, clock=time.monotonic):
        self.listener = listener
        self.clock = clock
        self.last_percent = -1
        self.emitted = []
        self._started = None

    def start(self):
        self._started = self.clock()
        self.last_percent = -1
        self.emitted = []

    @property
    def elapsed(self):
        if self._started is None:
            return 0.0
        return self.clock() - self._started

    def update(self, current, total):
        if total <= 0:
            percent = 100
        else:
            percent = min(int(current / total * 100), 100)

        if percent <= self.last_percent:
            return False

        self.last_percent = percent
        self.emitted.append(percent)
        logger.info("Reindexing... %d%% [Time elapsed: %s]", percent, timedelta(seconds=self.elapsed))
        if self.listener is not None:
            self.listener(percent, self.elapsed)
        return True
