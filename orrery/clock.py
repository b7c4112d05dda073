#!/usr/bin/env python3
"""
Frame clock for the Orrery.

Turns the render loop's monotonically increasing timestamps into per-frame
deltas. The clock never reports a negative delta: a timestamp that goes
backwards (clock adjustment, resumed laptop) yields 0 for that frame. A
non-finite timestamp is treated the same way and is not remembered.
"""
import logging
import math
from typing import Optional

logger = logging.getLogger(__name__)


class OrbitalClock:
    """
    Converts absolute timestamps (seconds) into elapsed-time deltas.

    The first tick only records the timestamp and returns 0.0, so a scene that
    starts late does not lurch forward on its first frame.
    """

    def __init__(self, max_delta: Optional[float] = None):
        if max_delta is not None and (not math.isfinite(max_delta) or max_delta <= 0):
            raise ValueError("max_delta must be a finite number > 0")
        self.max_delta = max_delta
        self.last_timestamp: Optional[float] = None

    def reset(self) -> None:
        self.last_timestamp = None

    def tick(self, now: float) -> float:
        now = float(now)
        if not math.isfinite(now):
            logger.debug("non-finite timestamp %r ignored; delta is 0", now)
            return 0.0
        last = self.last_timestamp
        self.last_timestamp = now
        if last is None:
            return 0.0
        delta = now - last
        if delta < 0.0:
            logger.debug("timestamp went backwards by %.6fs; clamping delta to 0", -delta)
            return 0.0
        if self.max_delta is not None and delta > self.max_delta:
            return self.max_delta
        return delta
