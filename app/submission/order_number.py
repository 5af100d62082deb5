import threading
import time
from datetime import datetime


class OrderNumberGenerator:
    """Issues ``DS-<year>-<6 digits>`` order numbers for forms that omit one.

    The suffix is the last six digits of the epoch milliseconds. Back-to-back
    calls never share a millisecond value, so they yield distinct numbers, but
    the suffix wraps every 1,000,000 ms (about 16.7 minutes) and a number can
    recur later in the same process.
    """

    PREFIX = "DS"
    SUFFIX_DIGITS = 6

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_millis = 0

    def next(self) -> str:
        with self._lock:
            millis = time.time_ns() // 1_000_000
            if millis <= self._last_millis:
                millis = self._last_millis + 1
            self._last_millis = millis
        year = datetime.now().year
        suffix = str(millis)[-self.SUFFIX_DIGITS:]
        return f"{self.PREFIX}-{year}-{suffix}"


default_generator = OrderNumberGenerator()
