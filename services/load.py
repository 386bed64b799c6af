"""Synthetic CPU load used to exercise autoscaling."""

from __future__ import annotations

import random
import time


def burn(duration_ms: int) -> None:
    """Spin the calling thread for at least ``duration_ms`` milliseconds.

    This is a busy loop on purpose: it never sleeps or yields, so on an event
    loop it stalls every other pending request until it returns.
    """
    start = time.monotonic()
    x = 0.0
    while (time.monotonic() - start) * 1000 < duration_ms:
        x = random.random() * random.random() * random.random()
