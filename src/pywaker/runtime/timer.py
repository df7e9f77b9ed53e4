# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Delay future — completes after a fixed duration, signalled by a timer thread.

Each :class:`DelayFuture` starts one daemon thread that sleeps for the
duration and then signals the future's :class:`CompletionCell`. The thread
only holds the cell, never the future, so discarding the future early is
safe: the thread still runs to completion and its signal either finds no
waiter or wakes a task that has nothing left to do.

There is no way to cancel an in-flight delay.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections.abc import Callable
from datetime import timedelta

from pywaker.runtime.completion import CompletionCell
from pywaker.runtime.future import Future, Poll
from pywaker.runtime.ports.waker import Waker

logger = logging.getLogger(__name__)

_thread_ids = itertools.count(1)


def _to_seconds(duration: float | timedelta) -> float:
    seconds = duration.total_seconds() if isinstance(duration, timedelta) else float(duration)
    if seconds < 0:
        raise ValueError(f"Delay duration must be non-negative, got {duration!r}")
    return seconds


def _fire_after(cell: CompletionCell, seconds: float, sleep: Callable[[float], object]) -> None:
    sleep(seconds)
    first = cell.signal()
    logger.debug(
        "Delay of %.3fs elapsed on %s (first signal: %s)", seconds, threading.current_thread().name, first
    )


class DelayFuture(Future[None]):
    """Future that becomes Ready once ``duration`` has elapsed.

    Args:
        duration: Seconds (int/float) or a ``timedelta``. Zero is allowed.
        sleep: Blocking sleep used by the timer thread; tests may inject one.
    """

    def __init__(
        self,
        duration: float | timedelta,
        *,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._seconds = _to_seconds(duration)
        self._cell = CompletionCell()
        self._thread = threading.Thread(
            target=_fire_after,
            args=(self._cell, self._seconds, sleep),
            name=f"pywaker-delay-{next(_thread_ids)}",
            daemon=True,
        )
        self._thread.start()

    def __repr__(self) -> str:
        state = "ready" if self._cell.completed else "pending"
        return f"DelayFuture({self._seconds}s, {state})"

    @property
    def seconds(self) -> float:
        return self._seconds

    def poll(self, waker: Waker) -> Poll[None]:
        return self._cell.poll(waker)


def new_delay(
    duration: float | timedelta,
    *,
    sleep: Callable[[float], object] = time.sleep,
) -> DelayFuture:
    """Create a :class:`DelayFuture`; its timer starts immediately."""
    return DelayFuture(duration, sleep=sleep)
