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
"""Completion cell — one-shot completion handed from a producer thread to a poller."""

from __future__ import annotations

import threading
from typing import Any

from pywaker.runtime.future import PENDING, Poll, Ready
from pywaker.runtime.ports.waker import Waker


class CompletionCell:
    """Lock-guarded ``completed`` flag plus the waker to notify on completion.

    ``completed`` only ever goes from False to True. Both fields are read and
    written under one lock; the waiter is invoked after the lock is released
    so a waker that re-enters the cell cannot deadlock.

    A ``signal()`` that happens before the first ``poll()`` leaves the cell
    completed, so that poll returns Ready without registering anything. A
    ``signal()`` that happens after ``poll()`` registered a waker sees that
    waker and wakes it exactly once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._completed = False
        self._value: Any = None
        self._waiter: Waker | None = None

    def __repr__(self) -> str:
        return f"CompletionCell(completed={self._completed})"

    @property
    def completed(self) -> bool:
        with self._lock:
            return self._completed

    def signal(self, value: Any = None) -> bool:
        """Mark the cell completed and wake the registered waiter, if any.

        Returns True if this call performed the completion. Later calls keep
        the first value and find no waiter to wake.
        """
        with self._lock:
            if self._completed:
                return False
            self._completed = True
            self._value = value
            waiter, self._waiter = self._waiter, None
        if waiter is not None:
            waiter.wake()
        return True

    def poll(self, waker: Waker) -> Poll[Any]:
        """Return Ready once completed; otherwise register ``waker`` (last one wins)."""
        with self._lock:
            if self._completed:
                return Ready(self._value)
            self._waiter = waker
            return PENDING
