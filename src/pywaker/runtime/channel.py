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
"""Ready queue — multi-producer, single-consumer FIFO channel.

Any number of :class:`Sender` handles push items from any thread; exactly
one :class:`Receiver` pops them. Receiving blocks while the queue is empty
and at least one sender is open, and reports closure once every sender is
closed and the queue is drained.

Senders are released explicitly with ``close()`` (or ``with``), or when the
handle is garbage collected.
"""

from __future__ import annotations

import threading
import weakref
from collections import deque
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from pywaker.kernel.exceptions import (
    ChannelClosedException,
    ExecutorGoneException,
    QueueFullException,
    RuntimeStateException,
)

T = TypeVar("T")


class _Channel(Generic[T]):
    """State shared by all ends of one channel; guarded by ``cond``."""

    def __init__(self, capacity: int | None) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError(f"Channel capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.cond = threading.Condition()
        self.items: deque[T] = deque()
        self.senders = 0
        self.receiver_open = True


def _release_sender(chan: _Channel[Any]) -> None:
    with chan.cond:
        chan.senders -= 1
        if chan.senders == 0:
            chan.cond.notify_all()


class Sender(Generic[T]):
    """Cloneable sending end of a channel."""

    def __init__(self, chan: _Channel[T]) -> None:
        with chan.cond:
            chan.senders += 1
        self._chan = chan
        self._finalizer = weakref.finalize(self, _release_sender, chan)

    def __repr__(self) -> str:
        return f"Sender(closed={self.closed})"

    def __enter__(self) -> Sender[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def clone(self) -> Sender[T]:
        if self.closed:
            raise RuntimeStateException("Cannot clone a closed sender")
        return Sender(self._chan)

    def send(self, item: T, *, bounded: bool = True) -> None:
        """Enqueue ``item`` without blocking.

        ``bounded=False`` skips the capacity check. Requeues of work that was
        already admitted use it so they can never be refused.

        Raises:
            ExecutorGoneException: The receiver has been closed.
            QueueFullException: ``bounded`` and the channel is at capacity.
            RuntimeStateException: This sender handle was already closed.
        """
        if self.closed:
            raise RuntimeStateException("Cannot send on a closed sender")
        chan = self._chan
        with chan.cond:
            if not chan.receiver_open:
                raise ExecutorGoneException()
            if bounded and chan.capacity is not None and len(chan.items) >= chan.capacity:
                raise QueueFullException(
                    f"Ready queue is full ({chan.capacity} items queued)",
                    context={"capacity": chan.capacity},
                )
            chan.items.append(item)
            chan.cond.notify()

    def close(self) -> None:
        """Release this handle. Idempotent."""
        self._finalizer()


class Receiver(Generic[T]):
    """The single receiving end of a channel. Iterating drains it until closure."""

    def __init__(self, chan: _Channel[T]) -> None:
        self._chan = chan

    def __repr__(self) -> str:
        return f"Receiver(queued={len(self)}, open={self._chan.receiver_open})"

    def __len__(self) -> int:
        with self._chan.cond:
            return len(self._chan.items)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except ChannelClosedException:
                return

    @property
    def closed(self) -> bool:
        return not self._chan.receiver_open

    def recv(self, timeout: float | None = None) -> T:
        """Pop the oldest item, blocking while the queue is empty and senders remain.

        Raises:
            ChannelClosedException: No senders remain and the queue is empty,
                or this receiver was closed.
            TimeoutError: ``timeout`` elapsed with nothing to receive.
        """
        chan = self._chan
        with chan.cond:
            ready = chan.cond.wait_for(
                lambda: chan.items or chan.senders == 0 or not chan.receiver_open,
                timeout=timeout,
            )
            if not ready:
                raise TimeoutError(f"Nothing received within {timeout}s")
            if chan.receiver_open and chan.items:
                return chan.items.popleft()
            raise ChannelClosedException("Channel is closed and drained")

    def close(self) -> list[T]:
        """Close the receiving end and return whatever was still queued.

        Subsequent sends raise :class:`ExecutorGoneException`. Idempotent.
        """
        chan = self._chan
        with chan.cond:
            chan.receiver_open = False
            leftover = list(chan.items)
            chan.items.clear()
            chan.cond.notify_all()
        return leftover


def channel(capacity: int | None = None) -> tuple[Sender[T], Receiver[T]]:
    """Create a channel; ``capacity=None`` means unbounded."""
    chan: _Channel[T] = _Channel(capacity)
    return Sender(chan), Receiver(chan)
