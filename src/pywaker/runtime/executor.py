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
"""Executor and spawner — the single-threaded run loop and its submission handle.

Usage::

    executor, spawner = new_executor_and_spawner()

    async def greet() -> None:
        await new_delay(0.5)
        print("done")

    spawner.spawn(greet())
    spawner.close()
    executor.run()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable
from typing import Any, TypeVar

from pywaker.core.config import Config
from pywaker.kernel.exceptions import PyWakerException, RuntimeStateException
from pywaker.runtime.channel import Receiver, Sender, channel
from pywaker.runtime.future import Future, as_future, is_ready
from pywaker.runtime.properties import ExecutorProperties
from pywaker.runtime.task import Task

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Spawner:
    """Submits computations to an executor. Clone freely; close when done."""

    def __init__(self, sender: Sender[Task]) -> None:
        self._sender = sender

    def __repr__(self) -> str:
        return f"Spawner(closed={self.closed})"

    def __enter__(self) -> Spawner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._sender.closed

    def clone(self) -> Spawner:
        return Spawner(self._sender.clone())

    def spawn(self, computation: Future[Any] | Awaitable[Any]) -> Task:
        """Queue ``computation`` to be driven by the executor.

        Raises:
            ExecutorGoneException: The executor was closed; the computation
                will never run.
            QueueFullException: The ready queue is bounded and full.
            RuntimeStateException: This spawner was already closed.
        """
        future = as_future(computation)
        if self.closed:
            future.close()
            raise RuntimeStateException("Cannot spawn on a closed spawner")
        task = Task(future, self._sender.clone())
        try:
            self._sender.send(task)
        except PyWakerException:
            task.discard()
            raise
        logger.debug("Spawned %r running %r", task, future)
        return task

    def close(self) -> None:
        """Release this spawner. The executor stops once all are released and work is done."""
        self._sender.close()


class Executor:
    """Drains the ready queue on the calling thread, polling each task in FIFO order."""

    def __init__(self, ready_queue: Receiver[Task]) -> None:
        self._ready_queue = ready_queue

    def __repr__(self) -> str:
        return f"Executor({self._ready_queue!r})"

    def run(self) -> None:
        """Run until every sender is closed and the queue is empty."""
        logger.debug("Executor running on thread %s", threading.current_thread().name)
        for task in self._ready_queue:
            self._resume(task)
        logger.debug("Executor drained; no senders remain")

    def close(self) -> None:
        """Destroy the receiving end. Queued tasks are discarded; later spawns fail."""
        leftover = self._ready_queue.close()
        for task in leftover:
            task.discard()
        if leftover:
            logger.debug("Executor closed with %d queued task(s) discarded", len(leftover))

    @staticmethod
    def _resume(task: Task) -> None:
        computation = task.take()
        if computation is None:
            # Stale duplicate from a redundant wake-up.
            return
        try:
            result = computation.poll(task.waker())
        except Exception as exc:
            logger.error("%r failed: %s", task, exc, exc_info=exc)
            computation.close()
            task.finish()
            return
        if is_ready(result):
            task.finish()
        else:
            task.restore(computation)


def new_executor_and_spawner(capacity: int | None = None) -> tuple[Executor, Spawner]:
    """Create a connected executor and spawner. ``capacity=None`` is unbounded."""
    sender, receiver = channel(capacity)
    return Executor(receiver), Spawner(sender)


def new_executor_and_spawner_from_config(config: Config) -> tuple[Executor, Spawner]:
    """Create an executor pair sized by the ``pywaker.executor`` config section."""
    properties = config.bind(ExecutorProperties)
    return new_executor_and_spawner(properties.queue_capacity)


class _ThreadWaker:
    """Waker that unparks the thread blocked in :func:`block_on`."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def wake(self) -> None:
        self._event.set()

    def park(self) -> None:
        self._event.wait()
        self._event.clear()


def block_on(computation: Future[T] | Awaitable[T]) -> T:
    """Drive one computation to completion on the calling thread and return its result."""
    future = as_future(computation)
    waker = _ThreadWaker()
    while True:
        result = future.poll(waker)
        if is_ready(result):
            return result.value  # type: ignore[union-attr]
        waker.park()
