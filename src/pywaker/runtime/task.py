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
"""Task — a schedulable computation that can put itself back on the ready queue."""

from __future__ import annotations

import itertools
import logging
from typing import Any

from pywaker.kernel.exceptions import InvariantViolationException, RuntimeStateException
from pywaker.runtime.channel import Sender
from pywaker.runtime.future import Future

logger = logging.getLogger(__name__)

_task_ids = itertools.count(1)


class Task:
    """Owns one computation plus a sender used to requeue itself.

    The computation slot is empty while the executor is polling it and after
    it has finished. Only the executor thread takes the computation out or
    puts it back, so a computation is never polled by two callers at once.

    A finished task releases its sender, so an executor whose spawners are
    gone stops once every task has finished.
    """

    def __init__(self, computation: Future[Any], sender: Sender[Task]) -> None:
        self.id = next(_task_ids)
        self._computation: Future[Any] | None = computation
        self._sender = sender
        self._finished = False

    def __repr__(self) -> str:
        if self._finished:
            state = "finished"
        elif self._computation is None:
            state = "running"
        else:
            state = "idle"
        return f"Task(id={self.id}, {state})"

    @property
    def finished(self) -> bool:
        return self._finished

    def take(self) -> Future[Any] | None:
        """Remove the computation for polling; None if running or finished."""
        computation, self._computation = self._computation, None
        return computation

    def restore(self, computation: Future[Any]) -> None:
        """Put back a computation that returned Pending."""
        if self._computation is not None or self._finished:
            raise InvariantViolationException(
                f"{self!r} already holds a computation",
                context={"task_id": self.id},
            )
        self._computation = computation

    def finish(self) -> None:
        """Drop the computation for good and release the requeue sender."""
        self._finished = True
        self._computation = None
        self._sender.close()

    def discard(self) -> None:
        """Finish a task that will never run again, closing its computation."""
        computation = self.take()
        if computation is not None:
            computation.close()
        self.finish()

    def schedule(self) -> None:
        """Push this task onto the ready queue.

        Wake-ups for finished tasks, or for tasks whose executor is gone, are
        dropped. Capacity limits only apply to new spawns, so a requeue of an
        admitted task is never refused.
        """
        if self._finished:
            return
        try:
            self._sender.send(self, bounded=False)
        except RuntimeStateException as exc:
            logger.debug("Dropped wake-up for %r: %s", self, exc)

    def waker(self) -> TaskWaker:
        return TaskWaker(self)


class TaskWaker:
    """Waker that requeues its task. Safe to call from any thread, repeatedly."""

    __slots__ = ("_task",)

    def __init__(self, task: Task) -> None:
        self._task = task

    def __repr__(self) -> str:
        return f"TaskWaker({self._task!r})"

    @property
    def task(self) -> Task:
        return self._task

    def wake(self) -> None:
        self._task.schedule()
