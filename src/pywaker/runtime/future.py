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
"""Poll results and the Future abstraction driven by the executor.

A future is a resumable state machine: each ``poll(waker)`` either finishes
with ``Ready(value)`` or returns ``PENDING`` after arranging for ``waker`` to
be woken once progress is possible. Native ``async def`` coroutines are
adapted onto the same protocol by :class:`CoroutineFuture`.
"""

from __future__ import annotations

import abc
import inspect
from collections.abc import Awaitable, Coroutine, Generator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pywaker.kernel.exceptions import InvariantViolationException
from pywaker.runtime.ports.waker import Waker

T = TypeVar("T")


@dataclass(frozen=True)
class Ready(Generic[T]):
    """A finished poll carrying the computation's result."""

    value: T


class _Pending:
    """Singleton marking an unfinished poll."""

    _instance: _Pending | None = None

    def __new__(cls) -> _Pending:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "PENDING"

    def __bool__(self) -> bool:
        return False


PENDING = _Pending()

Poll = Union[Ready[T], _Pending]


def is_ready(result: Poll[Any]) -> bool:
    return isinstance(result, Ready)


class Future(abc.ABC, Generic[T]):
    """Base class for pollable computations.

    Subclasses implement :meth:`poll`. Awaiting a future inside an
    ``async def`` yields it to the enclosing :class:`CoroutineFuture`, which
    polls it with the task's waker and resumes the coroutine with its value.
    """

    @abc.abstractmethod
    def poll(self, waker: Waker) -> Poll[T]:
        """Make progress; return ``Ready(value)`` or ``PENDING``.

        On ``PENDING`` the future must have registered ``waker`` somewhere that
        will call ``waker.wake()`` once polling again can make progress.
        """

    def close(self) -> None:
        """Release resources of a future that will never be polled again."""

    def __await__(self) -> Generator[Future[T], Any, T]:
        return (yield self)


class CoroutineFuture(Future[T]):
    """Drives a native coroutine (or any ``__await__`` generator) as a future."""

    def __init__(self, coro: Coroutine[Any, Any, T] | Generator[Any, Any, T]) -> None:
        self._coro = coro
        self._awaiting: Future[Any] | None = None
        self._done = False

    def __repr__(self) -> str:
        name = getattr(self._coro, "__qualname__", type(self._coro).__name__)
        return f"CoroutineFuture({name})"

    def poll(self, waker: Waker) -> Poll[T]:
        if self._done:
            raise InvariantViolationException(f"{self!r} polled after completion")

        value: Any = None
        error: Exception | None = None
        if self._awaiting is not None:
            try:
                result = self._awaiting.poll(waker)
            except Exception as exc:
                error = exc
            else:
                if not is_ready(result):
                    return PENDING
                value = result.value  # type: ignore[union-attr]
            self._awaiting = None

        while True:
            try:
                if error is not None:
                    yielded = self._coro.throw(error)
                else:
                    yielded = self._coro.send(value)
            except StopIteration as stop:
                self._done = True
                return Ready(stop.value)
            except BaseException:
                self._done = True
                raise

            value, error = None, None
            if not isinstance(yielded, Future):
                self.close()
                raise TypeError(
                    f"{self!r} awaited {yielded!r}, which is not a pywaker Future"
                )

            try:
                result = yielded.poll(waker)
            except Exception as exc:
                error = exc
                continue
            if not is_ready(result):
                self._awaiting = yielded
                return PENDING
            value = result.value  # type: ignore[union-attr]

    def close(self) -> None:
        self._done = True
        self._awaiting = None
        self._coro.close()


def as_future(computation: Future[T] | Awaitable[T]) -> Future[T]:
    """Adapt a future, coroutine, or other awaitable into a :class:`Future`."""
    if isinstance(computation, Future):
        return computation
    if inspect.iscoroutine(computation):
        return CoroutineFuture(computation)
    if inspect.isawaitable(computation):
        return CoroutineFuture(computation.__await__())  # type: ignore[arg-type]
    raise TypeError(f"Cannot schedule {computation!r}: expected a Future or awaitable")
