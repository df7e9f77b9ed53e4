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
"""Future combinators: ready values, joins, sequencing, and yielding."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from pywaker.runtime.future import PENDING, Future, Poll, Ready, as_future, is_ready
from pywaker.runtime.ports.waker import Waker

T = TypeVar("T")
U = TypeVar("U")

_MISSING: Any = object()


class ReadyFuture(Future[T]):
    """Completes on the first poll with a fixed value."""

    def __init__(self, value: T) -> None:
        self._value = value

    def poll(self, waker: Waker) -> Poll[T]:
        return Ready(self._value)


class Join(Future[list[Any]]):
    """Runs several futures concurrently until all of them are done.

    Every unfinished child is polled on each poll of the join, with the same
    waker, so whichever child makes progress first wakes the task. A child is
    never polled again once it has produced its value.
    """

    def __init__(self, futures: list[Future[Any] | Awaitable[Any]]) -> None:
        self._children: list[Future[Any] | None] = [as_future(f) for f in futures]
        self._results: list[Any] = [_MISSING] * len(self._children)

    def poll(self, waker: Waker) -> Poll[list[Any]]:
        for index, child in enumerate(self._children):
            if child is None:
                continue
            try:
                result = child.poll(waker)
            except Exception:
                self._children[index] = None
                self.close()
                raise
            if is_ready(result):
                self._results[index] = result.value  # type: ignore[union-attr]
                self._children[index] = None
        if any(child is not None for child in self._children):
            return PENDING
        return Ready(list(self._results))

    def close(self) -> None:
        for child in self._children:
            if child is not None:
                child.close()
        self._children = [None] * len(self._children)


class AndThen(Future[U], Generic[T, U]):
    """Runs ``first`` to completion, then the future built from its result."""

    def __init__(
        self,
        first: Future[T] | Awaitable[T],
        make_second: Callable[[T], Future[U] | Awaitable[U]],
    ) -> None:
        self._first: Future[T] | None = as_future(first)
        self._make_second = make_second
        self._second: Future[U] | None = None

    def poll(self, waker: Waker) -> Poll[U]:
        if self._first is not None:
            result = self._first.poll(waker)
            if not is_ready(result):
                return PENDING
            self._first = None
            self._second = as_future(self._make_second(result.value))  # type: ignore[union-attr]
        assert self._second is not None
        return self._second.poll(waker)

    def close(self) -> None:
        for part in (self._first, self._second):
            if part is not None:
                part.close()
        self._first = self._second = None


class YieldNow(Future[None]):
    """Pending once, waking itself immediately; Ready on the next poll."""

    def __init__(self) -> None:
        self._yielded = False

    def poll(self, waker: Waker) -> Poll[None]:
        if self._yielded:
            return Ready(None)
        self._yielded = True
        waker.wake()
        return PENDING


def ready(value: T = None) -> ReadyFuture[T]:  # type: ignore[assignment]
    return ReadyFuture(value)


def join(*futures: Future[Any] | Awaitable[Any]) -> Join:
    """Await several futures at once; resolves to their results in argument order."""
    return Join(list(futures))


def and_then(
    first: Future[T] | Awaitable[T],
    make_second: Callable[[T], Future[U] | Awaitable[U]],
) -> AndThen[T, U]:
    return AndThen(first, make_second)


def yield_now() -> YieldNow:
    """Give other queued tasks a turn before continuing."""
    return YieldNow()
