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
"""Waker port — the notification capability handed to every poll."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Waker(Protocol):
    """Port for telling an executor that a pending computation may progress.

    ``wake()`` may be called from any thread, any number of times.
    """

    def wake(self) -> None:
        """Request that the associated computation be polled again."""
        ...


class _NoopWaker:
    __slots__ = ()

    def wake(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NoopWaker()"


_NOOP = _NoopWaker()


def noop_waker() -> Waker:
    """A waker that ignores wake-ups, for polling futures by hand."""
    return _NOOP
