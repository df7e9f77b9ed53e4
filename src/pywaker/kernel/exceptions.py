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
"""Unified exception hierarchy for PyWaker.

All runtime exceptions inherit from PyWakerException, enabling unified
error handling across modules.

Categories:
- RuntimeStateException: the executor is not in a state to accept the call
- ResourceExhaustedException: a bounded resource refused more work
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyWakerException(Exception):
    """Base exception for all PyWaker errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "EXECUTOR_GONE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Runtime State Exceptions
# =============================================================================


class RuntimeStateException(PyWakerException):
    """The runtime is in a state that does not permit the operation."""


class ExecutorGoneException(RuntimeStateException):
    """Work was submitted after the executor's receiving end was closed.

    The offered computation will never run.
    """

    def __init__(
        self,
        message: str = "Executor is gone; the computation will never run",
        code: str | None = "EXECUTOR_GONE",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


class InvariantViolationException(RuntimeStateException):
    """An internal runtime invariant was broken. Not recoverable."""


class ChannelClosedException(RuntimeStateException):
    """The ready queue has no senders left and nothing queued, or was closed."""


# =============================================================================
# Resource Exceptions
# =============================================================================


class ResourceExhaustedException(PyWakerException):
    """A bounded resource refused to accept more work."""


class QueueFullException(ResourceExhaustedException):
    """The ready queue is at capacity and rejected a task."""

    def __init__(
        self,
        message: str = "Ready queue is full",
        code: str | None = "QUEUE_FULL",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
