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
"""PyWaker — a minimal cooperative poll/wake task executor."""

from pywaker.kernel.exceptions import ExecutorGoneException, PyWakerException, QueueFullException
from pywaker.runtime import (
    PENDING,
    CompletionCell,
    DelayFuture,
    Executor,
    Future,
    Ready,
    Spawner,
    Waker,
    block_on,
    join,
    new_delay,
    new_executor_and_spawner,
)

__version__ = "0.1.0"

__all__ = [
    "PENDING",
    "CompletionCell",
    "DelayFuture",
    "Executor",
    "ExecutorGoneException",
    "Future",
    "PyWakerException",
    "QueueFullException",
    "Ready",
    "Spawner",
    "Waker",
    "block_on",
    "join",
    "new_delay",
    "new_executor_and_spawner",
]
