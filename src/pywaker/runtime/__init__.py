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
"""PyWaker Runtime — poll/wake executor, completion cells, and delay futures.

Framework-agnostic types (ports, poll results, futures) are exported
directly alongside the single-threaded executor.
"""

# Framework-agnostic exports
from pywaker.runtime.future import PENDING, CoroutineFuture, Future, Poll, Ready, as_future, is_ready
from pywaker.runtime.ports.waker import Waker, noop_waker

# Runtime core
from pywaker.runtime.combinators import and_then, join, ready, yield_now
from pywaker.runtime.completion import CompletionCell
from pywaker.runtime.executor import (
    Executor,
    Spawner,
    block_on,
    new_executor_and_spawner,
    new_executor_and_spawner_from_config,
)
from pywaker.runtime.properties import ExecutorProperties
from pywaker.runtime.task import Task, TaskWaker
from pywaker.runtime.timer import DelayFuture, new_delay

__all__ = [
    # Framework-agnostic
    "PENDING",
    "CoroutineFuture",
    "Future",
    "Poll",
    "Ready",
    "Waker",
    "as_future",
    "is_ready",
    "noop_waker",
    # Runtime core
    "CompletionCell",
    "DelayFuture",
    "Executor",
    "ExecutorProperties",
    "Spawner",
    "Task",
    "TaskWaker",
    "and_then",
    "block_on",
    "join",
    "new_delay",
    "new_executor_and_spawner",
    "new_executor_and_spawner_from_config",
    "ready",
    "yield_now",
]
