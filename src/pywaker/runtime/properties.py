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
"""Executor settings bound from the ``pywaker.executor`` config section."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pywaker.core.config import config_properties


@config_properties(prefix="pywaker.executor")
class ExecutorProperties(BaseModel):
    """Ready queue sizing.

    ``queue_capacity`` of None keeps the queue unbounded. When bounded, a
    spawn that finds the queue full raises ``QueueFullException``; wake-ups of
    already spawned tasks are always accepted, so the queue may briefly hold
    more than ``queue_capacity`` entries.
    """

    queue_capacity: int | None = Field(default=None, ge=1)
