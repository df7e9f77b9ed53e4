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
"""LoggingPort — how the runtime asks for its log output to be set up."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pywaker.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Configures log output for the runtime's ``logging.getLogger(__name__)`` loggers.

    ``configure`` reads the ``pywaker.logging`` section: ``format`` and
    ``level.root`` plus per-logger entries such as
    ``level."pywaker.runtime.executor"``.
    """

    def configure(self, config: Config) -> None:
        """Install handlers and levels from ``config``."""
        ...

    def get_logger(self, name: str) -> Any:
        """Logger for application code running on the executor."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Change one logger's level after configuration."""
        ...
