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
"""Logging bootstrap — apply a LoggingPort to a Config in one call."""

from __future__ import annotations

from pywaker.core.config import Config
from pywaker.logging.port import LoggingPort
from pywaker.logging.structlog_adapter import StructlogAdapter


def configure_logging(config: Config | None = None, adapter: LoggingPort | None = None) -> LoggingPort:
    """Configure runtime logging and return the adapter that did it.

    Defaults to the packaged configuration and :class:`StructlogAdapter`.
    """
    port: LoggingPort = adapter if adapter is not None else StructlogAdapter()
    port.configure(config if config is not None else Config.defaults())
    return port
