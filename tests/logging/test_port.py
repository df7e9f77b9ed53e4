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
"""Tests for LoggingPort conformance and the configure_logging bootstrap."""

import logging
from typing import Any

import pytest
import structlog

from pywaker.core.config import Config
from pywaker.logging import LoggingPort, StructlogAdapter, configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class RecordingAdapter:
    def __init__(self) -> None:
        self.configured_with: list[Config] = []

    def configure(self, config: Config) -> None:
        self.configured_with.append(config)

    def get_logger(self, name: str) -> Any:
        return logging.getLogger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(level)


class TestLoggingPortConformance:
    def test_structlog_adapter_is_a_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_recording_adapter_is_a_port(self):
        assert isinstance(RecordingAdapter(), LoggingPort)

    def test_object_without_configure_is_not_a_port(self):
        class GetterOnly:
            def get_logger(self, name: str) -> Any:
                return None

        assert not isinstance(GetterOnly(), LoggingPort)


class TestConfigureLogging:
    def test_defaults_to_structlog_with_packaged_config(self):
        port = configure_logging()
        assert isinstance(port, StructlogAdapter)
        assert port._format == "console"

    def test_uses_given_adapter_and_config(self):
        adapter = RecordingAdapter()
        config = Config({"pywaker": {"logging": {"format": "json"}}})

        port = configure_logging(config, adapter)

        assert port is adapter
        assert adapter.configured_with == [config]

    def test_missing_config_falls_back_to_defaults(self):
        adapter = RecordingAdapter()
        configure_logging(adapter=adapter)
        assert adapter.configured_with[0].get("pywaker.logging.level.root") == "INFO"
