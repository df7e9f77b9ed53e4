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
"""Tests for Executor and Spawner — the run loop and task submission."""

from __future__ import annotations

import inspect
import logging
import threading

import pytest

from pywaker.core.config import Config
from pywaker.kernel.exceptions import (
    ExecutorGoneException,
    QueueFullException,
    RuntimeStateException,
)
from pywaker.runtime.combinators import ready, yield_now
from pywaker.runtime.completion import CompletionCell
from pywaker.runtime.executor import (
    block_on,
    new_executor_and_spawner,
    new_executor_and_spawner_from_config,
)
from pywaker.runtime.future import PENDING, Future, Ready
from pywaker.runtime.timer import new_delay


def run_in_thread(executor, timeout: float = 5.0) -> threading.Thread:
    thread = threading.Thread(target=executor.run, daemon=True)
    thread.start()
    thread.join(timeout=timeout)
    return thread


class CellFuture(Future[object]):
    """Future completed from outside through a CompletionCell."""

    def __init__(self) -> None:
        self.cell = CompletionCell()

    def poll(self, waker):
        return self.cell.poll(waker)


class TestExecutorRun:
    def test_two_delayed_tasks_each_log_exactly_once(self) -> None:
        executor, spawner = new_executor_and_spawner()
        log: list[str] = []
        lock = threading.Lock()

        async def record_after_delay(ident: str) -> None:
            await new_delay(0.05)
            with lock:
                log.append(ident)

        spawner.spawn(record_after_delay("a"))
        spawner.spawn(record_after_delay("b"))
        spawner.close()

        thread = run_in_thread(executor)

        assert not thread.is_alive()
        assert sorted(log) == ["a", "b"]

    def test_tasks_run_in_spawn_order(self) -> None:
        executor, spawner = new_executor_and_spawner()
        order: list[int] = []

        async def record(n: int) -> None:
            order.append(n)

        for n in range(5):
            spawner.spawn(record(n))
        spawner.close()
        executor.run()

        assert order == [0, 1, 2, 3, 4]

    def test_woken_task_rejoins_the_back_of_the_queue(self) -> None:
        executor, spawner = new_executor_and_spawner()
        order: list[str] = []

        async def polite() -> None:
            order.append("a-start")
            await yield_now()
            order.append("a-end")

        async def eager() -> None:
            order.append("b")

        spawner.spawn(polite())
        spawner.spawn(eager())
        spawner.close()
        executor.run()

        assert order == ["a-start", "b", "a-end"]

    def test_run_returns_promptly_once_spawners_close_with_empty_queue(self) -> None:
        executor, spawner = new_executor_and_spawner()
        spawner.close()

        thread = run_in_thread(executor, timeout=2)

        assert not thread.is_alive()

    def test_run_waits_for_pending_task_then_stops(self) -> None:
        executor, spawner = new_executor_and_spawner()
        future = CellFuture()
        task = spawner.spawn(future)
        spawner.close()

        thread = threading.Thread(target=executor.run, daemon=True)
        thread.start()
        thread.join(timeout=0.1)
        assert thread.is_alive()

        future.cell.signal()
        thread.join(timeout=5)
        assert not thread.is_alive()
        assert task.finished

    def test_spawn_from_inside_a_task(self) -> None:
        executor, spawner = new_executor_and_spawner()
        inner = spawner.clone()
        seen: list[str] = []

        async def child() -> None:
            seen.append("child")

        async def parent() -> None:
            with inner:
                inner.spawn(child())
            seen.append("parent")

        spawner.spawn(parent())
        spawner.close()
        executor.run()

        assert seen == ["parent", "child"]


class TestRedundantWakeUps:
    def test_double_wake_does_not_rerun_finished_work(self) -> None:
        polls: list[int] = []

        class DoubleWaker(Future[None]):
            def poll(self, waker):
                polls.append(len(polls))
                if len(polls) == 1:
                    waker.wake()
                    waker.wake()
                    return PENDING
                return Ready(None)

        executor, spawner = new_executor_and_spawner()
        task = spawner.spawn(DoubleWaker())
        spawner.close()
        executor.run()

        assert polls == [0, 1]
        assert task.finished

    def test_wake_from_foreign_thread(self) -> None:
        executor, spawner = new_executor_and_spawner()
        future = CellFuture()
        results: list[object] = []

        async def wait_for_value() -> None:
            results.append(await future)

        spawner.spawn(wait_for_value())
        spawner.close()
        threading.Timer(0.02, future.cell.signal, args=("from-thread",)).start()

        thread = run_in_thread(executor)

        assert not thread.is_alive()
        assert results == ["from-thread"]


class TestExecutorFailures:
    def test_spawn_after_executor_closed_is_rejected(self) -> None:
        executor, spawner = new_executor_and_spawner()
        executor.close()

        async def never_runs() -> None:
            raise AssertionError("must not run")

        coro = never_runs()
        with pytest.raises(ExecutorGoneException):
            spawner.spawn(coro)
        assert inspect.getcoroutinestate(coro) == inspect.CORO_CLOSED

    def test_close_discards_queued_tasks(self) -> None:
        executor, spawner = new_executor_and_spawner()
        task = spawner.spawn(ready(None))
        executor.close()

        assert task.finished
        spawner.close()
        executor.run()

    def test_spawn_on_closed_spawner_is_rejected(self) -> None:
        _executor, spawner = new_executor_and_spawner()
        spawner.close()
        with pytest.raises(RuntimeStateException):
            spawner.spawn(ready(None))

    def test_failing_computation_is_logged_and_run_continues(self, caplog) -> None:
        executor, spawner = new_executor_and_spawner()
        done: list[str] = []

        async def broken() -> None:
            raise ValueError("boom")

        async def healthy() -> None:
            done.append("healthy")

        failed = spawner.spawn(broken())
        spawner.spawn(healthy())
        spawner.close()

        with caplog.at_level(logging.ERROR, logger="pywaker.runtime.executor"):
            executor.run()

        assert failed.finished
        assert done == ["healthy"]
        assert any("boom" in record.getMessage() for record in caplog.records)

    def test_bounded_queue_rejects_overflow(self) -> None:
        executor, spawner = new_executor_and_spawner(capacity=1)
        spawner.spawn(ready(None))
        with pytest.raises(QueueFullException):
            spawner.spawn(ready(None))
        spawner.close()
        executor.run()

    def test_wake_into_full_bounded_queue_still_runs_the_task(self) -> None:
        executor, spawner = new_executor_and_spawner(capacity=1)
        future = CellFuture()
        parked = threading.Event()
        busy_started = threading.Event()
        release_busy = threading.Event()
        done: list[object] = []

        class Busy(Future[None]):
            def poll(self, waker):
                busy_started.set()
                release_busy.wait(timeout=5)
                return Ready(None)

        async def waiter() -> None:
            parked.set()
            done.append(await future)

        spawner.spawn(waiter())
        thread = threading.Thread(target=executor.run, daemon=True)
        thread.start()
        assert parked.wait(timeout=5)

        spawner.spawn(Busy())
        assert busy_started.wait(timeout=5)
        spawner.spawn(ready(None))
        with pytest.raises(QueueFullException):
            spawner.spawn(ready(None))

        # Queue is full, but the parked task was admitted earlier.
        future.cell.signal("x")
        release_busy.set()
        spawner.close()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert done == ["x"]

    def test_failing_custom_future_is_closed(self) -> None:
        closed: list[str] = []

        class Leaky(Future[None]):
            def poll(self, waker):
                raise OSError("device vanished")

            def close(self) -> None:
                closed.append("closed")

        executor, spawner = new_executor_and_spawner()
        task = spawner.spawn(Leaky())
        spawner.close()
        executor.run()

        assert task.finished
        assert closed == ["closed"]


class TestExecutorFromConfig:
    def test_capacity_is_read_from_config(self) -> None:
        config = Config({"pywaker": {"executor": {"queue_capacity": 1}}})
        executor, spawner = new_executor_and_spawner_from_config(config)

        spawner.spawn(ready(None))
        with pytest.raises(QueueFullException):
            spawner.spawn(ready(None))
        spawner.close()
        executor.run()

    def test_defaults_are_unbounded(self) -> None:
        executor, spawner = new_executor_and_spawner_from_config(Config.defaults())
        for _ in range(50):
            spawner.spawn(ready(None))
        spawner.close()
        executor.run()


class TestBlockOn:
    def test_block_on_returns_coroutine_result(self) -> None:
        async def compute() -> int:
            await new_delay(0.01)
            return 42

        assert block_on(compute()) == 42

    def test_block_on_reraises_failure(self) -> None:
        async def fail() -> None:
            await new_delay(0)
            raise KeyError("missing")

        with pytest.raises(KeyError):
            block_on(fail())

    def test_block_on_plain_future(self) -> None:
        assert block_on(ready("value")) == "value"
