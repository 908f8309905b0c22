"""Tests for the worker pool manager."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from linetally.counting import pool as pool_module
from linetally.counting.accumulator import LineAccumulator
from linetally.counting.models import DiscoveryStats
from linetally.counting.pool import WorkerPool
from linetally.counting.work_queue import WorkQueue

DEADLINE_SECONDS = 30


def _make_pool(root, executor, max_tasks):
    queue = WorkQueue()
    accumulator = LineAccumulator()
    pool = WorkerPool(root, queue, accumulator, executor, max_tasks=max_tasks)
    return pool, queue, accumulator


def _drive(pool, max_tasks, timeout=0.001):
    pool.start()
    assert pool.in_flight <= max_tasks
    deadline = time.monotonic() + DEADLINE_SECONDS
    while time.monotonic() < deadline:
        done = pool.advance(timeout=timeout)
        assert pool.in_flight <= max_tasks
        if done:
            return
    pytest.fail("pool did not reach quiescence")


class TestWorkerPool:
    def test_counts_tree(self, sample_tree):
        with ThreadPoolExecutor(max_workers=3) as executor:
            pool, queue, acc = _make_pool(sample_tree, executor, 3)
            _drive(pool, 3)

        assert acc.value == 5
        assert pool.files_counted == 2
        assert pool.files_failed == 0
        assert pool.in_flight == 0
        assert pool.discovery.files_enqueued == 2

    @pytest.mark.parametrize("cap", [1, 2, 4, 16])
    def test_total_independent_of_cap(self, nested_tree, cap):
        with ThreadPoolExecutor(max_workers=cap) as executor:
            pool, _, acc = _make_pool(nested_tree, executor, cap)
            _drive(pool, cap)
        assert acc.value == 11

    def test_pure_polling(self, nested_tree):
        """timeout=0 never blocks and still terminates."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            pool, _, acc = _make_pool(nested_tree, executor, 2)
            _drive(pool, 2, timeout=0.0)
        assert acc.value == 11

    def test_empty_directory_terminates_with_zero(self, tmp_path):
        with ThreadPoolExecutor(max_workers=2) as executor:
            pool, _, acc = _make_pool(tmp_path, executor, 2)
            _drive(pool, 2)
        assert acc.value == 0
        assert pool.files_counted == 0

    def test_advance_before_start_rejected(self, tmp_path):
        with ThreadPoolExecutor(max_workers=1) as executor:
            pool, _, _ = _make_pool(tmp_path, executor, 1)
            with pytest.raises(RuntimeError):
                pool.advance()

    def test_start_twice_rejected(self, tmp_path):
        with ThreadPoolExecutor(max_workers=1) as executor:
            pool, _, _ = _make_pool(tmp_path, executor, 1)
            pool.start()
            with pytest.raises(RuntimeError):
                pool.start()

    def test_invalid_cap_rejected(self, tmp_path):
        with ThreadPoolExecutor(max_workers=1) as executor:
            with pytest.raises(ValueError):
                WorkerPool(tmp_path, WorkQueue(), LineAccumulator(), executor, max_tasks=0)


class TestDiscoveryCoupling:
    """Discovery holds a slot and keeps the pool from finishing early."""

    def test_discovery_occupies_a_slot(self, make_tree, monkeypatch):
        root = make_tree({"a.txt": b"1\n", "b.txt": b"1\n2\n"})
        release = threading.Event()
        queued = threading.Event()

        def slow_discovery(root_dir, queue):
            queue.push(root_dir / "a.txt")
            queue.push(root_dir / "b.txt")
            queued.set()
            release.wait(timeout=10)
            return DiscoveryStats(files_enqueued=2)

        monkeypatch.setattr(pool_module, "discover_files", slow_discovery)

        with ThreadPoolExecutor(max_workers=1) as executor:
            pool, queue, acc = _make_pool(root, executor, 1)
            pool.start()
            assert queued.wait(timeout=10)

            assert pool.advance() is False
            assert pool.in_flight == 1
            assert len(queue) == 2

            release.set()
            deadline = time.monotonic() + DEADLINE_SECONDS
            while not pool.advance(timeout=0.001):
                if time.monotonic() > deadline:
                    pytest.fail("pool did not reach quiescence")

        assert acc.value == 2 + 3

    def test_empty_queue_during_discovery_is_not_completion(self, make_tree, monkeypatch):
        """Files pushed after a quiet spell are still counted."""
        root = make_tree({"early.txt": b"\n", "late.txt": b"\n\n\n"})

        def bursty_discovery(root_dir, queue):
            queue.push(root_dir / "early.txt")
            time.sleep(0.2)
            queue.push(root_dir / "late.txt")
            return DiscoveryStats(files_enqueued=2)

        monkeypatch.setattr(pool_module, "discover_files", bursty_discovery)

        with ThreadPoolExecutor(max_workers=4) as executor:
            pool, _, acc = _make_pool(root, executor, 4)
            _drive(pool, 4, timeout=0.0)

        assert acc.value == 2 + 4
        assert pool.files_counted == 2

    def test_discovery_failure_is_contained(self, make_tree, monkeypatch, caplog):
        caplog.set_level("ERROR", logger="linetally")
        root = make_tree({"a.txt": b"\n"})

        def failing_discovery(root_dir, queue):
            queue.push(root_dir / "a.txt")
            raise RuntimeError("walk exploded")

        monkeypatch.setattr(pool_module, "discover_files", failing_discovery)

        with ThreadPoolExecutor(max_workers=2) as executor:
            pool, _, acc = _make_pool(root, executor, 2)
            _drive(pool, 2)

        assert acc.value == 2
        assert "Discovery" in caplog.text
        assert pool.discovery == DiscoveryStats()


class TestFaultIsolation:
    """One task failing never stops the rest."""

    def test_failing_task_logged_and_skipped(self, make_tree, monkeypatch, caplog):
        caplog.set_level("ERROR", logger="linetally")
        root = make_tree({f"ok{i}.txt": b"x\n" for i in range(6)})
        (root / "bad.txt").write_bytes(b"\n" * 50)
        real_count_file = pool_module.count_file

        def flaky_count_file(path, accumulator, chunk_size):
            if path.name == "bad.txt":
                raise RuntimeError("decoder blew up")
            return real_count_file(path, accumulator, chunk_size)

        monkeypatch.setattr(pool_module, "count_file", flaky_count_file)

        with ThreadPoolExecutor(max_workers=3) as executor:
            pool, _, acc = _make_pool(root, executor, 3)
            _drive(pool, 3)

        assert acc.value == 6 * 2
        assert pool.files_failed == 1
        assert pool.files_counted == 6
        assert "bad.txt" in caplog.text
        assert "decoder blew up" in caplog.text

    def test_unreadable_file_counted_as_one(self, make_tree, monkeypatch):
        root = make_tree({"a.txt": b"1\n2\n3\n"})
        (root / "secret.txt").write_bytes(b"\n" * 99)
        real_count_file = pool_module.count_file

        def patched(path, accumulator, chunk_size):
            if path.name == "secret.txt":
                return real_count_file(root / "does-not-exist", accumulator, chunk_size)
            return real_count_file(path, accumulator, chunk_size)

        monkeypatch.setattr(pool_module, "count_file", patched)

        with ThreadPoolExecutor(max_workers=2) as executor:
            pool, _, acc = _make_pool(root, executor, 2)
            _drive(pool, 2)

        assert acc.value == 4 + 1
        assert pool.files_unreadable == 1
        assert pool.files_failed == 0
