"""Concurrency: shared data across threads and polling a background worker."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence


def offset_sums(numbers: Sequence[int], workers: int = 8) -> list[int]:
    """Sum every ``workers``-th number from each offset, one thread per offset."""
    if workers < 1:
        raise ValueError("at least one worker is needed")
    shared = tuple(numbers)

    def sum_from(offset: int) -> int:
        return sum(shared[offset::workers])

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(sum_from, range(workers)))


def run_jobs(jobs: int = 10, job_delay: float = 0.25, poll_interval: float = 0.5) -> int:
    """Complete jobs on a worker thread while polling; return how often it waited."""
    if jobs < 0:
        raise ValueError("the number of jobs cannot be negative")
    lock = threading.Lock()
    completed = 0

    def worker() -> None:
        nonlocal completed
        for _ in range(jobs):
            time.sleep(job_delay)
            with lock:
                completed += 1

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()
    waits = 0
    while True:
        with lock:
            if completed >= jobs:
                break
        print("waiting... ")
        waits += 1
        time.sleep(poll_interval)
    thread.join()
    return waits