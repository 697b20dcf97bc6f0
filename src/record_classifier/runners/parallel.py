from __future__ import annotations

import logging
import os
import time
from collections import deque
from collections.abc import Iterable, Iterator
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from itertools import islice

from record_classifier.config import DEFAULT_CHUNK_SIZE, ClassifierSettings, ExecutorKind
from record_classifier.interfaces import PredicateCollection
from record_classifier.models import Record, Report
from record_classifier.steps.partition import BucketAccumulator, classify_chunk

log = logging.getLogger(__name__)


class ParallelClassifier:
    """Chunked runner: contiguous slices classified by independent workers.

    Each worker builds its own partial buckets; partials are merged in input
    order, so the report is identical to a sequential pass. Process pools need
    picklable predicates (module-level functions or dataclass instances).
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_workers: int | None = None,
        executor: ExecutorKind = "process",
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        if executor not in ("thread", "process"):
            raise ValueError(f"executor must be 'thread' or 'process', got {executor!r}")
        self.chunk_size = chunk_size
        self.max_workers = max_workers
        self.executor = executor

    @classmethod
    def from_settings(cls, settings: ClassifierSettings) -> "ParallelClassifier":
        return cls(
            chunk_size=settings.chunk_size,
            max_workers=settings.max_workers,
            executor=settings.executor,
        )

    def classify(self, records: Iterable[Record], predicates: PredicateCollection) -> Report:
        started = time.perf_counter()
        merged = BucketAccumulator(predicates.names)
        chunk_count = 0

        window = 2 * (self.max_workers or os.cpu_count() or 1)
        pending: deque[Future[BucketAccumulator]] = deque()

        with self._make_executor() as pool:
            # Oldest future first: merge follows input order, not completion order.
            for chunk in _chunked(records, self.chunk_size):
                if len(pending) >= window:
                    merged.extend(pending.popleft().result())
                    chunk_count += 1
                pending.append(pool.submit(classify_chunk, chunk, predicates))
            while pending:
                merged.extend(pending.popleft().result())
                chunk_count += 1

        report = merged.to_report()
        elapsed_ms = (time.perf_counter() - started) * 1000
        log.info(
            "Classified %d records in %d chunks (%s pool) in %.0fms",
            report.record_count,
            chunk_count,
            self.executor,
            elapsed_ms,
        )
        return report

    def _make_executor(self) -> Executor:
        if self.executor == "thread":
            return ThreadPoolExecutor(max_workers=self.max_workers)
        return ProcessPoolExecutor(max_workers=self.max_workers)


def _chunked(records: Iterable[Record], size: int) -> Iterator[list[Record]]:
    iterator = iter(records)
    while chunk := list(islice(iterator, size)):
        yield chunk
