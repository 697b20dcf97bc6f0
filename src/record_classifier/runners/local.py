from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from record_classifier.interfaces import PredicateCollection
from record_classifier.models import Record, Report
from record_classifier.steps.partition import classify

log = logging.getLogger(__name__)


class LocalClassifier:
    """Sequential runner: one traversal of the input in the calling thread."""

    def classify(self, records: Iterable[Record], predicates: PredicateCollection) -> Report:
        started = time.perf_counter()
        report = classify(records, predicates)
        elapsed_ms = (time.perf_counter() - started) * 1000
        log.info(
            "Classified %d records into %d buckets in %.0fms",
            report.record_count,
            len(report.buckets),
            elapsed_ms,
        )
        return report
