from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from record_classifier.interfaces import PredicateCollection
from record_classifier.models import Record, Report


class BucketAccumulator:
    """Single-pass fold of records into per-predicate buckets and running totals.

    One accumulator covers one contiguous slice of input. Slices are combined
    with ``extend`` in input order, which keeps every bucket a subsequence of
    the original input.
    """

    def __init__(self, names: Sequence[str]) -> None:
        self._names = list(names)
        self._buckets: dict[str, list[Record]] = {name: [] for name in self._names}
        self._amounts: dict[str, Decimal] = {name: Decimal(0) for name in self._names}
        self.record_count = 0
        self.flagged_count = 0
        self.total_amount = Decimal(0)

    def add_all(self, records: Iterable[Record], predicates: PredicateCollection) -> "BucketAccumulator":
        items = list(predicates.items())
        buckets = self._buckets
        amounts = self._amounts
        for record in records:
            amount = record.amount
            self.record_count += 1
            self.total_amount += amount
            flagged = False
            for name, predicate in items:
                if predicate(record):
                    buckets[name].append(record)
                    amounts[name] += amount
                    flagged = True
            if flagged:
                self.flagged_count += 1
        return self

    def extend(self, other: "BucketAccumulator") -> None:
        if other._names != self._names:
            raise ValueError(f"cannot merge buckets {other._names!r} into {self._names!r}")
        for name in self._names:
            self._buckets[name].extend(other._buckets[name])
            self._amounts[name] += other._amounts[name]
        self.record_count += other.record_count
        self.flagged_count += other.flagged_count
        self.total_amount += other.total_amount

    def to_report(self) -> Report:
        return Report(
            buckets={name: tuple(self._buckets[name]) for name in self._names},
            record_count=self.record_count,
            total_amount=self.total_amount,
            flagged_count=self.flagged_count,
            match_counts={name: len(self._buckets[name]) for name in self._names},
            bucket_amounts=dict(self._amounts),
        )


def classify(records: Iterable[Record], predicates: PredicateCollection) -> Report:
    return BucketAccumulator(predicates.names).add_all(records, predicates).to_report()


def classify_chunk(records: Sequence[Record], predicates: PredicateCollection) -> BucketAccumulator:
    return BucketAccumulator(predicates.names).add_all(records, predicates)
