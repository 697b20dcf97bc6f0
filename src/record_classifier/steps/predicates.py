from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal

from record_classifier.interfaces import Predicate
from record_classifier.models import Record
from record_classifier.schema import StatusKind

DEFAULT_HIGH_VALUE_THRESHOLD = Decimal("50000")

PENDING = "pending"
HIGH_VALUE = "high_value"
MISMATCHED = "mismatched"
FAILED = "failed"


class PredicateSet:
    """Immutable, ordered mapping of bucket name to predicate.

    Iteration order is the order the predicates were given in and is the order
    buckets appear in the resulting report.
    """

    def __init__(self, predicates: Mapping[str, Predicate] | Iterable[tuple[str, Predicate]]) -> None:
        pairs = predicates.items() if isinstance(predicates, Mapping) else predicates
        items: list[tuple[str, Predicate]] = []
        seen: set[str] = set()
        for name, predicate in pairs:
            if not name:
                raise ValueError("predicate names must be non-empty")
            if name in seen:
                raise ValueError(f"duplicate predicate name: {name!r}")
            if not callable(predicate):
                raise ValueError(f"predicate {name!r} is not callable")
            seen.add(name)
            items.append((name, predicate))
        self._items = tuple(items)

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self._items]

    def items(self) -> tuple[tuple[str, Predicate], ...]:
        return self._items

    def evaluate(self, record: Record) -> dict[str, bool]:
        return {name: bool(predicate(record)) for name, predicate in self._items}

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"PredicateSet({self.names!r})"


def is_pending(record: Record) -> bool:
    return record.status.kind is StatusKind.PENDING


def is_failed(record: Record) -> bool:
    return record.status.kind is StatusKind.FAILED


def is_mismatched(record: Record) -> bool:
    # Exact decimal comparison, no tolerance.
    return record.reconciled_amount is None or record.reconciled_amount != record.amount


@dataclass(frozen=True)
class HighValue:
    """Strictly-greater-than amount test; a record at the threshold is not high value."""

    threshold: Decimal = DEFAULT_HIGH_VALUE_THRESHOLD

    def __post_init__(self) -> None:
        # Same float handling as record amounts, so equal values compare equal.
        threshold = Decimal(str(self.threshold)) if isinstance(self.threshold, float) else Decimal(self.threshold)
        object.__setattr__(self, "threshold", threshold)

    def __call__(self, record: Record) -> bool:
        return record.amount > self.threshold


def default_predicates(high_value_threshold: Decimal = DEFAULT_HIGH_VALUE_THRESHOLD) -> PredicateSet:
    return PredicateSet(
        [
            (PENDING, is_pending),
            (HIGH_VALUE, HighValue(threshold=high_value_threshold)),
            (MISMATCHED, is_mismatched),
        ]
    )
