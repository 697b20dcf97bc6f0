from __future__ import annotations

from typing import Iterable, Protocol

from record_classifier.models import Record, Report


class Predicate(Protocol):
    """A named bucket test: pure, evaluated once per record."""

    def __call__(self, record: Record) -> bool:
        ...


class PredicateCollection(Protocol):
    """Fixed, ordered set of named predicates."""

    @property
    def names(self) -> list[str]:
        ...

    def items(self) -> Iterable[tuple[str, Predicate]]:
        ...


class Classifier(Protocol):
    """Unified classification interface for sequential or chunked execution engines."""

    def classify(self, records: Iterable[Record], predicates: PredicateCollection) -> Report:
        ...
