from __future__ import annotations

import random
from collections.abc import Iterator
from decimal import Decimal

from record_classifier.models import Failed, Pending, Record, Settled

HIGH_VALUE_EVERY = 1_000
PENDING_EVERY = 200
MISMATCHED_EVERY = 500

HIGH_VALUE_AMOUNT = Decimal("100000")
STANDARD_AMOUNT = Decimal("5000")

_FAILURE_REASONS = [
    "Insufficient funds",
    "Card declined",
    "Gateway timeout",
    "Account closed",
    "Duplicate submission",
]


class ReferenceDatasetGenerator:
    """Generate synthetic transactions with a known bucket layout for tests and benchmarks.

    Ids run from 1. Every 1000th record is high value, every 500th is
    mismatched (reconciled to zero) and every 200th is pending, so for
    ``size=1_000_000`` the report holds 1000 high-value, 2000 mismatched and
    5000 pending records. ``failure_rate`` and ``unknown_reconciliation_rate``
    add seeded noise on top of that layout.
    """

    def __init__(self, seed: int = 7) -> None:
        self._seed = seed

    def generate(
        self,
        size: int,
        failure_rate: float = 0.0,
        unknown_reconciliation_rate: float = 0.0,
    ) -> list[Record]:
        return list(self.iter_records(size, failure_rate, unknown_reconciliation_rate))

    def iter_records(
        self,
        size: int,
        failure_rate: float = 0.0,
        unknown_reconciliation_rate: float = 0.0,
    ) -> Iterator[Record]:
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be within [0, 1], got {failure_rate}")
        if not 0.0 <= unknown_reconciliation_rate <= 1.0:
            raise ValueError(
                f"unknown_reconciliation_rate must be within [0, 1], got {unknown_reconciliation_rate}"
            )
        return self._iter_records(size, failure_rate, unknown_reconciliation_rate)

    def _iter_records(
        self,
        size: int,
        failure_rate: float,
        unknown_reconciliation_rate: float,
    ) -> Iterator[Record]:
        rng = random.Random(self._seed)
        for record_id in range(1, size + 1):
            amount = HIGH_VALUE_AMOUNT if record_id % HIGH_VALUE_EVERY == 0 else STANDARD_AMOUNT
            reconciled: Decimal | None = Decimal(0) if record_id % MISMATCHED_EVERY == 0 else amount

            if record_id % PENDING_EVERY == 0:
                status = Pending()
            elif failure_rate and rng.random() < failure_rate:
                status = Failed(reason=rng.choice(_FAILURE_REASONS))
            else:
                status = Settled()

            if unknown_reconciliation_rate and rng.random() < unknown_reconciliation_rate:
                reconciled = None

            yield Record(
                record_id=record_id,
                amount=amount,
                status=status,
                reconciled_amount=reconciled,
                customer=f"Customer{record_id}",
            )
