"""Shared fixtures for the record classifier test suite."""

from decimal import Decimal

import pytest

from record_classifier.models import Failed, Pending, Record, Settled


@pytest.fixture
def sample_records() -> list[Record]:
    return [
        Record(record_id=1, amount=Decimal("5000"), status=Settled(), reconciled_amount=Decimal("5000")),
        Record(record_id=2, amount=Decimal("100000"), status=Settled(), reconciled_amount=Decimal("100000")),
        Record(record_id=3, amount=Decimal("5000"), status=Pending()),
    ]


@pytest.fixture
def mixed_records() -> list[Record]:
    return [
        Record(record_id=10, amount=Decimal("75000"), status=Pending(), reconciled_amount=Decimal("0")),
        Record(record_id=11, amount=Decimal("50000"), status=Settled(), reconciled_amount=Decimal("50000")),
        Record(record_id=12, amount=Decimal("120.50"), status=Failed(reason="Card declined")),
        Record(record_id=13, amount=Decimal("90000"), status=Settled(), reconciled_amount=Decimal("90000")),
        Record(record_id=14, amount=Decimal("0"), status=Pending(), reconciled_amount=Decimal("0")),
        Record(record_id=15, amount=Decimal("60000"), status=Settled(), reconciled_amount=Decimal("61000")),
    ]
