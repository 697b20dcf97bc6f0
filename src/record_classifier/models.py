from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import ClassVar, Mapping

from record_classifier.schema import StatusKind


class InvalidRecord(ValueError):
    """Raised when a record is built from values that break a field constraint."""

    def __init__(self, field: str, constraint: str, value: object, record_id: object = None) -> None:
        self.field = field
        self.constraint = constraint
        self.value = value
        self.record_id = record_id
        prefix = f"record {record_id}: " if record_id is not None else ""
        super().__init__(f"{prefix}{field} {constraint} (got {value!r})")


@dataclass(frozen=True, slots=True)
class Pending:
    kind: ClassVar[StatusKind] = StatusKind.PENDING


@dataclass(frozen=True, slots=True)
class Settled:
    kind: ClassVar[StatusKind] = StatusKind.SETTLED


@dataclass(frozen=True, slots=True)
class Failed:
    kind: ClassVar[StatusKind] = StatusKind.FAILED

    reason: str = ""


@dataclass(frozen=True, slots=True)
class Cancelled:
    kind: ClassVar[StatusKind] = StatusKind.CANCELLED


Status = Pending | Settled | Failed | Cancelled

_STATUS_VARIANTS = (Pending, Settled, Failed, Cancelled)


def parse_status(text: str, reason: str = "") -> Status:
    try:
        kind = StatusKind(text.strip().upper())
    except ValueError:
        raise InvalidRecord("status", f"must be one of {', '.join(StatusKind)}", text) from None

    if kind is StatusKind.PENDING:
        return Pending()
    if kind is StatusKind.SETTLED:
        return Settled()
    if kind is StatusKind.FAILED:
        return Failed(reason=reason)
    return Cancelled()


@dataclass(frozen=True, slots=True)
class Record:
    """One financial transaction as seen by the classifier.

    ``reconciled_amount`` of ``None`` means the settled value is unknown, which
    is not the same as a settled value of zero.
    """

    record_id: int
    amount: Decimal
    status: Status
    reconciled_amount: Decimal | None = None
    customer: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.record_id, bool) or not isinstance(self.record_id, int):
            raise InvalidRecord("record_id", "must be an integer", self.record_id)
        if self.record_id < 0:
            raise InvalidRecord("record_id", "must be >= 0", self.record_id)

        amount = _to_decimal(self.amount, "amount", self.record_id)
        if amount < 0:
            raise InvalidRecord("amount", "must be >= 0", self.amount, self.record_id)
        object.__setattr__(self, "amount", amount)

        if self.reconciled_amount is not None:
            reconciled = _to_decimal(self.reconciled_amount, "reconciled_amount", self.record_id)
            object.__setattr__(self, "reconciled_amount", reconciled)

        if not isinstance(self.status, _STATUS_VARIANTS):
            raise InvalidRecord("status", "must be a Status variant", self.status, self.record_id)

    @property
    def is_fully_reconciled(self) -> bool:
        return self.reconciled_amount is not None and self.reconciled_amount == self.amount

    @property
    def outstanding_amount(self) -> Decimal:
        if self.reconciled_amount is None:
            return self.amount
        return max(self.amount - self.reconciled_amount, Decimal(0))


@dataclass(frozen=True, slots=True)
class Report:
    """Buckets and aggregates produced by one classification pass."""

    buckets: Mapping[str, tuple[Record, ...]]
    record_count: int = 0
    total_amount: Decimal = Decimal(0)
    flagged_count: int = 0
    match_counts: Mapping[str, int] = field(default_factory=dict)
    bucket_amounts: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "buckets", MappingProxyType({name: tuple(bucket) for name, bucket in self.buckets.items()})
        )
        object.__setattr__(self, "match_counts", MappingProxyType(dict(self.match_counts)))
        object.__setattr__(self, "bucket_amounts", MappingProxyType(dict(self.bucket_amounts)))

    @property
    def predicate_names(self) -> list[str]:
        return list(self.buckets)

    def bucket(self, name: str) -> tuple[Record, ...]:
        return self.buckets[name]


def _to_decimal(value: object, field_name: str, record_id: object) -> Decimal:
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, bool):
        raise InvalidRecord(field_name, "must be a decimal number", value, record_id)
    elif isinstance(value, (int, str)):
        try:
            number = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation:
            raise InvalidRecord(field_name, "must be a decimal number", value, record_id) from None
    elif isinstance(value, float):
        number = Decimal(str(value))
    else:
        raise InvalidRecord(field_name, "must be a decimal number", value, record_id)

    if not number.is_finite():
        raise InvalidRecord(field_name, "must be finite", value, record_id)
    return number
