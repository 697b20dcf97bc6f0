from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping


class StatusKind(StrEnum):
    PENDING = "PENDING"
    SETTLED = "SETTLED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class RecordField(StrEnum):
    RECORD_ID = "RECORD_ID"
    CUSTOMER = "CUSTOMER"
    AMOUNT = "AMOUNT"
    RECONCILED_AMOUNT = "RECONCILED_AMOUNT"
    STATUS = "STATUS"
    FAILURE_REASON = "FAILURE_REASON"


@dataclass(frozen=True)
class RecordSchema:
    """Maps source-system columns to record fields."""

    field_to_column: Mapping[RecordField, str]

    @classmethod
    def from_mapping(cls, mapping: Mapping[RecordField, str]) -> "RecordSchema":
        return cls(field_to_column=dict(mapping))

    def column_for(self, field: RecordField) -> str:
        return self.field_to_column.get(field, field.value)

    @property
    def columns(self) -> list[str]:
        return [self.column_for(field) for field in RecordField]

    def value_for(self, row: Mapping[str, object], field: RecordField) -> str:
        value = row.get(self.column_for(field))
        if value is None:
            return ""
        return str(value).strip()
