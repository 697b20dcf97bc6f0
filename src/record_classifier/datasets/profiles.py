from __future__ import annotations

from collections.abc import Mapping

from record_classifier.models import InvalidRecord, Record, parse_status
from record_classifier.schema import RecordField, RecordSchema, StatusKind

TRANSACTION_SCHEMA = RecordSchema.from_mapping(
    {
        RecordField.RECORD_ID: "RECORD_ID",
        RecordField.CUSTOMER: "CUSTOMER",
        RecordField.AMOUNT: "AMOUNT",
        RecordField.RECONCILED_AMOUNT: "RECONCILED_AMOUNT",
        RecordField.STATUS: "STATUS",
        RecordField.FAILURE_REASON: "FAILURE_REASON",
    }
)

TRANSACTION_COLUMNS = TRANSACTION_SCHEMA.columns


def record_from_row(row: Mapping[str, object], schema: RecordSchema = TRANSACTION_SCHEMA) -> Record:
    """Build a validated record from one tabular row.

    A blank reconciled-amount cell means the reconciled amount is unknown.
    """
    raw_id = schema.value_for(row, RecordField.RECORD_ID)
    try:
        record_id = int(raw_id)
    except ValueError:
        raise InvalidRecord("record_id", "must be an integer", raw_id) from None

    reconciled = schema.value_for(row, RecordField.RECONCILED_AMOUNT)
    try:
        status = parse_status(
            schema.value_for(row, RecordField.STATUS),
            reason=schema.value_for(row, RecordField.FAILURE_REASON),
        )
    except InvalidRecord as exc:
        raise InvalidRecord(exc.field, exc.constraint, exc.value, record_id) from None

    return Record(
        record_id=record_id,
        amount=schema.value_for(row, RecordField.AMOUNT),
        status=status,
        reconciled_amount=reconciled or None,
        customer=schema.value_for(row, RecordField.CUSTOMER),
    )


def record_to_row(record: Record, schema: RecordSchema = TRANSACTION_SCHEMA) -> dict[str, str]:
    reason = record.status.reason if record.status.kind is StatusKind.FAILED else ""
    values = {
        RecordField.RECORD_ID: str(record.record_id),
        RecordField.CUSTOMER: record.customer,
        RecordField.AMOUNT: str(record.amount),
        RecordField.RECONCILED_AMOUNT: "" if record.reconciled_amount is None else str(record.reconciled_amount),
        RecordField.STATUS: record.status.kind.value,
        RecordField.FAILURE_REASON: reason,
    }
    return {schema.column_for(field): value for field, value in values.items()}
