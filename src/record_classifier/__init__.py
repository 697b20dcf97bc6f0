"""Single-pass batch classification of transaction records into named buckets."""

from record_classifier.models import Cancelled, Failed, InvalidRecord, Pending, Record, Report, Settled, Status
from record_classifier.schema import RecordField, RecordSchema, StatusKind
from record_classifier.steps import PredicateSet, classify, default_predicates

__all__ = [
    "Cancelled",
    "Failed",
    "InvalidRecord",
    "Pending",
    "Record",
    "Report",
    "Settled",
    "Status",
    "RecordField",
    "RecordSchema",
    "StatusKind",
    "PredicateSet",
    "classify",
    "default_predicates",
]
