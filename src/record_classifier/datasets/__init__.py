from record_classifier.datasets.profiles import (
    TRANSACTION_COLUMNS,
    TRANSACTION_SCHEMA,
    record_from_row,
    record_to_row,
)
from record_classifier.datasets.reference import ReferenceDatasetGenerator

__all__ = [
    "TRANSACTION_COLUMNS",
    "TRANSACTION_SCHEMA",
    "ReferenceDatasetGenerator",
    "record_from_row",
    "record_to_row",
]
