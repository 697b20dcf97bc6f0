from record_classifier.steps.partition import BucketAccumulator, classify, classify_chunk
from record_classifier.steps.predicates import (
    DEFAULT_HIGH_VALUE_THRESHOLD,
    HighValue,
    PredicateSet,
    default_predicates,
    is_failed,
    is_mismatched,
    is_pending,
)

__all__ = [
    "BucketAccumulator",
    "classify",
    "classify_chunk",
    "DEFAULT_HIGH_VALUE_THRESHOLD",
    "HighValue",
    "PredicateSet",
    "default_predicates",
    "is_failed",
    "is_mismatched",
    "is_pending",
]
