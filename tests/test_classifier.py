from decimal import Decimal

import pytest

from record_classifier.models import Pending, Record, Report, Settled
from record_classifier.steps import PredicateSet, classify, default_predicates, is_failed, is_pending

THRESHOLD = Decimal("50000")


def _ids(records) -> list[int]:
    return [record.record_id for record in records]


def _is_subsequence(bucket, source) -> bool:
    remaining = iter(source)
    return all(any(candidate is record for candidate in remaining) for record in bucket)


def test_single_pass_reports_expected_buckets(sample_records) -> None:
    report = classify(sample_records, default_predicates(THRESHOLD))

    assert _ids(report.bucket("high_value")) == [2]
    assert _ids(report.bucket("pending")) == [3]
    assert _ids(report.bucket("mismatched")) == [3]
    assert report.record_count == 3
    assert report.total_amount == Decimal("110000")
    assert report.flagged_count == 2
    assert report.match_counts == {"pending": 1, "high_value": 1, "mismatched": 1}


def test_empty_input_yields_empty_buckets_and_zero_aggregates() -> None:
    report = classify([], default_predicates(THRESHOLD))

    assert report.predicate_names == ["pending", "high_value", "mismatched"]
    assert all(bucket == () for bucket in report.buckets.values())
    assert report.record_count == 0
    assert report.flagged_count == 0
    assert report.total_amount == Decimal("0")
    assert set(report.match_counts.values()) == {0}
    assert set(report.bucket_amounts.values()) == {Decimal("0")}


def test_boundary_amount_is_not_high_value() -> None:
    records = [
        Record(record_id=1, amount=Decimal("50000.01"), status=Settled(), reconciled_amount=Decimal("50000.01")),
        Record(record_id=2, amount=Decimal("50000"), status=Settled(), reconciled_amount=Decimal("50000")),
    ]

    report = classify(records, default_predicates(THRESHOLD))

    assert _ids(report.bucket("high_value")) == [1]


def test_buckets_overlap_and_preserve_input_order(mixed_records) -> None:
    report = classify(mixed_records, default_predicates(THRESHOLD))

    assert _ids(report.bucket("pending")) == [10, 14]
    assert _ids(report.bucket("high_value")) == [10, 13, 15]
    assert _ids(report.bucket("mismatched")) == [10, 12, 15]
    for bucket in report.buckets.values():
        assert _is_subsequence(bucket, mixed_records)


def test_counts_cover_every_flagged_record(mixed_records) -> None:
    report = classify(mixed_records, default_predicates(THRESHOLD))

    satisfying_any = [r for r in mixed_records if any(default_predicates(THRESHOLD).evaluate(r).values())]
    assert report.flagged_count == len(satisfying_any)
    assert sum(report.match_counts.values()) >= report.flagged_count


def test_amount_splits_on_high_value_threshold(mixed_records) -> None:
    report = classify(mixed_records, default_predicates(THRESHOLD))

    at_or_below = sum((r.amount for r in mixed_records if r.amount <= THRESHOLD), Decimal(0))
    assert report.total_amount == report.bucket_amounts["high_value"] + at_or_below
    assert report.bucket_amounts["high_value"] == Decimal("225000")


def test_classifying_twice_is_identical(mixed_records) -> None:
    predicates = default_predicates(THRESHOLD)

    first = classify(mixed_records, predicates)
    second = classify(mixed_records, predicates)

    assert first == second
    for name in predicates.names:
        assert [id(r) for r in first.bucket(name)] == [id(r) for r in second.bucket(name)]


def test_input_is_traversed_once_and_each_predicate_called_once_per_record(mixed_records) -> None:
    calls: list[tuple[str, int]] = []
    consumed: list[int] = []

    def tracking(name, predicate):
        def wrapped(record):
            calls.append((name, record.record_id))
            return predicate(record)

        return wrapped

    def stream():
        for record in mixed_records:
            consumed.append(record.record_id)
            yield record

    predicates = PredicateSet([("pending", tracking("pending", is_pending)), ("failed", tracking("failed", is_failed))])
    report = classify(stream(), predicates)

    assert consumed == _ids(mixed_records)
    assert len(calls) == len(mixed_records) * 2
    assert len(set(calls)) == len(calls)
    assert _ids(report.bucket("failed")) == [12]


def test_records_matching_nothing_still_count_toward_totals() -> None:
    records = [Record(record_id=1, amount=Decimal("10"), status=Settled(), reconciled_amount=Decimal("10"))]

    report = classify(records, default_predicates(THRESHOLD))

    assert report.record_count == 1
    assert report.flagged_count == 0
    assert report.total_amount == Decimal("10")


def test_unknown_bucket_raises_key_error(sample_records) -> None:
    report = classify(sample_records, default_predicates(THRESHOLD))

    with pytest.raises(KeyError):
        report.bucket("refunded")


def test_pending_bucket_amount_sums_pending_records() -> None:
    records = [
        Record(record_id=1, amount=Decimal("10.10"), status=Pending()),
        Record(record_id=2, amount=Decimal("5"), status=Settled()),
        Record(record_id=3, amount=Decimal("0.20"), status=Pending()),
    ]

    report = classify(records, default_predicates(THRESHOLD))

    assert report.bucket_amounts["pending"] == Decimal("10.30")


def test_report_mappings_are_read_only(sample_records) -> None:
    report = classify(sample_records, default_predicates(THRESHOLD))

    with pytest.raises(TypeError):
        report.buckets["pending"] = ()
    with pytest.raises(TypeError):
        report.match_counts["pending"] = 99
    with pytest.raises(TypeError):
        report.bucket_amounts["pending"] = Decimal("1")

    assert _ids(report.bucket("pending")) == [3]
    assert report.match_counts["pending"] == 1


def test_report_does_not_share_caller_dicts(sample_records) -> None:
    counts = {"pending": 1}
    report = Report(buckets={"pending": [sample_records[2]]}, match_counts=counts)
    counts["pending"] = 5

    assert report.match_counts["pending"] == 1
    assert report.bucket("pending") == (sample_records[2],)
