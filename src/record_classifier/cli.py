from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

from record_classifier.config import ClassifierSettings, build_settings
from record_classifier.datasets import (
    TRANSACTION_COLUMNS,
    ReferenceDatasetGenerator,
    record_from_row,
    record_to_row,
)
from record_classifier.interfaces import Classifier
from record_classifier.models import InvalidRecord, Record, Report
from record_classifier.runners import LocalClassifier, ParallelClassifier
from record_classifier.steps import default_predicates

log = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if getattr(args, "quiet", False) else logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    try:
        settings = build_settings()
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "run":
        try:
            run(
                settings=_apply_overrides(settings, args),
                runner=args.runner,
                size=args.size,
                input_csv=args.input_csv,
                output_dir=args.output_dir,
                show=args.show,
            )
        except InvalidRecord as exc:
            parser.exit(2, f"{parser.prog}: invalid record: {exc}\n")
        except ValueError as exc:
            parser.error(str(exc))
        return

    if args.command == "generate":
        try:
            records = ReferenceDatasetGenerator(seed=args.seed).iter_records(
                args.size,
                failure_rate=args.failure_rate,
                unknown_reconciliation_rate=args.unknown_rate,
            )
        except ValueError as exc:
            parser.error(str(exc))
        args.output.parent.mkdir(parents=True, exist_ok=True)
        count = _write_records_csv(args.output, records)
        log.info("Wrote %d records to %s", count, args.output)
        return

    parser.print_help()


def run(
    *,
    settings: ClassifierSettings,
    runner: str,
    size: int,
    input_csv: Path | None,
    output_dir: Path,
    show: int,
) -> Report:
    output_dir.mkdir(parents=True, exist_ok=True)

    if input_csv is None:
        records = ReferenceDatasetGenerator().generate(size)
        dataset_path = output_dir / "reference_dataset.csv"
        _write_records_csv(dataset_path, records)
    else:
        records = _read_records_csv(input_csv)
        dataset_path = input_csv

    predicates = default_predicates(settings.high_value_threshold)
    classifier: Classifier
    if runner == "parallel":
        classifier = ParallelClassifier.from_settings(settings)
    else:
        classifier = LocalClassifier()
    report = classifier.classify(records, predicates)

    bucket_paths: dict[str, Path] = {}
    for name in report.predicate_names:
        bucket_paths[name] = output_dir / f"{name}.csv"
        _write_records_csv(bucket_paths[name], report.bucket(name))

    summary = _build_summary(
        report=report,
        settings=settings,
        dataset_path=dataset_path,
        bucket_paths=bucket_paths,
        show=show,
    )
    summary_path = output_dir / "report.json"
    _write_json(summary_path, summary)

    print(f"Dataset: {dataset_path}")
    print(f"Report: {summary_path}")
    print("---")
    print(f"records={report.record_count}")
    print(f"total_amount={report.total_amount}")
    print(f"flagged_records={report.flagged_count}")
    for name in report.predicate_names:
        print(f"{name}={report.match_counts[name]} amount={report.bucket_amounts[name]}")
    return report


def _build_summary(
    *,
    report: Report,
    settings: ClassifierSettings,
    dataset_path: Path,
    bucket_paths: dict[str, Path],
    show: int,
) -> dict[str, object]:
    return {
        "record_count": report.record_count,
        "total_amount": str(report.total_amount),
        "flagged_record_count": report.flagged_count,
        "high_value_threshold": str(settings.high_value_threshold),
        "buckets": {
            name: {
                "count": report.match_counts[name],
                "amount": str(report.bucket_amounts[name]),
                "path": str(bucket_paths[name]),
                "sample_ids": [record.record_id for record in report.bucket(name)[:show]],
            }
            for name in report.predicate_names
        },
        "dataset_path": str(dataset_path),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="record-classifier", description="Batch record classifier CLI")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser(
        "run",
        help="Generate or load transactions, classify them in one pass, and write buckets + report",
    )
    run_parser.add_argument("--size", type=int, default=1_000_000)
    run_parser.add_argument("--input-csv", type=Path, default=None)
    run_parser.add_argument("--output-dir", type=Path, default=Path("data/cli_output"))
    run_parser.add_argument("--high-value-threshold", type=_decimal_arg, default=None)
    run_parser.add_argument("--runner", choices=["local", "parallel"], default="local")
    run_parser.add_argument("--chunk-size", type=int, default=None)
    run_parser.add_argument("--workers", type=int, default=None)
    run_parser.add_argument("--executor", choices=["thread", "process"], default=None)
    run_parser.add_argument("--show", type=_non_negative_int, default=10)
    run_parser.add_argument("--quiet", action="store_true")

    generate_parser = subparsers.add_parser("generate", help="Write a synthetic reference dataset CSV")
    generate_parser.add_argument("--size", type=int, default=10_000)
    generate_parser.add_argument("--seed", type=int, default=7)
    generate_parser.add_argument("--failure-rate", type=float, default=0.0)
    generate_parser.add_argument("--unknown-rate", type=float, default=0.0)
    generate_parser.add_argument("--output", type=Path, default=Path("data/reference_transactions.csv"))
    generate_parser.add_argument("--quiet", action="store_true")

    return parser


def _decimal_arg(value: str) -> Decimal:
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a decimal number: {value!r}") from None
    if not number.is_finite():
        raise argparse.ArgumentTypeError(f"must be finite: {value!r}")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value!r}")
    return number


def _apply_overrides(settings: ClassifierSettings, args: argparse.Namespace) -> ClassifierSettings:
    return ClassifierSettings(
        high_value_threshold=(
            settings.high_value_threshold if args.high_value_threshold is None else args.high_value_threshold
        ),
        chunk_size=settings.chunk_size if args.chunk_size is None else args.chunk_size,
        max_workers=settings.max_workers if args.workers is None else args.workers,
        executor=settings.executor if args.executor is None else args.executor,
    )


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def _write_records_csv(path: Path, records: Iterable[Record]) -> int:
    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=TRANSACTION_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(record_to_row(record))
            count += 1
    return count


def _read_records_csv(path: Path) -> list[Record]:
    records: list[Record] = []
    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            records.append(record_from_row(row))
    return records


if __name__ == "__main__":
    main()
