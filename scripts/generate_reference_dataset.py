from __future__ import annotations

import argparse
import csv
from pathlib import Path

from record_classifier.datasets import TRANSACTION_COLUMNS, ReferenceDatasetGenerator, record_to_row


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic transaction dataset")
    parser.add_argument("--size", type=int, default=1_000_000)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--failure-rate", type=float, default=0.0)
    parser.add_argument("--unknown-rate", type=float, default=0.0)
    parser.add_argument("--output", type=Path, default=Path("data/reference_transactions.csv"))
    args = parser.parse_args()

    records = ReferenceDatasetGenerator(seed=args.seed).iter_records(
        args.size,
        failure_rate=args.failure_rate,
        unknown_reconciliation_rate=args.unknown_rate,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=TRANSACTION_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(record_to_row(record))


if __name__ == "__main__":
    main()
