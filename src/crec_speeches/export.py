"""Tabular export of speech records."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List
import csv
import json

from .core.types import SpeechRecord

COLUMNS = ("url", "date", "title", "speaker", "text")


def records_to_rows(records: Iterable[SpeechRecord]) -> List[dict]:
    return [record.to_row() for record in records]


def write_csv(records: Iterable[SpeechRecord], path: Path) -> int:
    rows = records_to_rows(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)


def write_jsonl(records: Iterable[SpeechRecord], path: Path) -> int:
    rows = records_to_rows(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf8") as fh:
        for row in rows:
            fh.write(json.dumps(row, ensure_ascii=False))
            fh.write("\n")
    return len(rows)


__all__ = ["COLUMNS", "records_to_rows", "write_csv", "write_jsonl"]
