import csv
import json
from datetime import date

from crec_speeches.core.types import SpeechRecord
from crec_speeches.export import COLUMNS, write_csv, write_jsonl

RECORDS = [
    SpeechRecord(url="u1", date=date(2022, 3, 1), title="T", speaker="Mr. SMITH", text="Hello, world."),
    SpeechRecord(url="u1", date=None, title="T", speaker="Ms. JONES", text=""),
]


def test_write_csv_produces_flat_table(tmp_path):
    target = tmp_path / "out" / "speeches.csv"

    assert write_csv(RECORDS, target) == 2

    with target.open(encoding="utf8", newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert tuple(rows[0]) == COLUMNS
    assert rows[0]["text"] == "Hello, world."
    assert rows[1]["date"] == ""


def test_write_jsonl_writes_one_object_per_line(tmp_path):
    target = tmp_path / "speeches.jsonl"

    write_jsonl(RECORDS, target)

    lines = target.read_text(encoding="utf8").splitlines()
    assert [json.loads(line)["speaker"] for line in lines] == ["Mr. SMITH", "Ms. JONES"]
