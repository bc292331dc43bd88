from datetime import date

from crec_speeches.core.types import GranuleSummary, SpeechSpan
from crec_speeches.parsing import assemble_records, normalize_whitespace


def test_normalize_whitespace_collapses_breaks_and_runs():
    assert normalize_whitespace("\n  Madam\tSpeaker,\n\n I   rise. ") == "Madam Speaker, I rise."


def test_assemble_records_merges_metadata_with_spans():
    summary = GranuleSummary(title="HONORING\n  VETERANS", date_issued=date(2022, 11, 10))
    spans = [SpeechSpan("Mr. SMITH", " I rise\n today."), SpeechSpan("Ms. JONES", "\tThank you. ")]

    records = assemble_records(summary, "https://example.invalid/htm", spans)

    assert [(r.speaker, r.text) for r in records] == [("Mr. SMITH", "I rise today."), ("Ms. JONES", "Thank you.")]
    assert all(r.title == "HONORING VETERANS" for r in records)
    assert all(r.date == date(2022, 11, 10) for r in records)
    assert records[0].to_row()["date"] == "2022-11-10"


def test_empty_speeches_can_be_dropped():
    summary = GranuleSummary(title="T", date_issued=None)
    spans = [SpeechSpan("Mr. SMITH", "\n"), SpeechSpan("Ms. JONES", " Words")]

    kept = assemble_records(summary, "u", spans)
    dropped = assemble_records(summary, "u", spans, keep_empty=False)

    assert [r.text for r in kept] == ["", "Words"]
    assert [r.speaker for r in dropped] == ["Ms. JONES"]
