import json

import pytest

from ecoblocks.utils.score_ledger import InMemoryScoreLedger, JsonScoreLedger

from tests.helpers import FakeClock


def test_total_only_counts_the_last_day():
    clock = FakeClock()
    ledger = InMemoryScoreLedger(clock=clock)
    ledger.record(12)
    clock.advance(hours=20)
    ledger.record(5)
    assert ledger.total_since() == 17

    clock.advance(hours=5)
    assert ledger.total_since() == 5
    assert ledger.total_since(hours_back=48) == 17


def test_non_positive_points_are_not_recorded():
    ledger = InMemoryScoreLedger(clock=FakeClock())
    ledger.record(0)
    ledger.record(-3)
    assert ledger.entries == []
    assert ledger.total_since() == 0


def test_json_ledger_survives_a_reload(tmp_path):
    clock = FakeClock()
    path = tmp_path / "ledger" / "scores.json"
    ledger = JsonScoreLedger(path, clock=clock)
    ledger.record(9)
    ledger.record(4)

    reloaded = JsonScoreLedger(path, clock=clock)

    assert reloaded.total_since() == 13
    assert reloaded.entries == ledger.entries
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [entry["points"] for entry in payload["entries"]] == [9, 4]


def test_json_ledger_does_not_write_for_zero_points(tmp_path):
    path = tmp_path / "scores.json"
    ledger = JsonScoreLedger(path, clock=FakeClock())
    ledger.record(0)
    assert not path.exists()


def test_corrupt_ledger_file_starts_empty(tmp_path, caplog):
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")

    ledger = JsonScoreLedger(path, clock=FakeClock())

    assert ledger.entries == []
    assert "corrupt" in caplog.text


def test_entries_outside_the_window_are_dropped_on_record():
    clock = FakeClock()
    ledger = InMemoryScoreLedger(clock=clock)
    ledger.record(7)
    clock.advance(hours=30)
    ledger.record(3)

    assert [entry.points for entry in ledger.entries] == [3]
    assert ledger.total_since(hours_back=48) == 3


def test_stale_entries_are_dropped_on_load(tmp_path):
    clock = FakeClock()
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({"entries": [
        {"timestamp": "2024-04-28T12:00:00+00:00", "points": 40},
        {"timestamp": "2024-05-01T09:00:00+00:00", "points": 2},
    ]}), encoding="utf-8")

    ledger = JsonScoreLedger(path, clock=clock)

    assert [entry.points for entry in ledger.entries] == [2]


@pytest.mark.parametrize(
    "content",
    [
        "[]",
        '{"entries": 5}',
        '{"entries": [{"points": 3}]}',
        '{"entries": [{"timestamp": "yesterday", "points": 3}]}',
        '{"entries": [{"timestamp": "2024-05-01T11:00:00+00:00", "points": "many"}]}',
    ],
)
def test_ledger_with_unexpected_content_starts_empty(tmp_path, caplog, content):
    path = tmp_path / "scores.json"
    path.write_text(content, encoding="utf-8")

    ledger = JsonScoreLedger(path, clock=FakeClock())

    assert ledger.entries == []
    assert ledger.total_since() == 0
    assert "unexpected content" in caplog.text


def test_naive_timestamps_are_read_as_utc(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(
        json.dumps({"entries": [{"timestamp": "2024-05-01T11:00:00", "points": 8}]}),
        encoding="utf-8",
    )

    ledger = JsonScoreLedger(path, clock=FakeClock())

    assert ledger.entries[0].timestamp.tzinfo is not None
    assert ledger.total_since() == 8
