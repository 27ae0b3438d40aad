import pytest

from letterbox.metrics import StageTimer, time_repeated


def test_stage_recorded_in_summary():
    timer = StageTimer()
    with timer.stage("parse"):
        pass
    summary = timer.summary()
    assert set(summary) == {"parse", "total"}
    assert summary["parse"] >= 0.0
    assert summary["total"] >= summary["parse"]
    assert timer.counts == {"parse": 1}


def test_repeated_stage_accumulates():
    timer = StageTimer()
    for _ in range(3):
        with timer.stage("solve"):
            sum(range(1000))
    assert timer.counts["solve"] == 3
    assert list(timer.timings) == ["solve"]


def test_failing_stage_still_timed():
    timer = StageTimer()
    with pytest.raises(RuntimeError):
        with timer.stage("fetch"):
            raise RuntimeError("down")
    assert "fetch" in timer.timings
    assert timer.counts["fetch"] == 1


def test_time_repeated_reports_runs():
    calls = []
    result = time_repeated(lambda: calls.append(1), iterations=4)
    assert len(calls) == 4
    assert result["runs"] == 4
    assert result["min_us"] <= result["avg_us"] <= result["max_us"]


def test_time_repeated_runs_at_least_once():
    assert time_repeated(lambda: None, iterations=0)["runs"] == 1
