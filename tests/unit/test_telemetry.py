import logging

import pytest

from newsgen.telemetry import SimpleReporter, TelemetryContext, TelemetryReporter

pytestmark = pytest.mark.unit


class BrokenReporter:
    def record_timing(self, scope, duration, **metadata):
        raise RuntimeError("timing sink down")

    def record_metric(self, scope, value, **metadata):
        raise RuntimeError("metric sink down")


def test_disabled_telemetry_is_shared_no_op(monkeypatch):
    monkeypatch.setattr("newsgen.telemetry._TELEMETRY_ENABLED", False)
    reporter = SimpleReporter()

    ctx = TelemetryContext(reporter)
    with ctx("work"):
        ctx.count("calls")

    assert ctx is TelemetryContext()
    assert reporter.timings == {}
    assert reporter.metrics == {}


def test_enabled_without_reporters_is_no_op(monkeypatch):
    monkeypatch.setattr("newsgen.telemetry._TELEMETRY_ENABLED", True)
    assert TelemetryContext() is TelemetryContext()


def test_nested_segments_record_paths(telemetry, telemetry_reporter):
    with telemetry("outer", model="m"):
        with telemetry("inner"):
            telemetry.gauge("size", 3.5)

    assert set(telemetry_reporter.timings) == {"outer", "outer.inner"}
    _, outer_meta = telemetry_reporter.timings["outer"][0]
    _, inner_meta = telemetry_reporter.timings["outer.inner"][0]
    assert outer_meta["model"] == "m"
    assert outer_meta["depth"] == 0
    assert inner_meta["parent_scope"] == "outer"
    assert telemetry_reporter.metrics["outer.inner.size"][0][0] == 3.5


def test_failed_segment_is_flagged_and_error_propagates(telemetry, telemetry_reporter):
    with pytest.raises(ValueError), telemetry("work"):
        raise ValueError("bad")

    _, meta = telemetry_reporter.timings["work"][0]
    assert meta["failed"] is True


def test_counts_accumulate(telemetry, telemetry_reporter):
    telemetry.count("retries")
    telemetry.count("retries", 2)
    assert telemetry_reporter.total("retries") == 3


def test_reporter_failures_are_logged_not_raised(monkeypatch, caplog):
    monkeypatch.setattr("newsgen.telemetry._TELEMETRY_ENABLED", True)
    good = SimpleReporter()
    ctx = TelemetryContext(BrokenReporter(), good)

    with caplog.at_level(logging.ERROR, logger="newsgen.telemetry"):
        with ctx("work"):
            ctx.count("calls")

    # The healthy reporter still receives everything
    assert "work" in good.timings
    assert good.total("work.calls") == 1
    assert any("BrokenReporter" in r.getMessage() for r in caplog.records)


def test_empty_segment_name_is_rejected(telemetry):
    with pytest.raises(ValueError), telemetry(""):
        pass


def test_simple_reporter_report():
    reporter = SimpleReporter()
    assert isinstance(reporter, TelemetryReporter)
    reporter.record_timing("generator.attempt", 0.5)
    reporter.record_metric("generator.retries", 1)

    report = reporter.get_report()

    assert "generator.attempt" in report
    assert "generator.retries" in report
