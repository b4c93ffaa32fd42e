"""
Tests for payload shape checks and run metrics.
"""
from security_feed.monitor.metrics import MetricsCollector
from security_feed.validators import PayloadValidator


class TestIncidentShape:

    def test_array_of_objects_is_valid(self):
        result = PayloadValidator().validate_incidents([{"title": "a"}, {"title": "b"}])
        assert result.valid
        assert result.issues == []
        assert len(result.records) == 2

    def test_object_payload_is_rejected(self):
        result = PayloadValidator().validate_incidents({"data": []})
        assert not result.valid
        assert result.records == []
        assert "dict" in result.issues[0]

    def test_non_object_items_reported(self):
        metrics = MetricsCollector()
        result = PayloadValidator(metrics).validate_incidents([{"title": "a"}, None, "b"])

        assert result.valid
        assert result.records == [{"title": "a"}]
        assert len(result.issues) == 2
        assert metrics.get_counter("validation_issues") == 2


class TestExchangeShape:

    def test_object_is_valid(self):
        result = PayloadValidator().validate_exchange({"id": "binance"})
        assert result.valid
        assert result.records == [{"id": "binance"}]

    def test_list_is_rejected(self):
        result = PayloadValidator().validate_exchange([{"id": "binance"}])
        assert not result.valid


class TestMetricsCollector:

    def test_api_calls_and_errors(self):
        metrics = MetricsCollector()
        metrics.record_api_call("coingecko", 0.2, 200)
        metrics.record_api_call("coingecko", 0.4, 404)
        metrics.record_error("coingecko", "http_404", tags={"exchange": "kraken"})

        assert metrics.get_counter("api_calls_total") == 2
        assert metrics.get_counter("errors_total") == 1
        assert metrics.get_points("errors_total")[0].tags["exchange"] == "kraken"

        stats = metrics.get_timing_stats("api_duration_seconds")
        assert stats["count"] == 2
        assert stats["max"] == 0.4

    def test_all_metrics_snapshot(self):
        metrics = MetricsCollector()
        metrics.record_timing("rate_limit_wait_seconds", 2.0)

        snapshot = metrics.get_all_metrics()

        assert snapshot["counters"] == {}
        assert snapshot["timings"]["rate_limit_wait_seconds"]["total"] == 2.0
