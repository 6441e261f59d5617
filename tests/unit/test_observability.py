"""
Unit tests for logging and metrics.
"""

import json
import logging

import pytest

from feed_mapper.codec import parse_feed
from feed_mapper.core.exceptions import ParseError
from feed_mapper.core.models import Record, StaticRule
from feed_mapper.core.rules import TransformEngine
from feed_mapper.observability import metrics
from feed_mapper.observability.logger import component_of, get_logger, log_operation, parse_level, setup_logger


class TestLogger:
    """Tests for logger setup"""

    def test_json_format(self, capsys):
        """Test JSON lines carry level, logger and extra fields"""
        logger = setup_logger("feed-mapper-test-json", level="INFO", format_type="json")

        logger.info("Parsed feed", extra={"item_count": 3})

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["message"] == "Parsed feed"
        assert line["level"] == "INFO"
        assert line["logger"] == "feed-mapper-test-json"
        assert line["item_count"] == 3

    def test_text_format(self, capsys):
        """Test text format for local development"""
        logger = setup_logger("feed-mapper-test-text", level="DEBUG", format_type="text")

        logger.debug("hello")

        assert "feed-mapper-test-text - DEBUG" in capsys.readouterr().out

    def test_level_from_environment(self, monkeypatch):
        """Test LOG_LEVEL drives the default level"""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        logger = setup_logger("feed-mapper-test-env")

        assert logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        """Test unknown levels use INFO"""
        logger = setup_logger("feed-mapper-test-bad", level="LOUD")
        assert logger.level == logging.INFO

    def test_get_logger_configures_once(self):
        """Test repeated lookups do not stack handlers"""
        first = get_logger("feed-mapper-test-once")
        second = get_logger("feed-mapper-test-once")

        assert first is second
        assert len(second.handlers) == 1
        assert second.propagate is False

    def test_log_operation_success(self, capsys):
        """Test completion is logged with duration"""
        logger = setup_logger("feed-mapper-test-op", level="INFO", format_type="json")

        with log_operation("Applying mapping rules", logger=logger, rule_count=2):
            pass

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["status"] == "success"
        assert line["rule_count"] == 2
        assert "duration_seconds" in line

    def test_log_operation_failure_propagates(self, capsys):
        """Test failures are logged and re-raised"""
        logger = setup_logger("feed-mapper-test-fail", level="INFO", format_type="json")

        with pytest.raises(RuntimeError):
            with log_operation("Exporting", logger=logger):
                raise RuntimeError("disk full")

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["status"] == "error"
        assert line["error_type"] == "RuntimeError"

    def test_log_operation_result_fields(self, capsys):
        """Test fields added inside the block reach the completion line"""
        logger = setup_logger("feed_mapper.export.test_results", level="INFO", format_type="json")

        with log_operation("Exporting feed", logger=logger, sink="file") as op:
            op.add(size_bytes=512)

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["sink"] == "file"
        assert line["size_bytes"] == 512
        assert line["component"] == "export"

    @pytest.mark.parametrize(
        "logger_name,component",
        [
            ("feed_mapper.codec.xml_reader", "codec"),
            ("feed_mapper.core.rules.rule_engine", "rules"),
            ("feed_mapper.feed_manager", "feed_manager"),
            ("feed_mapper", "feed_mapper"),
            ("feed-mapper", "feed-mapper"),
        ],
    )
    def test_component_of(self, logger_name, component):
        """Test logger names map to package areas"""
        assert component_of(logger_name) == component

    @pytest.mark.parametrize("value,level", [("debug", logging.DEBUG), ("ERROR", logging.ERROR), (None, logging.INFO)])
    def test_parse_level(self, value, level):
        """Test level names resolve case-insensitively"""
        assert parse_level(value) == level


class TestMetrics:
    """Tests for Prometheus metrics"""

    def test_load_counters(self):
        """Test successful and failed loads are counted"""
        ok_before = metrics.get_sample_value("feed_mapper_feeds_loaded_total", {"status": "success"})
        failed_before = metrics.get_sample_value("feed_mapper_feeds_loaded_total", {"status": "failure"})
        items_before = metrics.get_sample_value("feed_mapper_items_loaded_total")

        parse_feed("<rss><item><a>1</a></item><item><a>2</a></item></rss>")
        with pytest.raises(ParseError):
            parse_feed("<rss/>")

        assert metrics.get_sample_value("feed_mapper_feeds_loaded_total", {"status": "success"}) == ok_before + 1
        assert metrics.get_sample_value("feed_mapper_feeds_loaded_total", {"status": "failure"}) == failed_before + 1
        assert metrics.get_sample_value("feed_mapper_items_loaded_total") == items_before + 2

    def test_rules_applied_counter(self):
        """Test applied rules are counted by type"""
        before = metrics.get_sample_value("feed_mapper_rules_applied_total", {"rule_type": "static"})

        TransformEngine([StaticRule(target="a", value="1")]).apply([Record(original={})])

        after = metrics.get_sample_value("feed_mapper_rules_applied_total", {"rule_type": "static"})
        assert after == before + 1

    def test_generate_metrics(self):
        """Test text exposition lists package metrics"""
        output = metrics.generate_metrics().decode("utf-8")

        assert "feed_mapper_transform_duration_seconds" in output
        assert metrics.get_content_type().startswith("text/plain")
