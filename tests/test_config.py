"""
Configuration and Logging Tests
===============================

Author: MRI Team
Version: 1.0.0
"""

import json
import logging

import pytest
import structlog

from mri.config import Settings, get_settings
from mri.logging import (
    clear_assessment_context,
    get_logger,
    set_assessment_context,
    setup_logging,
)


class TestSettings:
    """Tests for pydantic settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.driver_weight_tolerance == 1e-6
        assert settings.score_decimal_places == 1
        assert list(settings.default_driver_weights) == [
            "sitting",
            "movement",
            "upper_limb",
            "neck",
            "work_organisation",
            "workstation",
        ]

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("RISK_THRESHOLD_HIGH", "70")
        monkeypatch.setenv("DRIVER_WEIGHT_NECK", "0.2")

        settings = Settings()

        assert settings.risk_threshold_high == 70.0
        assert settings.default_driver_weights["neck"] == 0.2

    def test_weight_bounds(self, monkeypatch):
        monkeypatch.setenv("DRIVER_WEIGHT_SITTING", "1.5")

        with pytest.raises(Exception):
            Settings()

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for structured logging setup."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        yield
        clear_assessment_context()
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_json_output_includes_assessment(self, capsys):
        setup_logging(level="INFO", json_output=True)
        set_assessment_context("a-123", "org-acme")

        get_logger("mri.test").info("assessment_scored", overall_score=48.8)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "assessment_scored"
        assert record["assessment_id"] == "a-123"
        assert record["organization_id"] == "org-acme"
        assert record["service"] == "mri"
        assert record["overall_score"] == 48.8

    def test_stdlib_loggers_are_rendered(self, capsys):
        setup_logging(level="DEBUG", json_output=True)

        logging.getLogger("mri.scoring.aggregator").debug("aggregated")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "aggregated"
        assert record["level"] == "debug"

    def test_level_filtering(self, capsys):
        setup_logging(level="WARNING", json_output=True)

        get_logger("mri.test").info("hidden")

        assert "hidden" not in capsys.readouterr().out
