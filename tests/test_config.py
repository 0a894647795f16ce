"""Tests for config.py - environment-driven configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from config import load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_environment(self):
        config = load_config()
        assert config.hourly_rate == ""
        assert config.worker_name == ""
        assert config.currency_symbol == "$"
        assert config.payment_terms_days == 30
        assert config.log_file is None

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RATECALC_HOURLY_RATE", "45.5")
        monkeypatch.setenv("RATECALC_WORKER_NAME", "Jane Doe")
        monkeypatch.setenv("RATECALC_CURRENCY_SYMBOL", "€")
        monkeypatch.setenv("RATECALC_PAYMENT_TERMS_DAYS", "14")
        monkeypatch.setenv("RATECALC_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("RATECALC_NOTES", "Thanks!")
        monkeypatch.setenv("RATECALC_LOG_FILE", str(tmp_path / "ratecalc.log"))

        config = load_config()

        assert config.hourly_rate == "45.5"
        assert config.worker_name == "Jane Doe"
        assert config.currency_symbol == "€"
        assert config.payment_terms_days == 14
        assert config.output_dir == tmp_path
        assert config.notes == "Thanks!"
        assert config.log_file == tmp_path / "ratecalc.log"

    def test_blank_values_ignored(self, monkeypatch):
        monkeypatch.setenv("RATECALC_WORKER_NAME", "   ")
        monkeypatch.setenv("RATECALC_CURRENCY_SYMBOL", "")
        config = load_config()
        assert config.worker_name == ""
        assert config.currency_symbol == "$"

    def test_invalid_rate_logged_and_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("RATECALC_HOURLY_RATE", "lots")
        with caplog.at_level(logging.WARNING, logger="config"):
            config = load_config()
        assert config.hourly_rate == ""
        assert "RATECALC_HOURLY_RATE" in caplog.text

    def test_negative_rate_ignored(self, monkeypatch):
        monkeypatch.setenv("RATECALC_HOURLY_RATE", "-10")
        assert load_config().hourly_rate == ""

    def test_invalid_terms_logged_and_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("RATECALC_PAYMENT_TERMS_DAYS", "soon")
        with caplog.at_level(logging.WARNING, logger="config"):
            config = load_config()
        assert config.payment_terms_days == 30
        assert "RATECALC_PAYMENT_TERMS_DAYS" in caplog.text

    def test_negative_terms_clamped(self, monkeypatch):
        monkeypatch.setenv("RATECALC_PAYMENT_TERMS_DAYS", "-5")
        assert load_config().payment_terms_days == 0

    def test_output_dir_expands_user(self, monkeypatch):
        monkeypatch.setenv("RATECALC_OUTPUT_DIR", "~/invoices")
        assert load_config().output_dir == Path("~/invoices").expanduser()
