"""Load configuration from environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from models import Config
from utils import is_number, parse_decimal

logger = logging.getLogger(__name__)

ENV_PREFIX = "RATECALC_"


def _env(name: str) -> str | None:
    val = os.environ.get(ENV_PREFIX + name)
    if val is None or not val.strip():
        return None
    return val.strip()


def load_config() -> Config:
    """Build a Config from RATECALC_* variables, falling back to defaults."""
    config = Config()

    if rate := _env("HOURLY_RATE"):
        if is_number(rate) and parse_decimal(rate) >= 0:
            config.hourly_rate = rate
        else:
            logger.warning("Ignoring invalid RATECALC_HOURLY_RATE %r", rate)

    if worker := _env("WORKER_NAME"):
        config.worker_name = worker

    if symbol := _env("CURRENCY_SYMBOL"):
        config.currency_symbol = symbol

    if terms := _env("PAYMENT_TERMS_DAYS"):
        try:
            config.payment_terms_days = max(int(terms), 0)
        except ValueError:
            logger.warning("Ignoring invalid RATECALC_PAYMENT_TERMS_DAYS %r", terms)

    if output_dir := _env("OUTPUT_DIR"):
        config.output_dir = Path(output_dir).expanduser()

    if notes := _env("NOTES"):
        config.notes = notes

    if log_file := _env("LOG_FILE"):
        config.log_file = Path(log_file).expanduser()

    return config
