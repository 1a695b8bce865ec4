# tests/test_config_logging.py
"""Settings defaults/overrides and stdlib-to-loguru log forwarding."""

import logging
from decimal import Decimal

from loguru import logger

from app.core.config import Settings, settings
from app.core.logging_config import setup_logging


class TestSettings:

    def test_defaults(self):
        assert settings.DEFAULT_CGST_RATE == Decimal("9")
        assert settings.DEFAULT_SGST_RATE == Decimal("9")
        assert settings.PROFORMA_PREFIX == "PI"
        assert settings.TAX_INVOICE_PREFIX == "TI"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_CGST_RATE", "6")
        monkeypatch.setenv("contractor_name", "SHREE TILES")
        s = Settings()
        assert s.DEFAULT_CGST_RATE == Decimal("6")
        assert s.CONTRACTOR_NAME == "SHREE TILES"


class TestLogging:

    def test_stdlib_records_reach_loguru(self):
        setup_logging()
        messages = []
        sink_id = logger.add(messages.append, level="INFO", format="{message}")
        try:
            logging.getLogger("payroll").info("settled %s", "w1")
        finally:
            logger.remove(sink_id)
        assert any("settled w1" in m for m in messages)

    def test_debug_level_reaches_loguru(self, monkeypatch):
        monkeypatch.setattr(settings, "LOG_LEVEL", "debug")
        setup_logging()
        messages = []
        sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            assert logging.getLogger().level == logging.DEBUG
            logging.getLogger("gst_split").debug("contract value %s", "17835660")
        finally:
            logger.remove(sink_id)
            monkeypatch.undo()
            setup_logging()
        assert any("contract value 17835660" in m for m in messages)
