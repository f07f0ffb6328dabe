"""
Tests for configuration and logging setup
"""

import json
import logging
import os
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from cartsync.infrastructure.configuration.config import Settings, get_config, reset_config
from cartsync.infrastructure.logging.logging_config import (
    CartJsonFormatter,
    PerformanceLogger,
    get_structured_logger,
    setup_logging,
)


class TestSettings:
    """Test Settings model"""

    def test_settings_default_values(self):
        """Test settings with default values"""
        settings = Settings()
        assert settings.remote_base_url == "https://dummyjson.com"
        assert settings.remote_read_only is True
        assert settings.owner_key_bound == 30
        assert settings.currency == "USD"
        assert settings.fallback_unit_price == Decimal("10.00")
        assert settings.fallback_title_template == "Product {product_id}"
        assert settings.fallback_thumbnail == "/placeholder.svg"
        assert settings.catalog_cache_ttl_seconds == 300
        assert settings.local_cart_id_floor == 1_000_000
        assert settings.merge_policy == "local_wins"
        assert settings.environment == "test"  # from mock_env

    def test_settings_from_environment(self):
        """Test settings read from environment variables"""
        with patch.dict(
            os.environ,
            {
                "REMOTE_BASE_URL": "http://localhost:9000",
                "REMOTE_READ_ONLY": "false",
                "OWNER_KEY_BOUND": "100",
                "CURRENCY": "eur",
                "MERGE_POLICY": "MOST_RECENT",
                "FALLBACK_UNIT_PRICE": "4.25",
            },
        ):
            settings = Settings()
            assert settings.remote_base_url == "http://localhost:9000"
            assert settings.remote_read_only is False
            assert settings.owner_key_bound == 100
            assert settings.currency == "EUR"
            assert settings.merge_policy == "most_recent"
            assert settings.fallback_unit_price == Decimal("4.25")

    def test_settings_validation_error(self):
        """Test invalid values are rejected"""
        with pytest.raises(ValidationError):
            Settings(merge_policy="newest")
        with pytest.raises(ValidationError):
            Settings(currency="DOLLAR")
        with pytest.raises(ValidationError):
            Settings(owner_key_bound=0)
        with pytest.raises(ValidationError):
            Settings(remote_timeout_seconds=0)

    def test_get_config_singleton(self):
        """Test get_config caches until reset"""
        first = get_config()
        assert get_config() is first

        reset_config()
        assert get_config() is not first


class TestLogging:
    """Test logging configuration"""

    def test_setup_logging_writes_json_file(self, tmp_path):
        """Test the file handler emits JSON records"""
        log_file = tmp_path / "logs" / "cartsync.log"
        root_logger = logging.getLogger()
        previous_handlers = list(root_logger.handlers)
        previous_level = root_logger.level
        try:
            setup_logging(Settings(log_file=str(log_file), log_level="INFO"))
            logging.getLogger("CartTest").info("cart saved", extra={"owner_key": 7})
            for handler in root_logger.handlers:
                handler.flush()

            lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
            record = next(line for line in lines if line["message"] == "cart saved")
            assert record["level"] == "INFO"
            assert record["logger"] == "CartTest"
            assert record["owner_key"] == 7
        finally:
            for handler in root_logger.handlers:
                handler.close()
            root_logger.handlers[:] = previous_handlers
            root_logger.setLevel(previous_level)

    def test_json_formatter_fields(self):
        formatter = CartJsonFormatter()
        record = logging.LogRecord("CartTest", logging.WARNING, __file__, 1, "slow %s", ("list",), None)
        record.operation_time = 12.5

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "slow list"
        assert payload["level"] == "WARNING"
        assert payload["operation_time_ms"] == 12.5
        assert "timestamp" in payload

    def test_structured_logger(self):
        assert get_structured_logger("cartsync.test") is not None


class TestPerformanceLogger:
    """Test operation timing"""

    def test_success_logs_debug(self):
        logger = MagicMock()
        with PerformanceLogger("list_all_carts", logger) as perf:
            pass

        assert perf.duration_ms >= 0
        logger.debug.assert_called_once()
        logger.warning.assert_not_called()

    def test_failure_logs_warning_and_reraises(self):
        logger = MagicMock()
        with pytest.raises(RuntimeError):
            with PerformanceLogger("list_all_carts", logger):
                raise RuntimeError("boom")

        logger.warning.assert_called_once()
