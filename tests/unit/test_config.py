import logging

import pytest
from pydantic import ValidationError

from xlsx_to_json.core.config import Settings
from xlsx_to_json.sdk.config import SDKConfig, get_logger, mask_secret


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SERVICE_ENDPOINT", "API_KEY", "TIMEOUT_SECONDS", "RETRY_ATTEMPTS"):
            monkeypatch.delenv(f"XLSX_TO_JSON_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.service_endpoint is None
        assert settings.api_key is None
        assert settings.api_key_header == "X-API-KEY"
        assert settings.timeout_seconds == 60
        assert settings.retry_attempts == 3
        assert settings.retry_delay == 2.0
        assert settings.upload_retry_delay == 5.0
        assert settings.download_retry_delay == 5.0
        assert settings.max_file_size_mb == 50
        assert settings.health_check is True

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("XLSX_TO_JSON_SERVICE_ENDPOINT", "http://xls-service:3000/api")
        monkeypatch.setenv("XLSX_TO_JSON_TIMEOUT_SECONDS", "120")
        monkeypatch.setenv("XLSX_TO_JSON_HEALTH_CHECK", "false")

        settings = Settings(_env_file=None)

        assert settings.service_endpoint == "http://xls-service:3000/api"
        assert settings.timeout_seconds == 120
        assert settings.health_check is False

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("XLSX_TO_JSON_API_KEY=from-file\nXLSX_TO_JSON_RETRY_ATTEMPTS=5\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.api_key == "from-file"
        assert settings.retry_attempts == 5

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValidationError):
            Settings(retry_attempts=0, _env_file=None)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValidationError):
            Settings(retry_delay=-1, _env_file=None)


class TestSDKLogging:
    def test_debug_forces_debug_level(self):
        SDKConfig(debug=True).setup_logging()
        assert logging.getLogger("xlsx_to_json.sdk").level == logging.DEBUG

        SDKConfig(log_level="warning").setup_logging()
        assert logging.getLogger("xlsx_to_json.sdk").level == logging.WARNING

    def test_handler_added_once(self):
        SDKConfig().setup_logging()
        SDKConfig().setup_logging()

        assert len(logging.getLogger("xlsx_to_json.sdk").handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        SDKConfig(log_level="chatty").setup_logging()
        assert logging.getLogger("xlsx_to_json.sdk").level == logging.INFO

    def test_module_loggers_are_namespaced(self):
        assert get_logger("workflow").name == "xlsx_to_json.sdk.workflow"

    def test_mask_secret(self):
        assert mask_secret("key-123") == "******"
        assert mask_secret("") == "Not provided"
        assert mask_secret(None) == "Not provided"
