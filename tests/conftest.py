import pytest

from xlsx_to_json.core.config import Settings
from xlsx_to_json.sdk.models import WorkflowConfig
from tests.helpers.network import FakeConversionService, FILE_URL, SERVICE_ENDPOINT


@pytest.fixture
def fast_settings():
    """Settings without backoff waits so retry paths run instantly."""
    return Settings(
        retry_delay=0,
        upload_retry_delay=0,
        download_retry_delay=0,
        _env_file=None,
    )


@pytest.fixture
def service():
    return FakeConversionService()


@pytest.fixture
def workflow_config():
    return WorkflowConfig(
        service_endpoint=SERVICE_ENDPOINT,
        file_url=FILE_URL,
        export_field_indexes=[0, 1],
    )
