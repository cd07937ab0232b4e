"""
Workflow orchestration for spreadsheet to JSON conversion.
"""

import asyncio
from typing import Any, List, Optional

import httpx

from ..core.config import Settings
from .config import SDKConfig, get_logger, mask_secret
from .core.remote import describe_sheet
from .downloader import FileDownloader
from .exceptions import InvalidInputError, WorkflowError
from .mapping import create_field_mappings
from .models import (
    DownloadedFile,
    ExportSpec,
    OutputItem,
    WorkflowConfig,
    WorkflowStage,
)
from .remote import ConversionClient
from .retry import with_retry
from .validators import FileSizeValidator, URLValidator

logger = get_logger("workflow")


class XlsxToJsonWorkflow:
    """
    Runs the download, upload, inspect, configure and export sequence.

    Each remote call is retried on its own; any failure that survives its
    retries aborts the run with a single WorkflowError and no output.

    Examples:
        >>> workflow = XlsxToJsonWorkflow(
        ...     WorkflowConfig(
        ...         service_endpoint="http://localhost:3000/api",
        ...         file_url="https://example.com/prices.xlsx",
        ...     )
        ... )
        >>> items = await workflow.run()
        >>> records = [item.record for item in items]
    """

    def __init__(
        self,
        config: WorkflowConfig,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.settings = settings or Settings()
        self.transport = transport
        self.stage = WorkflowStage.VALIDATING

        SDKConfig(
            debug=config.debug or self.settings.debug,
            log_level=self.settings.log_level,
        ).setup_logging()

    async def run(self) -> List[OutputItem]:
        """Execute the full sequence and return one item per exported record."""
        try:
            return await self._run()
        except WorkflowError:
            self.stage = WorkflowStage.FAILED
            raise
        except Exception as e:
            failed_stage = self.stage.value
            self.stage = WorkflowStage.FAILED
            logger.error("XLSX to JSON conversion failed at %s: %s", failed_stage, e)
            raise WorkflowError.from_exception(failed_stage, e) from e

    def run_sync(self) -> List[OutputItem]:
        """Synchronous version of run."""
        return asyncio.run(self.run())

    async def _run(self) -> List[OutputItem]:
        config = self.config
        settings = self.settings
        attempts = config.retry_attempts
        auth_headers = config.auth_headers()

        self.stage = WorkflowStage.VALIDATING
        self._log_configuration()
        endpoint = URLValidator.validate_url(config.service_endpoint, "XLS Service URL")
        file_url = URLValidator.validate_url(config.file_url, "File URL")

        self.stage = WorkflowStage.DOWNLOADING
        logger.info("Starting download of file from: %s", file_url)
        async with FileDownloader(
            config.timeout, auth_headers, transport=self.transport
        ) as downloader:
            downloaded: DownloadedFile = await with_retry(
                lambda: downloader.download(file_url),
                attempts,
                settings.download_retry_delay,
                "file download",
            )
        FileSizeValidator.validate_size(downloaded.size_bytes, settings.max_file_size_mb)

        async with ConversionClient(
            endpoint,
            timeout=config.timeout,
            auth_headers=auth_headers,
            transport=self.transport,
            debug=config.debug,
        ) as client:
            self.stage = WorkflowStage.UPLOADING
            if settings.health_check and not await client.verify_endpoint():
                logger.warning("API endpoint verification failed, attempting upload anyway")
            document_id = await with_retry(
                lambda: client.upload(downloaded.content),
                attempts,
                settings.upload_retry_delay,
                "file upload",
            )

            self.stage = WorkflowStage.LISTING_SHEETS
            sheets = await with_retry(
                lambda: client.get_sheets(document_id),
                attempts,
                settings.retry_delay,
                "get sheets",
            )
            self._check_sheet_index(sheets)

            self.stage = WorkflowStage.LISTING_FIELDS
            fields = await with_retry(
                lambda: client.get_fields(
                    document_id, config.sheet_index, config.headers_index
                ),
                attempts,
                settings.retry_delay,
                "get fields",
            )
            if not fields:
                raise InvalidInputError(
                    f"No fields found in sheet at index {config.sheet_index}, "
                    f"row {config.headers_index + 1}"
                )

            self.stage = WorkflowStage.SETTING_PARAMETERS
            field_mappings = create_field_mappings(
                fields, config.export_field_indexes, config.custom_field_overrides
            )
            logger.info("Field mapping: %s", field_mappings.mapping)
            logger.info(
                "Export field indexes: %s",
                ", ".join(str(i) for i in field_mappings.export_field_indexes),
            )
            export_spec = ExportSpec(
                sheet_index=config.sheet_index,
                headers_index=config.headers_index,
                mapping=field_mappings.mapping,
                export_field_indexes=field_mappings.export_field_indexes,
            )
            await with_retry(
                lambda: client.set_parameters(document_id, export_spec),
                attempts,
                settings.retry_delay,
                "set parameters",
            )

            self.stage = WorkflowStage.FETCHING_EXPORT
            exported = await with_retry(
                lambda: client.get_exported_data(document_id),
                attempts,
                settings.retry_delay,
                "get exported data",
            )

        self.stage = WorkflowStage.EMITTING
        items = self._emit(exported)
        logger.info("Conversion successful (%d records)", len(items))

        self.stage = WorkflowStage.DONE
        return items

    def _check_sheet_index(self, sheets: List[Any]) -> None:
        if not sheets:
            raise InvalidInputError("No sheets found in the Excel file")

        sheet_index = self.config.sheet_index
        if sheet_index < 0 or sheet_index >= len(sheets):
            raise InvalidInputError(
                f"Invalid sheet index: {sheet_index}. File has {len(sheets)} sheets "
                f"(indices 0-{len(sheets) - 1})",
                {"sheet_index": sheet_index, "sheet_count": len(sheets)},
            )

        logger.info(
            "Available sheets: %s",
            ", ".join(describe_sheet(sheet, i) for i, sheet in enumerate(sheets)),
        )
        logger.info("Using sheet at index %d", sheet_index)

    @staticmethod
    def _emit(exported: Any) -> List[OutputItem]:
        if isinstance(exported, list):
            return [OutputItem(record=record) for record in exported]
        return [OutputItem(record=exported)]

    def _log_configuration(self) -> None:
        config = self.config
        logger.info("- API Endpoint: %s", config.service_endpoint)
        logger.info("- File URL: %s", config.file_url)
        logger.info("- Sheet Index: %d", config.sheet_index)
        logger.info("- Headers Index: %d", config.headers_index)
        logger.info(
            "- Export Field Indices: %s",
            ", ".join(str(i) for i in config.export_field_indexes) or "All fields",
        )
        logger.info("- Authentication: %s", "Enabled" if config.api_key else "Disabled")
        if config.api_key and config.debug:
            logger.info("- API Key Header: %s", config.api_key_header)
            logger.info("- API Key: %s", mask_secret(config.api_key))
        logger.info("- Timeout: %d seconds", config.timeout)
        logger.info("- Retry Attempts: %d", config.retry_attempts)
