import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import Settings, get_settings
from .sdk.exceptions import WorkflowError
from .sdk.mapping import parse_export_fields, parse_field_overrides
from .sdk.models import WorkflowConfig
from .sdk.workflow import XlsxToJsonWorkflow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xlsx-to-json",
        description="Convert an XLSX file to JSON records via a conversion service",
    )
    parser.add_argument("--file-url", required=True, help="URL of the XLSX file to convert")
    parser.add_argument(
        "--endpoint",
        default=None,
        help="Conversion service URL (default: XLSX_TO_JSON_SERVICE_ENDPOINT)",
    )
    parser.add_argument("--sheet-index", type=int, default=0, help="Zero-based sheet index")
    parser.add_argument(
        "--headers-index", type=int, default=0, help="Zero-based row holding column headers"
    )
    parser.add_argument(
        "--export-fields",
        default="",
        help='Comma-separated column indexes to export, e.g. "0,3,5" (default: all)',
    )
    parser.add_argument(
        "--field-mapping",
        default="",
        help='Custom names as JSON, e.g. \'[{"index": 0, "name": "model"}]\'',
    )
    parser.add_argument("--timeout", type=int, default=None, help="Request timeout in seconds")
    parser.add_argument(
        "--retry-attempts", type=int, default=None, help="Attempts per remote call"
    )
    parser.add_argument("--api-key", default=None, help="API key for the conversion service")
    parser.add_argument(
        "--api-key-header", default=None, help="Header carrying the API key (default: X-API-KEY)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--output", default=None, help="Write items to this file instead of stdout")
    return parser


def build_config(args: argparse.Namespace, settings: Settings) -> Optional[WorkflowConfig]:
    endpoint = args.endpoint or settings.service_endpoint
    if not endpoint:
        return None

    return WorkflowConfig(
        service_endpoint=endpoint,
        file_url=args.file_url,
        sheet_index=args.sheet_index,
        headers_index=args.headers_index,
        export_field_indexes=parse_export_fields(args.export_fields),
        custom_field_overrides=parse_field_overrides(args.field_mapping),
        timeout=args.timeout if args.timeout is not None else settings.timeout_seconds,
        retry_attempts=(
            args.retry_attempts if args.retry_attempts is not None else settings.retry_attempts
        ),
        api_key=args.api_key or settings.api_key,
        api_key_header=args.api_key_header or settings.api_key_header,
        debug=args.debug or settings.debug,
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    config = build_config(args, settings)
    if config is None:
        print(
            "Error: conversion service URL is required "
            "(--endpoint or XLSX_TO_JSON_SERVICE_ENDPOINT)",
            file=sys.stderr,
        )
        sys.exit(2)

    try:
        items = XlsxToJsonWorkflow(config, settings=settings).run_sync()
    except WorkflowError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        sys.exit(1)

    output = json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
    else:
        print(output)


if __name__ == "__main__":
    main()
