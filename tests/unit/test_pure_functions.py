import pytest

from xlsx_to_json.sdk.core import (
    build_auth_headers,
    build_http_error,
    build_upload_filename,
    calculate_upload_timeout,
    check_parameters_response,
    decode_sequence_response,
    describe_sheet,
    extract_document_id,
    strip_endpoint,
)
from xlsx_to_json.sdk.exceptions import ResponseFormatError, ServiceError


class TestExtractDocumentId:
    def test_id_field(self):
        assert extract_document_id({"id": "67cc0f3a"}) == "67cc0f3a"

    def test_document_id_fallback(self):
        assert extract_document_id({"documentId": "abc"}) == "abc"

    def test_id_preferred_over_document_id(self):
        assert extract_document_id({"id": "a", "documentId": "b"}) == "a"

    def test_numeric_id_normalized_to_string(self):
        assert extract_document_id({"id": 42}) == "42"

    def test_missing_id(self):
        with pytest.raises(ResponseFormatError, match="missing id field") as exc_info:
            extract_document_id({"status": "ok"})
        assert exc_info.value.details["response"] == {"status": "ok"}

    def test_non_object_response(self):
        with pytest.raises(ResponseFormatError, match="expected JSON object"):
            extract_document_id(["67cc"])

    def test_empty_response(self):
        with pytest.raises(ResponseFormatError, match="No response data received"):
            extract_document_id(None)


class TestDecodeSequenceResponse:
    def test_bare_array(self):
        assert decode_sequence_response(["Sheet1", "Sheet2"], "sheets", "x") == ["Sheet1", "Sheet2"]

    def test_wrapped_array(self):
        assert decode_sequence_response({"fields": ["a"]}, "fields", "x") == ["a"]

    def test_wrong_key(self):
        with pytest.raises(ResponseFormatError, match="Unexpected response format"):
            decode_sequence_response({"sheets": ["a"]}, "fields", "Failed to get fields")

    def test_wrapper_value_not_a_list(self):
        with pytest.raises(ResponseFormatError):
            decode_sequence_response({"sheets": "Sheet1"}, "sheets", "x")

    def test_scalar(self):
        with pytest.raises(ResponseFormatError):
            decode_sequence_response("Sheet1", "sheets", "x")

    def test_empty_array_is_accepted(self):
        assert decode_sequence_response([], "sheets", "x") == []


class TestCheckParametersResponse:
    def test_success(self):
        assert check_parameters_response({"success": True}) == {"success": True}

    @pytest.mark.parametrize("body", [{"success": False}, {}, None, [], {"success": 0}])
    def test_failure_carries_raw_body(self, body):
        with pytest.raises(ResponseFormatError, match="Failed to set parameters") as exc_info:
            check_parameters_response(body)
        assert exc_info.value.details["response"] == body


class TestBuildHttpError:
    def test_message_and_fields(self):
        error = build_http_error(
            "Failed to get sheets", "http://svc/api/documents/1/sheets", 500,
            "Internal Server Error", '{"error":"boom"}',
        )

        assert isinstance(error, ServiceError)
        assert error.status_code == 500
        assert error.status_text == "Internal Server Error"
        assert "Failed to get sheets: HTTP 500 Internal Server Error" in error.message
        assert "http://svc/api/documents/1/sheets" in error.message
        assert '{"error":"boom"}' in error.message

    def test_empty_body(self):
        error = build_http_error("stage", "http://svc", 502, "", "")
        assert "Response: no data" in error.message
        assert error.status_text == "unknown"

    def test_hint_prefix(self):
        error = build_http_error("stage", "http://svc", 413, "Payload Too Large", "", hint="Too big.")
        assert error.message.startswith("Too big. stage: HTTP 413")


class TestUtils:
    def test_upload_timeout_keeps_configured_minimum(self):
        assert calculate_upload_timeout(60, 0.5) == 60

    def test_upload_timeout_scales_with_size(self):
        assert calculate_upload_timeout(60, 25) == 180
        assert calculate_upload_timeout(60, 10.01) == 120
        assert calculate_upload_timeout(300, 45) == 300

    def test_build_auth_headers(self):
        assert build_auth_headers("secret", "X-API-KEY") == {"X-API-KEY": "secret"}
        assert build_auth_headers(None) == {}
        assert build_auth_headers("secret", "") == {}

    def test_strip_endpoint(self):
        assert strip_endpoint("http://svc/api///") == "http://svc/api"

    def test_upload_filename(self):
        assert build_upload_filename(1.5, 1700000000000) == "xlsx_file_1700000000000_1.50MB.xlsx"

    def test_describe_sheet(self):
        assert describe_sheet("Prices", 0) == "0: Prices"
        assert describe_sheet({"name": "Stock"}, 1) == "1: Stock"
        assert describe_sheet({"index": 2}, 2) == "2: Sheet 2"
