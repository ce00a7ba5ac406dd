"""Tests for upstream failure normalization."""

import httpx
import pytest

from legit_proxy.services.errors import UpstreamFailure, normalize_failure

FALLBACK = "Failed to fetch brands"


def _status_error(status_code, **response_kwargs):
    request = httpx.Request("GET", "https://api.legit.test/v1/product_brand")
    response = httpx.Response(status_code, request=request, **response_kwargs)
    return httpx.HTTPStatusError("upstream error", request=request, response=response)


class TestNormalizeFailure:
    """Test message/details/status selection."""

    def test_message_field_preferred(self):
        """Test upstream message wins over error."""
        body = {"message": "Invalid token", "error": "Unauthorized"}
        status, envelope = normalize_failure(UpstreamFailure("x", 401, body), FALLBACK)

        assert status == 401
        assert envelope.message == "Invalid token"
        assert envelope.details == body

    def test_error_field_when_message_missing(self):
        """Test upstream error is used when message is absent."""
        status, envelope = normalize_failure(UpstreamFailure("x", 403, {"error": "Forbidden"}), FALLBACK)

        assert status == 403
        assert envelope.message == "Forbidden"

    def test_empty_message_falls_through_to_error(self):
        """Test an empty message is skipped."""
        _, envelope = normalize_failure(UpstreamFailure("x", 400, {"message": "", "error": "Bad"}), FALLBACK)
        assert envelope.message == "Bad"

    @pytest.mark.parametrize("message", [
        {"en": "Invalid brand", "fr": "Marque invalide"},
        ["brand_id is required", "images is required"],
        404,
        True,
    ])
    def test_non_string_message_is_unchanged(self, message):
        """Test a structured upstream message is not turned into text."""
        body = {"message": message}
        _, envelope = normalize_failure(UpstreamFailure("x", 400, body), FALLBACK)

        assert envelope.message == message
        assert envelope.model_dump(mode="json")["message"] == message

    def test_non_string_error_is_unchanged(self):
        """Test a structured upstream error is not turned into text."""
        _, envelope = normalize_failure(UpstreamFailure("x", 400, {"error": {"code": 12}}), FALLBACK)
        assert envelope.message == {"code": 12}

    def test_fallback_when_neither_field(self):
        """Test the fallback message is used when upstream gives no reason."""
        body = {"code": 1}
        _, envelope = normalize_failure(UpstreamFailure("x", 422, body), FALLBACK)

        assert envelope.message == FALLBACK
        assert envelope.details == body

    def test_empty_dict_body_is_still_details(self):
        """Test an empty JSON object is kept as details."""
        _, envelope = normalize_failure(UpstreamFailure("x", 500, {}), FALLBACK)
        assert envelope.details == {}

    def test_no_response_defaults_to_500_and_local_message(self):
        """Test failures without a response use 500 and the local message."""
        status, envelope = normalize_failure(UpstreamFailure("Connection refused"), FALLBACK)

        assert status == 500
        assert envelope.message == FALLBACK
        assert envelope.details == "Connection refused"

    def test_empty_text_body_uses_local_message(self):
        """Test an empty body falls back to the local message as details."""
        status, envelope = normalize_failure(UpstreamFailure("Bad Gateway", 502, ""), FALLBACK)

        assert status == 502
        assert envelope.details == "Bad Gateway"

    def test_non_dict_body_uses_fallback_message(self):
        """Test a JSON array body keeps the fallback message."""
        _, envelope = normalize_failure(UpstreamFailure("x", 502, ["oops"]), FALLBACK)

        assert envelope.message == FALLBACK
        assert envelope.details == ["oops"]

    def test_is_deterministic(self):
        """Test the same failure always gives the same result."""
        failure = UpstreamFailure("x", 404, {"message": "missing"})
        assert normalize_failure(failure, FALLBACK) == normalize_failure(failure, FALLBACK)


class TestUpstreamFailureFromException:
    """Test mapping of raised exceptions."""

    def test_status_error_keeps_status_and_json_body(self):
        """Test HTTP status errors keep the status and JSON body."""
        failure = UpstreamFailure.from_exception(_status_error(404, json={"message": "nope"}))

        assert failure.status == 404
        assert failure.body == {"message": "nope"}

    def test_status_error_with_text_body(self):
        """Test a non-JSON error body is kept as text."""
        failure = UpstreamFailure.from_exception(_status_error(502, content=b"<html>bad gateway</html>"))

        assert failure.status == 502
        assert failure.body == "<html>bad gateway</html>"

    def test_transport_error_has_no_status(self):
        """Test transport errors carry no status or body."""
        failure = UpstreamFailure.from_exception(httpx.ConnectError("Name or service not known"))

        assert failure.status is None
        assert failure.body is None
        assert failure.message == "Name or service not known"

    def test_local_error_uses_exception_text(self):
        """Test local errors use the exception text."""
        failure = UpstreamFailure.from_exception(KeyError("url"))

        assert failure.status is None
        assert failure.message == "'url'"

    def test_existing_failure_is_returned_unchanged(self):
        """Test an UpstreamFailure is passed through."""
        original = UpstreamFailure("x", 418, {"error": "teapot"})
        assert UpstreamFailure.from_exception(original) is original

    @pytest.mark.parametrize("exc", [RuntimeError(), ValueError()])
    def test_blank_exception_text_uses_type_name(self, exc):
        """Test exceptions without text use their type name."""
        failure = UpstreamFailure.from_exception(exc)
        assert failure.message == type(exc).__name__
