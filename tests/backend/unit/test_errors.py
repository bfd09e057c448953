"""
Unit tests for core.errors module.
Tests failure classification, translation and reporting rules.
"""
import logging

import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog.core.errors import (
    DEFAULT_GENERIC_MESSAGE,
    AppError,
    AuthenticationFailure,
    AuthorizationFailure,
    BadRequestFailure,
    DomainConflict,
    InputValidationFailure,
    MethodNotAllowedFailure,
    NotFoundFailure,
    RateLimitFailure,
    UniqueConstraintViolation,
    classify,
    generic_message,
    report,
    should_report,
    translate_exception,
)


class TestTranslateException:
    """translate_exception is a pure (failure, debug) -> (status, body) mapping."""

    def test_input_validation_failure(self):
        exc = InputValidationFailure({"title": ["The title field is required."]})
        status, body = translate_exception(exc)
        assert status == 422
        assert body == {
            "success": False,
            "message": "The given data was invalid.",
            "errors": {"title": ["The title field is required."]},
        }

    def test_unique_constraint_is_a_validation_failure(self):
        status, body = translate_exception(UniqueConstraintViolation("email"))
        assert status == 422
        assert body["errors"] == {"email": ["The email has already been taken."]}

    def test_request_validation_error_fields(self):
        exc = RequestValidationError([
            {"loc": ("body", "username"), "msg": "bad username", "type": "value_policy"},
            {"loc": ("body", "username"), "msg": "too long", "type": "string_too_long"},
            {"loc": ("query", "per_page"), "msg": "too big", "type": "less_than_equal"},
            {"loc": ("body",), "msg": "Field required", "type": "missing"},
        ])
        status, body = translate_exception(exc)
        assert status == 422
        assert body["errors"] == {
            "username": ["bad username", "too long"],
            "per_page": ["too big"],
            "body": ["Field required"],
        }

    @pytest.mark.parametrize(
        "exc, status",
        [
            (AuthenticationFailure(), 401),
            (AuthorizationFailure(), 403),
            (NotFoundFailure(), 404),
            (MethodNotAllowedFailure(), 405),
            (RateLimitFailure(), 429),
            (StarletteHTTPException(401), 401),
            (StarletteHTTPException(403), 403),
            (StarletteHTTPException(404), 404),
            (StarletteHTTPException(405), 405),
            (StarletteHTTPException(429), 429),
        ],
    )
    def test_fixed_kinds(self, exc, status):
        got_status, body = translate_exception(exc, debug=False)
        assert got_status == status
        assert body["success"] is False
        assert body["message"]
        assert "errors" not in body

    def test_domain_message_kept_for_fixed_kinds(self):
        status, body = translate_exception(AuthenticationFailure("Invalid username or password."))
        assert (status, body["message"]) == (401, "Invalid username or password.")

    def test_framework_not_found_uses_fixed_message(self):
        _, body = translate_exception(StarletteHTTPException(404, detail="Not Found"))
        assert body["message"] == "The requested resource was not found."

    def test_explicit_status_hides_message_outside_debug(self):
        status, body = translate_exception(BadRequestFailure("Invalid reply target."), debug=False)
        assert status == 400
        assert body == {"success": False, "message": "Bad request."}

    def test_explicit_status_shows_message_in_debug(self):
        status, body = translate_exception(DomainConflict("You have already liked this post."), debug=True)
        assert status == 409
        assert body["message"] == "You have already liked this post."

    def test_explicit_status_without_message_falls_back(self):
        _, body = translate_exception(AppError("", status_code=418), debug=True)
        assert body["message"] == DEFAULT_GENERIC_MESSAGE

    def test_http_exception_with_other_status(self):
        status, body = translate_exception(StarletteHTTPException(503, detail="db down"), debug=False)
        assert status == 503
        assert body["message"] == "Service unavailable."

    def test_unclassified_failure(self):
        status, body = translate_exception(RuntimeError("secret connection string"), debug=False)
        assert status == 500
        assert body == {"success": False, "message": "Internal server error."}

    def test_unclassified_failure_in_debug(self):
        status, body = translate_exception(RuntimeError("boom"), debug=True)
        assert (status, body["message"]) == (500, "boom")

    def test_generic_messages(self):
        assert generic_message(400) == "Bad request."
        assert generic_message(502) == "Bad gateway."
        assert generic_message(599) == DEFAULT_GENERIC_MESSAGE


class TestReporting:
    @pytest.mark.parametrize(
        "exc",
        [
            InputValidationFailure({}),
            RequestValidationError([]),
            AuthenticationFailure(),
            NotFoundFailure(),
            StarletteHTTPException(404),
        ],
    )
    def test_expected_failures_are_not_reported(self, exc):
        assert should_report(exc) is False

    @pytest.mark.parametrize(
        "exc",
        [AuthorizationFailure(), BadRequestFailure(), DomainConflict(), RateLimitFailure(), ValueError("x")],
    )
    def test_other_failures_are_reported(self, exc):
        assert should_report(exc) is True

    def test_report_logs_unclassified_with_traceback(self, caplog):
        with caplog.at_level(logging.ERROR, logger="uvicorn.error"):
            report(RuntimeError("boom"))
        assert any(r.exc_info for r in caplog.records)

    def test_report_skips_not_found(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="uvicorn.error"):
            report(NotFoundFailure("Post not found."))
        assert caplog.records == []

    def test_classify(self):
        assert classify(ValueError()) == "server"
        assert classify(DomainConflict()) == "http"
        assert classify(StarletteHTTPException(405)) == "method_not_allowed"
