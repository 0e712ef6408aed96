"""Tests for structured logging utilities."""

import asyncio
import logging
import uuid

import pytest

from expense_tracker.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    get_correlation_id,
    get_log_context,
    log_function_call,
    sanitize_sensitive_data,
)


class TestGenerateCorrelationId:
    """Test correlation ID generation."""

    def test_generate_correlation_id_format(self):
        """Test correlation ID has correct UUID format."""
        uuid.UUID(generate_correlation_id())

    def test_generate_correlation_id_uniqueness(self):
        ids = [generate_correlation_id() for _ in range(100)]
        assert len(set(ids)) == 100


class TestLogContext:
    """Test LogContext context manager."""

    def test_context_nesting(self):
        """Test inner contexts add fields and restore on exit."""
        with LogContext(correlation_id="outer", user_id="u1"):
            with LogContext(correlation_id="inner", route="GET /api/dashboard"):
                assert get_log_context() == {
                    "correlation_id": "inner",
                    "user_id": "u1",
                    "route": "GET /api/dashboard",
                }
            assert get_log_context() == {"correlation_id": "outer", "user_id": "u1"}
        assert get_log_context() == {}

    def test_context_cleanup_after_error(self):
        with pytest.raises(RuntimeError):
            with LogContext(correlation_id="failing"):
                raise RuntimeError("boom")
        assert get_correlation_id() is None

    def test_get_correlation_id_from_context(self):
        with LogContext(correlation_id="abc-123"):
            assert get_correlation_id() == "abc-123"

    def test_get_correlation_id_outside_context(self):
        assert get_correlation_id() is None

    def test_tasks_do_not_share_context(self):
        """Test that concurrent requests keep their own correlation ids."""

        async def handle(request_id):
            with LogContext(correlation_id=request_id):
                await asyncio.sleep(0)
                return get_correlation_id()

        async def run_both():
            return await asyncio.gather(handle("a"), handle("b"))

        assert asyncio.run(run_both()) == ["a", "b"]


class TestSanitizeSensitiveData:
    """Test sensitive data sanitization."""

    def test_sanitize_credentials(self):
        data = {"email": "ana@example.com", "password": "secret", "newPassword": "x"}
        assert sanitize_sensitive_data(data) == {
            "email": "ana@example.com",
            "password": "***REDACTED***",
            "newPassword": "***REDACTED***",
        }

    def test_sanitize_nested_dict(self):
        data = {"body": {"otp": "123456", "email": "ana@example.com"}}
        result = sanitize_sensitive_data(data)
        assert result["body"]["otp"] == "***REDACTED***"
        assert result["body"]["email"] == "ana@example.com"

    def test_sanitize_handles_none(self):
        assert sanitize_sensitive_data({"token": None}) == {"token": None}

    def test_non_dict_passthrough(self):
        assert sanitize_sensitive_data(["password"]) == ["password"]


class TestLogFunctionCall:
    """Test the entry/exit logging decorator."""

    def test_logs_entry_and_exit(self, caplog):
        @log_function_call
        def add(x, y):
            return x + y

        with caplog.at_level(logging.DEBUG):
            assert add(2, 3) == 5

        messages = [r.getMessage() for r in caplog.records]
        assert "Entering add" in messages
        assert "Exiting add" in messages

    def test_includes_args_without_secrets(self, caplog):
        @log_function_call(include_args=True, level="INFO")
        def login(email, password=None):
            return email

        with caplog.at_level(logging.INFO):
            login("ana@example.com", password="hunter2")

        entry = caplog.records[0].getMessage()
        assert "'ana@example.com'" in entry
        assert "hunter2" not in entry
        assert "password='***REDACTED***'" in entry

    def test_exception_is_logged_and_raised(self, caplog):
        @log_function_call
        def fail():
            raise ValueError("Invalid expense type")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                fail()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert "Exception in fail: ValueError: Invalid expense type" in errors[0].getMessage()
