"""
Tests for app/config.py, app/core/security.py, app/core/logging_config.py and app/api/deps.py
"""
import json
import logging
from datetime import timedelta

import pytest
from fastapi import HTTPException

from app.api.deps import paged, unwrap
from app.config import Settings
from app.core.logging_config import JSONFormatter, setup_logging
from app.core.results import NOT_AVAILABLE, fail, ok
from app.core.security import InvalidToken, Principal, create_access_token, decode_principal, token_for


class TestSettings:
    """Test settings parsing."""

    def test_cors_origins_list(self):
        settings = Settings(CORS_ORIGINS="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_store_backend_switch(self):
        assert Settings(STORE_BACKEND="Memory").use_memory_store is True
        assert Settings(STORE_BACKEND="mongodb").use_memory_store is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")
        assert Settings().DEFAULT_PAGE_SIZE == 25


class TestTokens:
    """Test bearer token encoding and decoding."""

    def test_round_trip(self, test_settings):
        token = token_for(Principal(uid="u1", email="a@company.com", display_name="A B"), settings=test_settings)
        principal = decode_principal(token, test_settings)

        assert principal == Principal(uid="u1", email="a@company.com", display_name="A B")

    def test_wrong_secret(self, test_settings):
        token = token_for(Principal(uid="u1"), settings=test_settings)
        other = Settings(SECRET_KEY="another-secret")

        with pytest.raises(InvalidToken):
            decode_principal(token, other)

    def test_expired(self, test_settings):
        token = token_for(Principal(uid="u1"), expires_delta=timedelta(seconds=-1), settings=test_settings)
        with pytest.raises(InvalidToken):
            decode_principal(token, test_settings)

    def test_missing_subject(self, test_settings):
        token = create_access_token({"email": "a@company.com"}, settings=test_settings)
        with pytest.raises(InvalidToken, match="no subject"):
            decode_principal(token, test_settings)


class TestUnwrap:
    """Test envelope to HTTP error mapping."""

    def test_success_passes_through(self):
        result = ok({"id": "1"})
        assert unwrap(result) is result

    @pytest.mark.parametrize("error,status_code", [
        ("Document not found", 404),
        ("Announcement not found", 404),
        (NOT_AVAILABLE, 503),
        ("Employee ID already exists", 400),
    ])
    def test_failures(self, error, status_code):
        with pytest.raises(HTTPException) as exc_info:
            unwrap(fail(error))
        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail == error

    def test_paged_past_the_end(self):
        result = paged(ok(list(range(7))), page=3, page_size=5)

        assert result.data == []
        assert result.pagination.total == 7
        assert result.pagination.total_pages == 2


class TestLogging:

    def test_json_formatter(self):
        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JSONFormatter("portal").format(record))

        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["service"] == "portal"

    def test_setup_is_idempotent(self):
        settings = Settings(LOG_LEVEL="WARNING")
        setup_logging(settings)
        setup_logging(settings)

        ours = [h for h in logging.getLogger().handlers if getattr(h, "_portal_handler", False)]
        assert len(ours) == 1
        assert logging.getLogger().level == logging.WARNING
