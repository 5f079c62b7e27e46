"""Unit tests for the bearer-token dependency."""

from datetime import timedelta

import pytest

from api.dependencies import extract_bearer_token, get_current_user_id, token_service
from core.exceptions import AuthenticationInvalid, AuthenticationMissing


class TestExtractBearerToken:

    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc.def") == "abc.def"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic abc"])
    def test_missing_or_malformed(self, header):
        assert extract_bearer_token(header) is None


class TestGetCurrentUserId:

    async def test_returns_subject(self):
        token = token_service.create_access_token("user-42")

        assert await get_current_user_id(f"Bearer {token}") == "user-42"

    async def test_no_header(self):
        with pytest.raises(AuthenticationMissing) as exc_info:
            await get_current_user_id(None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "No token provided"

    async def test_empty_token(self):
        with pytest.raises(AuthenticationMissing):
            await get_current_user_id("Bearer ")

    async def test_invalid_token(self):
        with pytest.raises(AuthenticationInvalid) as exc_info:
            await get_current_user_id("Bearer nonsense")
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Invalid or expired token"

    async def test_expired_token(self):
        token = token_service.create_access_token("user-42", expires_delta=timedelta(minutes=-1))

        with pytest.raises(AuthenticationInvalid):
            await get_current_user_id(f"Bearer {token}")
