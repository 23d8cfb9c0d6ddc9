"""Tests for JWT access tokens."""
import pytest
from datetime import timedelta
from fastapi import HTTPException
from crewledger.core.auth import create_access_token, decode_access_token


class TestAccessTokens:
    """Token round trip and rejection."""

    def test_token_carries_member_id(self):
        token = create_access_token("507f1f77bcf86cd799439011")

        assert isinstance(token, str)
        assert decode_access_token(token) == "507f1f77bcf86cd799439011"

    def test_expired_token_is_rejected(self):
        token = create_access_token("507f1f77bcf86cd799439011", expires_delta=timedelta(minutes=-5))

        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401

    def test_garbage_token_is_rejected(self):
        with pytest.raises(HTTPException) as exc:
            decode_access_token("not.a.token")
        assert exc.value.status_code == 401
