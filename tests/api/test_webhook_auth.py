import pytest
from fastapi import HTTPException

from voting_backend.api.dependencies import authorize, verify_webhook_auth
from voting_backend.config import APIConfig, Config


def make_settings(webhook_auth: str) -> Config:
    return Config(api=APIConfig(webhook_auth=webhook_auth))


@pytest.mark.asyncio
async def test_verify_webhook_auth_missing_header():
    """Test authentication fails when Authorization header is missing."""
    with pytest.raises(HTTPException) as exc_info:
        await verify_webhook_auth(
            authorization=None, settings=make_settings("Bearer correct-token")
        )

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Unauthorized"


@pytest.mark.asyncio
async def test_verify_webhook_auth_invalid_format():
    """Test authentication fails when the Bearer prefix is missing."""
    with pytest.raises(HTTPException) as exc_info:
        await verify_webhook_auth(
            authorization="correct-token", settings=make_settings("Bearer correct-token")
        )

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Unauthorized"


@pytest.mark.asyncio
async def test_verify_webhook_auth_invalid_token():
    """Test authentication fails when token is invalid."""
    with pytest.raises(HTTPException) as exc_info:
        await verify_webhook_auth(
            authorization="Bearer wrong-token",
            settings=make_settings("Bearer correct-token"),
        )

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Unauthorized"


@pytest.mark.asyncio
async def test_verify_webhook_auth_success():
    """Test authentication succeeds with valid token."""
    result = await verify_webhook_auth(
        authorization="Bearer correct-token",
        settings=make_settings("Bearer correct-token"),
    )

    assert result is None  # Function returns None on success


@pytest.mark.asyncio
async def test_verify_webhook_auth_with_raw_token():
    """Test authentication with raw token in config."""
    result = await verify_webhook_auth(
        authorization="Bearer correct-token", settings=make_settings("correct-token")
    )

    assert result is None


def test_authorize_is_exact():
    """Test the header must match the secret exactly."""
    assert authorize("Bearer s3cret", "Bearer s3cret")
    assert not authorize("Bearer s3cret ", "Bearer s3cret")
    assert not authorize("bearer s3cret", "Bearer s3cret")
    assert not authorize("Bearer S3CRET", "Bearer s3cret")
    assert not authorize("", "Bearer s3cret")
    assert not authorize(None, "Bearer s3cret")


def test_authorize_empty_secret_rejects_everything():
    """Test an unset secret never authorizes."""
    assert not authorize("Bearer ", "")
    assert not authorize("Bearer anything", "")
