"""
Tests for the command line entry point.
"""

import argparse
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cognito_auth_client import AuthenticationResult, ProviderError, RefreshTokenResult, UserInfo
from cognito_auth_client.__main__ import build_parser, main, run_command


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.sign_in = AsyncMock(
        return_value=AuthenticationResult(access_token="a", id_token="i", expires_in=3600)
    )
    client.sign_out = AsyncMock(return_value=None)
    client.refresh_access_token = AsyncMock(
        return_value=RefreshTokenResult(access_token="a2", id_token="i2", expires_in=60)
    )
    client.get_user_info = AsyncMock(
        return_value=UserInfo(name="Alice", email="alice@example.com", id="1234")
    )
    client.forgot_password = AsyncMock(return_value=None)
    return client


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_sign_in_with_password_flag(self, fake_client):
        args = build_parser().parse_args(["sign-in", "alice@example.com", "--password", "pw"])

        result = await run_command(args, fake_client)

        fake_client.sign_in.assert_awaited_once_with("alice@example.com", "pw")
        assert result["access_token"] == "a"
        assert result["expires_in"] == 3600

    @pytest.mark.asyncio
    async def test_sign_in_prompts_for_password(self, fake_client):
        args = build_parser().parse_args(["sign-in", "alice@example.com"])

        with patch("cognito_auth_client.__main__.getpass.getpass", return_value="typed"):
            await run_command(args, fake_client)

        fake_client.sign_in.assert_awaited_once_with("alice@example.com", "typed")

    @pytest.mark.asyncio
    async def test_refresh_passes_username(self, fake_client):
        args = build_parser().parse_args(["refresh", "rt", "--username", "sub-1"])

        result = await run_command(args, fake_client)

        fake_client.refresh_access_token.assert_awaited_once_with("rt", "sub-1")
        assert result == {"access_token": "a2", "id_token": "i2", "expires_in": 60}

    @pytest.mark.asyncio
    async def test_user_info(self, fake_client):
        args = build_parser().parse_args(["user-info", "at"])

        result = await run_command(args, fake_client)

        assert result == {"name": "Alice", "email": "alice@example.com", "id": "1234"}

    @pytest.mark.asyncio
    async def test_sign_out_and_forgot_password(self, fake_client):
        assert await run_command(build_parser().parse_args(["sign-out", "at"]), fake_client) == {
            "signed_out": True
        }
        assert await run_command(
            build_parser().parse_args(["forgot-password", "alice"]), fake_client
        ) == {"reset_requested": True}

        fake_client.sign_out.assert_awaited_once_with("at")
        fake_client.forgot_password.assert_awaited_once_with("alice")

    @pytest.mark.asyncio
    async def test_unknown_command(self, fake_client):
        with pytest.raises(ValueError):
            await run_command(argparse.Namespace(command="nope"), fake_client)


class TestMain:
    def test_prints_json_result(self, fake_client, capsys):
        with patch("cognito_auth_client.__main__.CognitoAuthClient") as mock_cls, patch(
            "cognito_auth_client.__main__.load_dotenv"
        ):
            mock_cls.return_value.__aenter__.return_value = fake_client
            mock_cls.return_value.__aexit__.return_value = False
            exit_code = main(["user-info", "at"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["email"] == "alice@example.com"

    def test_auth_error_exits_with_status_one(self, fake_client, capsys):
        fake_client.sign_out.side_effect = ProviderError(
            "Access Token has been revoked", operation="sign_out", code="NotAuthorizedException"
        )

        with patch("cognito_auth_client.__main__.CognitoAuthClient") as mock_cls, patch(
            "cognito_auth_client.__main__.load_dotenv"
        ):
            mock_cls.return_value.__aenter__.return_value = fake_client
            mock_cls.return_value.__aexit__.return_value = False
            exit_code = main(["sign-out", "at"])

        assert exit_code == 1
        assert "sign_out: Access Token has been revoked" in capsys.readouterr().err
