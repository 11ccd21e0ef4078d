#!/usr/bin/env python3
# MIT License
#
# Copyright (c) 2025 Cognito Auth Client Contributors
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
AWS Cognito user pool client wrapper for authentication operations.
Signs users in and out, refreshes tokens, reads user attributes and starts password resets.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import CognitoConfig
from ..decorators import log_auth_errors
from ..exceptions import ConfigurationError, MalformedResponseError, ProviderError
from ..models import AuthenticationResult, RefreshTokenResult, UserInfo
from ..secret_hash import compute_secret_hash
from ..security_utils import CredentialSanitizer

logger = logging.getLogger(__name__)

USER_PASSWORD_AUTH = "USER_PASSWORD_AUTH"
REFRESH_TOKEN_AUTH = "REFRESH_TOKEN_AUTH"


class CognitoAuthClient:
    """Async wrapper around the boto3 ``cognito-idp`` client.

    Args:
        settings: Region, app client id and secret. Read from the environment when omitted.
        cognito_client: A ready boto3 ``cognito-idp`` client. Created lazily when omitted.
    """

    def __init__(self, settings: CognitoConfig | None = None, cognito_client: Any = None):
        self.settings = settings if settings is not None else CognitoConfig()
        self._client = cognito_client
        self._executor = ThreadPoolExecutor(max_workers=self.settings.executor_max_workers)
        self._init_lock = asyncio.Lock()
        logger.debug(f"Cognito auth client settings: {self.settings.to_dict()}")

    async def _ensure_client(self) -> Any:
        """Create the boto3 client on first use."""
        if self._client is not None:
            return self._client

        async with self._init_lock:
            if self._client is not None:  # Double-check after acquiring lock
                return self._client

            client_kwargs: dict[str, Any] = {"region_name": self.settings.aws_region}
            if self.settings.endpoint_url:
                client_kwargs["endpoint_url"] = self.settings.endpoint_url
            try:
                self._client = boto3.client("cognito-idp", **client_kwargs)
            except (BotoCoreError, ValueError) as e:
                raise ConfigurationError(f"Could not create Cognito client: {e}") from e
            logger.info(f"Cognito client initialized in region {self.settings.aws_region}")

        return self._client

    async def _call(self, operation: str, method: str, **params: Any) -> dict[str, Any]:
        """Run one blocking boto3 call in the executor and map botocore failures."""
        client = await self._ensure_client()
        loop = asyncio.get_running_loop()
        logger.debug(f"{operation}: {method} {CredentialSanitizer.sanitize_dict(params)}")

        def invoke() -> dict[str, Any]:
            return getattr(client, method)(**params)

        try:
            return await loop.run_in_executor(self._executor, invoke)
        except ClientError as e:
            # Provider text goes to the caller untouched, only the log line is sanitized
            error = e.response.get("Error", {})
            metadata = e.response.get("ResponseMetadata", {})
            logger.debug(f"{operation}: {CredentialSanitizer.sanitize_client_error(e)}")
            raise ProviderError(
                error.get("Message") or str(e),
                operation=operation,
                code=error.get("Code"),
                status_code=metadata.get("HTTPStatusCode"),
            ) from e
        except BotoCoreError as e:
            logger.debug(f"{operation}: {CredentialSanitizer.sanitize_error(e)}")
            raise ProviderError(str(e), operation=operation) from e

    @log_auth_errors("sign_in")
    async def sign_in(self, email: str, password: str) -> AuthenticationResult:
        """
        Sign a user in with USER_PASSWORD_AUTH.

        Args:
            email: Username the user signs in with
            password: The user's password

        Returns:
            Tokens issued by Cognito

        Raises:
            ConfigurationError: Client id, client secret or email missing
            ProviderError: Cognito rejected the credentials
            MalformedResponseError: Cognito answered with a challenge instead of tokens
        """
        client_id = self.settings.require_client_id("sign_in")
        client_secret = self.settings.require_client_secret("sign_in")
        if not email:
            raise ConfigurationError(
                "Missing required parameters for Cognito authentication.", operation="sign_in"
            )

        response = await self._call(
            "sign_in",
            "initiate_auth",
            AuthFlow=USER_PASSWORD_AUTH,
            ClientId=client_id,
            AuthParameters={
                "USERNAME": email,
                "PASSWORD": password,
                "SECRET_HASH": compute_secret_hash(email, client_secret, client_id),
            },
        )

        result = response.get("AuthenticationResult")
        if not result:
            challenge = response.get("ChallengeName")
            raise MalformedResponseError(
                f"No AuthenticationResult in response (challenge: {challenge})",
                operation="sign_in",
            )

        logger.debug("Sign in succeeded")
        return AuthenticationResult.from_response(result)

    @log_auth_errors("sign_out")
    async def sign_out(self, access_token: str) -> None:
        """Invalidate every session issued for the user owning ``access_token``."""
        await self._call("sign_out", "global_sign_out", AccessToken=access_token)

    @log_auth_errors("refresh_access_token")
    async def refresh_access_token(
        self, refresh_token: str, username: str | None = None
    ) -> RefreshTokenResult:
        """
        Exchange a refresh token for new access and id tokens.

        Args:
            refresh_token: Refresh token from a previous sign in
            username: Username or sub the tokens belong to. Needed only to build
                SECRET_HASH when the app client has a secret.

        Returns:
            New access token, id token and lifetime in seconds

        Raises:
            ConfigurationError: Client id missing, no request is sent
            ProviderError: Cognito rejected the refresh token
            MalformedResponseError: Any of AccessToken, ExpiresIn, IdToken missing
        """
        client_id = self.settings.require_client_id("refresh_access_token")

        auth_parameters = {"REFRESH_TOKEN": refresh_token, "CLIENT_ID": client_id}
        if self.settings.client_secret and username:
            auth_parameters["SECRET_HASH"] = compute_secret_hash(
                username, self.settings.client_secret, client_id
            )

        response = await self._call(
            "refresh_access_token",
            "initiate_auth",
            AuthFlow=REFRESH_TOKEN_AUTH,
            ClientId=client_id,
            AuthParameters=auth_parameters,
        )

        result = response.get("AuthenticationResult") or {}
        missing = [key for key in ("AccessToken", "ExpiresIn", "IdToken") if not result.get(key)]
        if missing:
            raise MalformedResponseError(
                f"Invalid response from Cognito, missing {', '.join(missing)}",
                operation="refresh_access_token",
            )

        return RefreshTokenResult(
            access_token=result["AccessToken"],
            id_token=result["IdToken"],
            expires_in=result["ExpiresIn"],
        )

    @log_auth_errors("get_user_info")
    async def get_user_info(self, access_token: str) -> UserInfo:
        """Read name, email and sub of the user owning ``access_token``."""
        response = await self._call("get_user_info", "get_user", AccessToken=access_token)

        attributes = response.get("UserAttributes")
        if attributes is None:
            raise MalformedResponseError(
                "User attributes not found in the response", operation="get_user_info"
            )

        def get_attribute(name: str) -> str:
            for attr in attributes:
                if attr.get("Name") == name:
                    return attr.get("Value") or ""
            return ""

        return UserInfo(
            name=get_attribute("name"),
            email=get_attribute("email"),
            id=get_attribute("sub"),
        )

    @log_auth_errors("forgot_password")
    async def forgot_password(self, username: str) -> None:
        """Start Cognito's password reset flow, which sends the user a confirmation code."""
        client_id = self.settings.require_client_id("forgot_password")

        params: dict[str, Any] = {"ClientId": client_id, "Username": username}
        if self.settings.client_secret:
            params["SecretHash"] = compute_secret_hash(
                username, self.settings.client_secret, client_id
            )

        await self._call("forgot_password", "forgot_password", **params)

    def close(self):
        """Shut down the thread pool used for boto3 calls."""
        self._executor.shutdown(wait=True, cancel_futures=True)

    async def __aenter__(self):
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
