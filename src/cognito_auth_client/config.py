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
Configuration module for the Cognito auth client
Centralizes all configuration values and environment variables
"""

import os
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ConfigurationError


def _optional_env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass
class CognitoConfig:
    """Configuration for talking to a Cognito user pool app client"""

    # AWS Configuration
    aws_region: str = field(default_factory=lambda: _optional_env("AWS_REGION") or "us-east-1")
    endpoint_url: str | None = field(default_factory=lambda: _optional_env("COGNITO_ENDPOINT_URL"))

    # App client Configuration
    client_id: str | None = field(default_factory=lambda: _optional_env("COGNITO_CLIENT_ID"))
    client_secret: str | None = field(
        default_factory=lambda: _optional_env("COGNITO_CLIENT_SECRET")
    )

    # Thread Pool Configuration
    executor_max_workers: int = field(
        default_factory=lambda: int(os.getenv("COGNITO_EXECUTOR_WORKERS", "4"))
    )

    def require_client_id(self, operation: str | None = None) -> str:
        """Return the client id or fail before any request is built"""
        if not self.client_id:
            raise ConfigurationError(
                "COGNITO_CLIENT_ID is not set in environment variables", operation=operation
            )
        return self.client_id

    def require_client_secret(self, operation: str | None = None) -> str:
        """Return the client secret or fail before any request is built"""
        if not self.client_secret:
            raise ConfigurationError(
                "COGNITO_CLIENT_SECRET is not set in environment variables", operation=operation
            )
        return self.client_secret

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, safe for logging"""
        return {
            "aws_region": self.aws_region,
            "endpoint_url": self.endpoint_url,
            "client_id": self.client_id,
            "client_secret": "[REDACTED]" if self.client_secret else None,
            "executor_max_workers": self.executor_max_workers,
        }
