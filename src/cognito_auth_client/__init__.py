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
Cognito Auth Client
Thin async wrapper around Amazon Cognito user pool authentication:
sign in, sign out, token refresh, user attributes and password reset.
"""

import logging

from .clients import CognitoAuthClient
from .config import CognitoConfig
from .exceptions import AuthError, ConfigurationError, MalformedResponseError, ProviderError
from .models import AuthenticationResult, RefreshTokenResult, UserInfo
from .secret_hash import compute_secret_hash

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AuthError",
    "AuthenticationResult",
    "CognitoAuthClient",
    "CognitoConfig",
    "ConfigurationError",
    "MalformedResponseError",
    "ProviderError",
    "RefreshTokenResult",
    "UserInfo",
    "compute_secret_hash",
]
