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
Security utilities for keeping tokens, passwords and secrets out of logs and error messages.
"""

import re
from typing import Any


class CredentialSanitizer:
    """Sanitizer for Cognito tokens, auth parameters and AWS credentials."""

    # Patterns for credential formats that show up in Cognito traffic
    PATTERNS = {
        "jwt": re.compile(r"eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]*"),
        "aws_access_key": re.compile(r"(?:AKIA|ASIA)[A-Z0-9]{7,}"),
        "auth_parameter": re.compile(
            r"(?:SECRET_HASH|SecretHash|PASSWORD|Password|REFRESH_TOKEN|RefreshToken|"
            r"AccessToken|IdToken)[\"\']?\s*[=:]\s*[\"\']?([^\s\"\',}]+)[\"\']?",
        ),
        "bearer": re.compile(r"(?:Basic|Bearer)\s+([A-Za-z0-9+/_\-.]{20,}={0,2})", re.IGNORECASE),
    }

    # Sensitive field names to redact in structured data
    SENSITIVE_FIELDS = {
        "password",
        "secret",
        "token",
        "secret_hash",
        "secrethash",
        "client_secret",
        "authorization",
        "session",
        "access_key",
    }

    @classmethod
    def sanitize_string(cls, text: str, replacement: str = "[REDACTED]") -> str:
        """
        Sanitize sensitive information from a string.

        Args:
            text: String to sanitize
            replacement: Replacement text for long credential-like blobs

        Returns:
            Sanitized string
        """
        if not text:
            return text

        sanitized = text

        for pattern_name, pattern in cls.PATTERNS.items():
            if pattern.groups == 0:
                sanitized = pattern.sub(f"[REDACTED_{pattern_name.upper()}]", sanitized)
            else:
                sanitized = pattern.sub(
                    lambda m, name=pattern_name: m.group(0).replace(
                        m.group(1), f"[REDACTED_{name.upper()}]"
                    ),
                    sanitized,
                )

        # Opaque refresh tokens and secret hashes are long base64 strings
        sanitized = re.sub(
            r"(?<![A-Za-z0-9+/_\-])([A-Za-z0-9+/_\-]{40,}={0,2})(?![A-Za-z0-9+/_\-])",
            replacement,
            sanitized,
        )

        return sanitized

    @classmethod
    def sanitize_dict(cls, data: dict[str, Any], max_depth: int = 10) -> dict[str, Any]:
        """
        Recursively sanitize sensitive fields in a dictionary.

        Args:
            data: Dictionary to sanitize
            max_depth: Maximum recursion depth

        Returns:
            Sanitized dictionary
        """
        if max_depth <= 0:
            return {"error": "Max recursion depth reached"}

        sanitized: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                sanitized[key] = cls.sanitize_dict(value, max_depth - 1)
            elif isinstance(value, list):
                sanitized[key] = cls.sanitize_list(value, max_depth - 1)
            elif cls._is_sensitive_key(key):
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, str):
                sanitized[key] = cls.sanitize_string(value)
            else:
                sanitized[key] = value

        return sanitized

    @classmethod
    def sanitize_list(cls, data: list[Any], max_depth: int = 10) -> list[Any]:
        """Recursively sanitize sensitive data in a list."""
        if max_depth <= 0:
            return ["[Max recursion depth reached]"]

        sanitized = []
        for item in data:
            if isinstance(item, dict):
                sanitized.append(cls.sanitize_dict(item, max_depth - 1))
            elif isinstance(item, list):
                sanitized.append(cls.sanitize_list(item, max_depth - 1))
            elif isinstance(item, str):
                sanitized.append(cls.sanitize_string(item))
            else:
                sanitized.append(item)

        return sanitized

    @classmethod
    def sanitize_error(cls, error: Exception) -> str:
        """Sanitize an exception's string representation."""
        return cls.sanitize_string(str(error))

    @classmethod
    def sanitize_client_error(cls, error: Exception) -> dict[str, Any]:
        """
        Extract loggable details from a botocore error.

        Args:
            error: ClientError or any other exception raised by boto3

        Returns:
            Dict with error_type, error_code, error_message and status_code
        """
        result: dict[str, Any] = {
            "error_type": error.__class__.__name__,
            "error_code": None,
            "error_message": cls.sanitize_string(str(error)),
            "status_code": None,
        }

        response = getattr(error, "response", None)
        if isinstance(response, dict):
            err = response.get("Error", {})
            if err:
                result["error_code"] = err.get("Code")
                message = err.get("Message")
                if message:
                    result["error_message"] = cls.sanitize_string(message)
            metadata = response.get("ResponseMetadata", {})
            result["status_code"] = metadata.get("HTTPStatusCode")

        return result

    @staticmethod
    def _is_sensitive_key(key: str) -> bool:
        lowered = key.lower()
        return any(sensitive in lowered for sensitive in CredentialSanitizer.SENSITIVE_FIELDS)
