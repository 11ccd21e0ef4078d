"""Shared fixtures for the Cognito auth client tests"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from cognito_auth_client import CognitoAuthClient, CognitoConfig

CLIENT_ID = "abc123"
CLIENT_SECRET = "s3cr3t"


def make_client_error(code: str, message: str, operation: str = "InitiateAuth", status: int = 400):
    """Build a botocore ClientError the way boto3 raises it"""
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status, "RequestId": "req-1"},
        },
        operation,
    )


@pytest.fixture
def settings():
    return CognitoConfig(
        aws_region="us-east-1",
        endpoint_url=None,
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        executor_max_workers=2,
    )


@pytest.fixture
def mock_cognito():
    """A stand-in for boto3.client('cognito-idp')"""
    return MagicMock()


@pytest.fixture
def auth_client(settings, mock_cognito):
    client = CognitoAuthClient(settings, cognito_client=mock_cognito)
    yield client
    client.close()


@pytest.fixture
def client_error():
    return make_client_error
