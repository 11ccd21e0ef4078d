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
CLI entry point for the Cognito auth client
"""

import argparse
import asyncio
import getpass
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

from dotenv import load_dotenv

from .clients import CognitoAuthClient
from .config import CognitoConfig
from .exceptions import AuthError
from .models import AuthenticationResult

logger = logging.getLogger("cognito_auth_client")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cognito-auth", description="Call Cognito user pool authentication APIs"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sign_in = sub.add_parser("sign-in", help="Sign in with email and password")
    sign_in.add_argument("email")
    sign_in.add_argument("--password", help="Prompted for when omitted")

    sign_out = sub.add_parser("sign-out", help="Globally sign out an access token")
    sign_out.add_argument("access_token")

    refresh = sub.add_parser("refresh", help="Exchange a refresh token for new tokens")
    refresh.add_argument("refresh_token")
    refresh.add_argument("--username", help="Username or sub, needed when the client has a secret")

    user_info = sub.add_parser("user-info", help="Show name, email and id for an access token")
    user_info.add_argument("access_token")

    forgot = sub.add_parser("forgot-password", help="Start the password reset flow")
    forgot.add_argument("username")

    return parser


async def run_command(args: argparse.Namespace, client: CognitoAuthClient) -> Any:
    """Dispatch one parsed command to the client and return a JSON-ready result."""
    if args.command == "sign-in":
        password = args.password if args.password is not None else getpass.getpass("Password: ")
        result: AuthenticationResult = await client.sign_in(args.email, password)
        return result.to_dict()
    if args.command == "sign-out":
        await client.sign_out(args.access_token)
        return {"signed_out": True}
    if args.command == "refresh":
        return asdict(await client.refresh_access_token(args.refresh_token, args.username))
    if args.command == "user-info":
        return asdict(await client.get_user_info(args.access_token))
    if args.command == "forgot-password":
        await client.forgot_password(args.username)
        return {"reset_requested": True}
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace) -> Any:
    async with CognitoAuthClient(CognitoConfig()) as client:
        return await run_command(args, client)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        result = asyncio.run(_run(args))
    except AuthError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
