#!/usr/bin/env python3
"""
FleetGate -- token-authenticated vehicle listings API.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8080
  python main.py serve --reload
  python main.py token admin 1234

Environment variables (see core/config.py for the full list):
  SECRET_KEY   Token signing key, at least 32 characters. Required unless DEBUG=true.
  DEBUG        true = auto-generate SECRET_KEY for local development.
  CREDENTIALS  JSON object of identity -> secret, e.g. '{"admin": "1234"}'.
"""

import argparse
import sys
from typing import Optional

from auth.exceptions import InvalidCredentials
from auth.store import CredentialStore
from auth.tokens import TokenAuthority
from core.config import get_settings


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _token(args: argparse.Namespace) -> int:
    """Print a bearer token for the given credentials.

    Uses the same store and authority the API builds, so the token is
    accepted by a server running with the same SECRET_KEY.
    """
    settings = get_settings()
    store = CredentialStore.from_plaintext(settings.credentials, rounds=settings.bcrypt_rounds)
    try:
        identity = store.resolve(args.username, args.password)
    except InvalidCredentials:
        print("  [!] Invalid username or password.", file=sys.stderr)
        return 1
    print(TokenAuthority.from_settings(settings).issue(identity))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fleetgate",
        description="FleetGate -- token-authenticated vehicle listings API.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API with uvicorn.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development).")
    serve.set_defaults(func=_serve)

    token = sub.add_parser("token", help="Check credentials and print a bearer token.")
    token.add_argument("username")
    token.add_argument("password")
    token.set_defaults(func=_token)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
