#!/usr/bin/env python3
"""Live smoke test for a travel-sharing deployment.

Logs in, fetches the current user and their profile, and prints a short
OK/FAIL report.  Service URLs come from the ``GLOBE_*`` environment
variables read by :meth:`GlobeConfig.from_env`.

Credential sourcing:
- GLOBE_EMAIL
- GLOBE_PASSWORD (prompted when unset)
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import logging
import os
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyglobe import GlobeClient, GlobeConfig, GlobeError  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a live pyglobe login + profile check")
    parser.add_argument(
        "--email",
        default=os.environ.get("GLOBE_EMAIL"),
        help="Account email (default: $GLOBE_EMAIL).",
    )
    parser.add_argument(
        "--cookie",
        action="store_true",
        help="Attach the access token as a cookie instead of a bearer header.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw profile payload as JSON.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable DEBUG logging (request bodies are redacted).",
    )
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    if not args.email:
        print("Missing --email / GLOBE_EMAIL")
        return 2
    password = os.environ.get("GLOBE_PASSWORD") or getpass.getpass("Password: ")

    overrides = {"credential_style": "cookie"} if args.cookie else {}
    config = GlobeConfig.from_env(**overrides)

    async with GlobeClient(config) as client:
        try:
            auth = await client.login({"email": args.email, "password": password})
        except GlobeError as exc:
            print(f"FAIL login: {exc}")
            return 1
        print(f"OK   login user_id={auth.user_id}")

        try:
            current = await client.get_current_user()
            print(f"OK   /profile user_id={current.user_id}")
            user_id = current.user_id or auth.user_id
            if not user_id:
                print("FAIL no user id returned by the auth service")
                return 1
            profile = await client.get_profile_by_id(user_id)
        except GlobeError as exc:
            print(f"FAIL {exc}")
            return 1
        print(f"OK   profile username={profile.username!r} followers={profile.followers}")

        if args.json:
            print(json.dumps(profile.raw, indent=2, ensure_ascii=False, sort_keys=True))

        await client.logout()
    return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
