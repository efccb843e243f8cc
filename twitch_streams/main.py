from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import KEYS, CLIENT_ID_KEY, load_settings
from .errors import TwitchError
from .http import new_http_client
from .twitch_client import new_client, with_config_provider, with_transport

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="twitch-streams")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    sub = p.add_subparsers(dest="cmd", required=False)

    p_config = sub.add_parser("config", help="Config commands")
    sub_config = p_config.add_subparsers(dest="config_cmd", required=True)

    sub_config.add_parser("keys", help="List config keys read from the environment")
    sub_config.add_parser("show", help="Show where each config key is resolved from")

    p_streams = sub.add_parser("streams", help="Fetch the raw Helix streams payload for a user login")
    p_streams.add_argument("login", help="Twitch user login (e.g. 'summit1g')")
    p_streams.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout in seconds")
    p_streams.add_argument("--out", default=None, help="Write the payload to this file instead of stdout")
    p_streams.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    if args.cmd is None:
        p.print_help()
        return 0

    if args.cmd == "config":
        if args.config_cmd == "keys":
            for k in KEYS:
                print(k.upper())
            return 0

        if args.config_cmd == "show":
            # Intentionally do not print the client id itself
            settings = load_settings()
            for k in KEYS:
                print(f"{k}: {settings.source(k)}")
            return 0

    if args.cmd == "streams":
        return _run_streams(args)

    raise RuntimeError("unreachable")


def _run_streams(args) -> int:
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    client = new_client(
        with_transport(new_http_client(timeout_s=args.timeout)),
        with_config_provider(settings),
    )

    with client:
        try:
            body = client.streams(client.by_user_login(args.login))
        except TwitchError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(body)
        print(f"OK: wrote {len(body)} bytes to {out}  ({CLIENT_ID_KEY} via {settings.source(CLIENT_ID_KEY)})")
        return 0

    sys.stdout.buffer.write(body)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
