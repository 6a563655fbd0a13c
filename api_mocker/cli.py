from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from api_mocker.client import Client
from api_mocker.codec import json_string
from api_mocker.config import settings
from api_mocker.errors import MockerError
from api_mocker.models import ExpectedRequest


def load_expectations(source: str) -> List[ExpectedRequest]:
    """Read one expectation object, or a list of them, from a JSON file ("-" is stdin)."""
    if source == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(source).read_text(encoding="utf-8")
    doc: Any = json.loads(raw)
    items = doc if isinstance(doc, list) else [doc]
    return [ExpectedRequest.model_validate(item) for item in items]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="api-mocker", description="Drive a remote mock HTTP server")
    ap.add_argument("--url", default=settings.url, help="Mock server base URL")
    ap.add_argument("--log-level", default=settings.log_level)

    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("results", help="Print unmatched and unexpected requests")
    sub.add_parser("verify", help="Exit non-zero when expectations are left over")
    sub.add_parser("clear", help="Drop all expectations and recorded calls")
    expect = sub.add_parser("expect", help="Register expectations from a JSON file")
    expect.add_argument("file", help="JSON file with one expectation or a list, '-' for stdin")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    client = Client(args.url)
    try:
        if args.command == "results":
            print(json_string(client.results()))
        elif args.command == "verify":
            client.verify()
        elif args.command == "clear":
            client.clear()
        elif args.command == "expect":
            # the whole file is validated before anything is registered
            for req in load_expectations(args.file):
                client.expect(req)
    except (MockerError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
