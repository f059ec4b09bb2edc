"""
Command-line interface for issuing single Rebilly API calls.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Optional, Sequence, TextIO, Tuple

from .api import create_client
from .core.errors import ConfigurationError, RebillyError, UnprocessableEntityError
from .core.http import Transport
from .core.middleware import RequestLogger
from .core.resources import Collection, Resource

_METHODS = ("get", "head", "post", "put", "patch", "delete")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _json_payload(value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"--data must be valid JSON: {exc}") from exc


def _collect_pairs(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rebilly",
        description="Send a single request to the Rebilly API and print the result as JSON",
    )
    parser.add_argument("method", choices=_METHODS, type=str.lower, help="HTTP method")
    parser.add_argument(
        "path",
        help="Resource path or template, e.g. bank-accounts/{bankAccountId}",
    )
    parser.add_argument(
        "--param",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Fill a path placeholder or add a query string parameter",
    )
    parser.add_argument(
        "--data",
        type=_json_payload,
        default=None,
        help="JSON request body for post/put/patch",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing REBILLY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every HTTP exchange at INFO level",
    )
    return parser


def _render(result: Any) -> Optional[str]:
    if result is None:
        return None
    if isinstance(result, (Resource, Collection)):
        content = result.to_list() if isinstance(result, Collection) else result.to_dict()
    else:
        content = result
    return json.dumps(content, indent=2, sort_keys=True)


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    transport: Optional[Transport] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set or ())
    params = _collect_pairs(args.param or ())

    try:
        client = create_client(env_file=args.env_file, overrides=overrides, transport=transport)
    except (ConfigurationError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if args.trace:
        client.attach(RequestLogger(level=logging.INFO))

    try:
        result = client.send(args.method.upper(), args.data, args.path, params)
    except UnprocessableEntityError as exc:
        logging.error("Validation failed: %s", exc)
        return 1
    except RebillyError as exc:
        logging.error("Request failed: %s", exc)
        return 1

    rendered = _render(result)
    if rendered is not None:
        print(rendered, file=out)
    return 0


def main() -> None:
    sys.exit(run_cli())
