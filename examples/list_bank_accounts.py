"""
Minimal script that uses the public API to page through bank accounts.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Tuple

from rebilly import BankAccountService, RebillyError, RequestLogger, create_client


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List bank accounts using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing REBILLY_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--api-key", help="Provide the API key without relying on environment data")
    parser.add_argument("--sandbox", action="store_true", help="Use the sandbox host")
    parser.add_argument("--customer-id", help="Only list accounts of this customer")
    parser.add_argument("--limit", type=int, default=50, help="Page size (default: 50)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_client(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
            api_key=args.api_key,
            sandbox=args.sandbox or None,
        )
    except (RebillyError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client.attach(RequestLogger(level=logging.INFO))
    service = BankAccountService(client)

    params = {"limit": args.limit}
    if args.customer_id:
        params["filter"] = f"customerId:{args.customer_id}"

    try:
        for account in service.paginator(params).items():
            logging.info(
                "%s %s ****%s (%s)",
                account.id,
                account.bank_name,
                account.last4,
                account.status,
            )
    except RebillyError as exc:
        logging.error("Listing bank accounts failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
