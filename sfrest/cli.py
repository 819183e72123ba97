"""Command-line access to a Salesforce org.

Usage:
    python -m sfrest versions
    python -m sfrest sobjects
    python -m sfrest describe Account
    python -m sfrest query "SELECT Id, Name FROM Account LIMIT 5"
    python -m sfrest search "FIND {Acme} IN NAME FIELDS"
    python -m sfrest limits

Credentials come from ``SALESFORCE_*`` environment variables (or ``.env``)
unless ``--credentials`` points at a JSON file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, TextIO

import httpx

from sfrest.config import settings
from sfrest.logging_config import setup_logging
from sfrest.sdk.auth import authenticate
from sfrest.sdk.client import SalesforceClient
from sfrest.sdk.exceptions import SalesforceError
from sfrest.sdk.models import load_credentials

logger = logging.getLogger(__name__)


def _dump(value: Any, out: TextIO) -> None:
    json.dump(value, out, indent=2, default=str)
    out.write("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfrest", description="Query the Salesforce REST API",
    )
    parser.add_argument(
        "--credentials", metavar="FILE",
        help="JSON file with client_id, client_secret, username, password, security_token",
    )
    parser.add_argument(
        "--api-version", default=settings.api_version or None,
        help="API version such as 59.0 (default: latest reported by the org)",
    )
    parser.add_argument(
        "--login-url", default=settings.login_url,
        help=f"OAuth login host (default: {settings.login_url})",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument(
        "--log-format", choices=["text", "json"], default=settings.log_format,
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("versions", help="List available API versions")
    sub.add_parser("sobjects", help="Print sobject names, one per line")
    describe = sub.add_parser("describe", help="Describe an sobject")
    describe.add_argument("sobject")
    query = sub.add_parser("query", help="Run a SOQL query")
    query.add_argument("soql")
    query.add_argument(
        "--all", action="store_true", help="Include deleted and archived rows",
    )
    search = sub.add_parser("search", help="Run a SOSL search")
    search.add_argument("sosl")
    sub.add_parser("limits", help="Show org limits")
    return parser


def run(
    args: argparse.Namespace,
    client: SalesforceClient,
    out: TextIO | None = None,
) -> None:
    """Execute the parsed *args* subcommand against *client*."""
    if out is None:
        out = sys.stdout
    if args.command == "versions":
        _dump([v.model_dump() for v in client.all_versions()], out)
    elif args.command == "sobjects":
        for summary in client.sobject_names():
            out.write(summary.name + "\n")
    elif args.command == "describe":
        _dump(client.describe(args.sobject), out)
    elif args.command == "query":
        result = client.query_all(args.soql) if args.all else client.query(args.soql)
        _dump(result.model_dump(by_alias=True), out)
    elif args.command == "search":
        _dump(client.search(args.sosl), out)
    elif args.command == "limits":
        _dump(client.limits(), out)
    else:
        raise ValueError(f"unknown command {args.command!r}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_format)

    if args.credentials:
        credentials = load_credentials(args.credentials)
    else:
        credentials = settings.credentials()

    try:
        auth = authenticate(credentials, args.login_url, settings.timeout)
        with SalesforceClient(auth, args.api_version, settings.timeout) as client:
            run(args, client)
    except (SalesforceError, httpx.HTTPError) as exc:
        logger.error("%s", exc)
        return 1
    return 0
