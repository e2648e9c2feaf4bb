"""Command-line helper for a DMC instance.

This module serves as a CLI wrapper around the dmc.core.api facade.
Connection settings come from dmc.config.settings.load_settings
(environment and /run/secrets) and can be overridden with flags.
"""
from __future__ import annotations
import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from dmc.config.settings import DmcConfig, load_settings
from dmc.core.api import DMC, DmcConfigError, DmcConnectionError
from dmc.core.info_report import render_info_html
from dmc.core.models import SubscriptionMode


def _parse_attributes(pairs: list[str] | None) -> dict:
    attributes = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Attribute must be NAME=VALUE, got '{pair}'")
        attributes[name] = value
    return attributes


def _print_result(result) -> None:
    if isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2, default=str))
    else:
        print(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Digital Messaging Center helper")
    parser.add_argument("--soap-url", help="WSDL URL (default: DMC_SOAP_URL)")
    parser.add_argument("--login", help="API login (default: DMC_LOGIN)")
    parser.add_argument("--password", help="API password (default: /run/secrets/dmc_password or DMC_PASSWORD)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (default: DMC_TIMEOUT)")
    parser.add_argument("--fault-trace", action="store_true", help="Log a report for every SOAP fault")
    parser.add_argument("--benchmark", action="store_true", help="Log elapsed time on exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="cmd")

    info = sub.add_parser("info", help="Render the system information page as HTML")
    info.add_argument("--output", help="Write HTML to this file instead of stdout")

    sub.add_parser("version", help="Print API version and build")
    sub.add_parser("functions", help="List remote operations")

    gu = sub.add_parser("get-user")
    gu.add_argument("--email", required=True)

    cu = sub.add_parser("create-user")
    cu.add_argument("--email", required=True)
    cu.add_argument("--mobile")
    cu.add_argument("--attribute", action="append", metavar="NAME=VALUE")

    du = sub.add_parser("delete-user")
    du.add_argument("--email", required=True)

    ss = sub.add_parser("subscribe")
    ss.add_argument("--email", required=True)
    ss.add_argument("--group-id", required=True)
    ss.add_argument("--mode", default=SubscriptionMode.OPT_IN.value,
                    choices=[mode.value for mode in SubscriptionMode])

    su = sub.add_parser("unsubscribe")
    su.add_argument("--email", required=True)
    su.add_argument("--group-id", required=True)

    sm = sub.add_parser("memberships")
    sm.add_argument("--email", required=True)

    vm = sub.add_parser("validate-message")
    vm.add_argument("--message-id", required=True)

    sd = sub.add_parser("send-message")
    sd.add_argument("--message-id", required=True)
    sd.add_argument("--user-id", required=True)
    sd.add_argument("--transaction-id", help="Send as transactional message with this reference")

    return parser


def run(dmc: DMC, args: argparse.Namespace) -> int:
    """Execute one command against the facade; return the exit code."""
    if args.cmd == "info":
        html = render_info_html(dmc.dmc_info())
        if args.output:
            Path(args.output).write_text(html, encoding="utf-8")
            print(f"[info] Written to {args.output}", file=sys.stderr)
        else:
            print(html)
        return 0

    if args.cmd == "version":
        api_version = dmc.api_version()
        build = dmc.ecm_version()
        if not api_version:
            print("[version] DMC API unreachable", file=sys.stderr)
            return 1
        print(f"API {api_version} (build {build})")
        return 0

    if args.cmd == "functions":
        result = dmc.functions()
    elif args.cmd == "get-user":
        result = dmc.get_user_by_email(args.email)
    elif args.cmd == "create-user":
        try:
            attributes = _parse_attributes(args.attribute)
        except argparse.ArgumentTypeError as e:
            print(f"[create-user] Error: {e}", file=sys.stderr)
            return 2
        result = dmc.create_user(args.email, args.mobile, attributes or None)
    elif args.cmd == "delete-user":
        result = dmc.delete_user_by_email(args.email)
    elif args.cmd == "subscribe":
        result = dmc.subscribe_member_by_email(args.email, args.group_id, args.mode)
    elif args.cmd == "unsubscribe":
        result = dmc.unsubscribe_member_by_email(args.email, args.group_id)
    elif args.cmd == "memberships":
        result = dmc.find_all_memberships_by_email(args.email)
    elif args.cmd == "validate-message":
        result = dmc.validate_message(args.message_id)
    elif args.cmd == "send-message":
        if args.transaction_id:
            result = dmc.send_transactional_message(args.message_id, args.transaction_id, args.user_id)
        else:
            result = dmc.send_single_message(args.message_id, args.user_id)
    else:
        return 2

    if result is False:
        print(f"[{args.cmd}] Operation failed (use --fault-trace for details)", file=sys.stderr)
        return 1
    _print_result(result)
    return 0


def build_config(args: argparse.Namespace) -> DmcConfig:
    """Load settings and apply command-line overrides.

    Raises:
        DmcConfigError: If the endpoint or login is missing, or DMC_TIMEOUT
            is not a number
    """
    config = load_settings(soap_url=args.soap_url, login=args.login)
    overrides = {}
    if args.password is not None:
        overrides["password"] = args.password
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.fault_trace:
        overrides["fault_trace"] = True
    if args.benchmark:
        overrides["benchmark"] = True
    return dataclasses.replace(config, **overrides)


def main() -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.cmd:
        parser.print_help()
        return

    try:
        config = build_config(args)
    except DmcConfigError as e:
        print(f"[dmc] Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        dmc = DMC.from_config(config)
    except DmcConnectionError as e:
        print(f"[dmc] Error: {e}", file=sys.stderr)
        sys.exit(1)

    with dmc:
        code = run(dmc, args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
