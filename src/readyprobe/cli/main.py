# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""readyprobe CLI."""

from __future__ import annotations

import argparse
import json
import signal
import sys
import threading
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import InvalidSpecError, TransportError
from ..log import setup_logging
from ..models import Endpoint, HTTPGetAction, PollOutcome, PollResult, PortSpec, ProbeSpec, TCPSocketAction
from ..poller import PollPolicy
from ..runtime import ReadinessChecker

EXIT_READY = 0
EXIT_NOT_READY = 1
EXIT_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Poll an endpoint until its readiness probe passes")
    parser.add_argument("host", help="Endpoint host name or address")
    parser.add_argument("port", type=int, help="Endpoint port")
    kind = parser.add_mutually_exclusive_group()
    kind.add_argument("--path", default="/", help="HTTP GET path to probe (default: /)")
    kind.add_argument("--tcp", action="store_true", help="Probe with a TCP connect instead of HTTP GET")
    kind.add_argument(
        "--probe-file",
        help="JSON file holding a readinessProbe mapping (httpGet or tcpSocket)",
    )
    parser.add_argument("--scheme", default=None, help="HTTP scheme for the GET probe (default: HTTP)")
    parser.add_argument("--max-attempts", type=int, default=None, help="Attempt budget (default: 60)")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between attempts (default: 1)")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a human-friendly summary")
    parser.add_argument("--log-level", default=None, help="Logging level (default: READYPROBE_LOG_LEVEL or WARNING)")
    return parser


def _load_spec(args: argparse.Namespace) -> ProbeSpec:
    if args.probe_file:
        with open(args.probe_file, encoding="utf-8") as handle:
            try:
                data: Any = json.load(handle)
            except json.JSONDecodeError as exc:
                raise InvalidSpecError(f"probe file is not valid JSON: {exc}") from exc
        if isinstance(data, dict) and "readinessProbe" in data:
            data = data["readinessProbe"]
        return ProbeSpec.from_mapping(data)
    if args.tcp:
        return ProbeSpec(tcp_socket=TCPSocketAction(port=PortSpec.from_int(args.port)))
    return ProbeSpec(http_get=HTTPGetAction(port=PortSpec.from_int(args.port), path=args.path, scheme=args.scheme or "HTTP"))


def _policy(args: argparse.Namespace, settings: ProbeSettings) -> PollPolicy:
    max_attempts = args.max_attempts if args.max_attempts is not None else settings.max_attempts
    interval = args.interval if args.interval is not None else settings.interval
    return PollPolicy(max_attempts=max(1, max_attempts), interval=max(0.0, interval))


def _pretty_print(result: PollResult) -> None:
    print(f"Endpoint: {result.endpoint}")
    print(f"Outcome: {result.outcome.value}")
    print(f"Attempts: {result.attempts}")
    print(f"Elapsed: {result.elapsed:.1f}s")
    if result.error is not None:
        print(f"Error: {result.error}")
        if isinstance(result.error, TransportError) and result.error.reason:
            print(f"Reason: {result.error.reason}")


def exit_code_for(result: PollResult) -> int:
    if result.outcome is PollOutcome.READY:
        return EXIT_READY
    if result.outcome is PollOutcome.FAILED:
        return EXIT_FAILED
    return EXIT_NOT_READY


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.scheme is not None and (args.tcp or args.probe_file):
        parser.error("--scheme only applies to the --path HTTP GET probe")
    setup_logging(args.log_level)

    settings = load_probe_settings()
    endpoint = Endpoint(fqdn=args.host, port=args.port)
    try:
        spec = _load_spec(args)
    except (OSError, InvalidSpecError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILED

    cancel = threading.Event()
    previous_handler = None
    if threading.current_thread() is threading.main_thread():
        previous_handler = signal.signal(signal.SIGINT, lambda _signum, _frame: cancel.set())
    try:
        with ReadinessChecker(settings=settings, policy=_policy(args, settings)) as checker:
            result = checker.check(spec, endpoint, cancel=cancel)
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _pretty_print(result)
    return exit_code_for(result)


if __name__ == "__main__":
    raise SystemExit(main())
