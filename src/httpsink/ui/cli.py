from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from httpsink.adapters.manifest import ManifestError, render_status
from httpsink.adapters.sqlalchemy import StartupError
from httpsink.app import open_resource, reconcile_once
from httpsink.config import ConfigurationError, configure_logging, env_path
from httpsink.domain.errors import ReconcileError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from httpsink.app import ConnectedResource

log = logging.getLogger(__name__)

PROVIDER_CONFIG_ENV = "HTTPSINK_PROVIDER_CONFIG"


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Timeout must be positive")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync HTTP responses into keyed stores from HttpRequest manifests"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("reconcile", "Observe the resource and create or update the sink when needed"),
        ("observe", "Report whether the sink exists and matches the remote content"),
        ("delete", "Remove the sink entry"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("manifest", type=Path, help="Path to an HttpRequest JSON manifest")
        sub.add_argument(
            "--provider-config",
            type=Path,
            default=None,
            help=f"JSON file of provider configs (defaults to ${PROVIDER_CONFIG_ENV})",
        )
        sub.add_argument(
            "--timeout",
            type=_positive_float,
            default=None,
            help="Deadline in seconds for the whole pass",
        )

    return parser.parse_args(list(argv))


def _emit(payload: dict[str, object]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))  # noqa: T201


def _run_command(command: str, connected: ConnectedResource) -> dict[str, object]:
    resource = connected.resource
    reconciler = connected.reconciler
    context = connected.context

    if command == "reconcile":
        outcome = reconcile_once(resource, reconciler, context=context)
        payload: dict[str, object] = {
            "action": str(outcome.action),
            "exists": outcome.observation.resource_exists,
            "upToDate": outcome.observation.resource_up_to_date,
        }
        if outcome.sync is not None:
            payload["mimeType"] = outcome.sync.mime_type
            payload["sha1"] = outcome.sync.digest
    elif command == "observe":
        observation = reconciler.observe(resource, context=context)
        payload = {
            "exists": observation.resource_exists,
            "upToDate": observation.resource_up_to_date,
        }
    elif command == "delete":
        reconciler.delete(resource, context=context)
        payload = {"deleted": True}
    else:
        raise ValueError(f"Unsupported command: {command}")

    payload["name"] = resource.name
    payload["status"] = render_status(resource)
    return payload


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    provider_config = parsed_args.provider_config
    if provider_config is None:
        env_value = env_path(PROVIDER_CONFIG_ENV)
        provider_config = Path(env_value) if env_value else None

    try:
        connected = open_resource(
            parsed_args.manifest,
            provider_config_path=provider_config,
            timeout_seconds=parsed_args.timeout,
        )
    except (ManifestError, ConfigurationError, StartupError, SQLAlchemyError):
        log.exception("Cannot open %s", parsed_args.manifest)
        sys.exit(2)

    try:
        payload = _run_command(parsed_args.command, connected)
    except ReconcileError:
        log.exception("Reconciliation failed for %s", connected.resource.name)
        sys.exit(1)

    _emit(payload)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
