"""CLI entry point for the end-to-end test runner."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from e2e_runner.dedup import FailureNotificationCache
from e2e_runner.models.config import RunnerConfig
from e2e_runner.notifiers.loading import (
    NotifierNotFoundError,
    available_notifiers,
    load_notifier_manifest,
)
from e2e_runner.notifiers.manifest import NotifierManifest
from e2e_runner.orchestrator import TestOrchestrator
from e2e_runner.registry import TestRegistry, default_registry
from e2e_runner.suite_loader import load_allow_list, load_suites


async def run(
    config: RunnerConfig,
    registry: TestRegistry,
    allow_list: Sequence[str],
    manifest: NotifierManifest[Any],
    notifier_config: BaseModel,
) -> int:
    """Run the test loop and return exit code."""
    log = logging.getLogger("e2e_runner")

    selection = (
        f"test {config.single_test}"
        if config.single_test is not None
        else f"{len(allow_list)} test(s)"
    )
    if config.forever:
        log.info("Running %s forever", selection)
    else:
        log.info("Running %s %d time(s)", selection, config.runs)

    cache = FailureNotificationCache(silence_window=config.silence_window)

    async with manifest.notifier_factory(notifier_config) as notifier:
        orchestrator = TestOrchestrator(
            registry=registry,
            config=config,
            allow_list=allow_list,
            cache=cache,
            notifier=notifier if config.send_notifications else None,
        )
        summary = await orchestrator.run()

    if summary is None or not summary.has_failures:
        return 0
    return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Run options use the single-dash ``-x=VALUE`` form.
    """
    parser = argparse.ArgumentParser(
        description="Run end-to-end tests in a loop and alert on failures",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-n",
        dest="runs",
        type=int,
        default=0,
        metavar="N",
        help="Number of runs. Default = 0 (run continuously)",
    )
    parser.add_argument(
        "-t",
        dest="test_timeout",
        type=int,
        default=600,
        metavar="SECS",
        help="How long to wait for completion of an individual test. Default = 600",
    )
    parser.add_argument(
        "-d",
        dest="run_delay",
        type=int,
        default=3600,
        metavar="SECS",
        help="How long to wait after one full test run. Default = 3600",
    )
    parser.add_argument(
        "-a",
        dest="silence_hours",
        type=int,
        default=12,
        metavar="HOURS",
        help="How long to silence duplicate alerts for. Default = 12",
    )
    parser.add_argument(
        "-1",
        dest="single_test",
        default=None,
        metavar="TESTNAME",
        help="Run a single test rather than the full allow-list",
    )
    parser.add_argument(
        "-s",
        dest="send_notifications",
        action="store_false",
        help="Silent mode - don't send any notification when a test fails",
    )
    parser.add_argument(
        "-concurrent",
        dest="concurrent",
        action="store_true",
        help="Run all the tests concurrently",
    )
    parser.add_argument(
        "--suite",
        dest="suites",
        action="append",
        default=[],
        metavar="MODULE",
        help="Python module registering tests (repeatable)",
    )
    parser.add_argument(
        "--tests-file",
        type=Path,
        default=None,
        help="YAML allow-list of test names (default: every registered test)",
    )
    parser.add_argument(
        "--notifier",
        default="log",
        help=f"Notifier key, one of: {', '.join(available_notifiers())}",
    )
    parser.add_argument(
        "--notifier-config",
        default="{}",
        help="JSON configuration for the notifier",
    )
    parser.add_argument(
        "--target-url",
        default=None,
        help="Base URL of the service under test, used in reports",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point.

    All configuration is resolved before the first run; any problem prints
    usage and exits without running tests.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = RunnerConfig(
            runs=args.runs,
            test_timeout=args.test_timeout,
            run_delay=args.run_delay,
            silence_hours=args.silence_hours,
            single_test=args.single_test,
            send_notifications=args.send_notifications,
            concurrent=args.concurrent,
            target_url=args.target_url,
        )
    except ValidationError as e:
        parser.error(f"invalid options: {e}")

    try:
        load_suites(args.suites)
    except ImportError as e:
        parser.error(f"cannot import suite: {e}")

    if args.tests_file is not None:
        try:
            allow_list: Sequence[str] = load_allow_list(args.tests_file).tests
        except (OSError, ValueError, yaml.YAMLError) as e:
            parser.error(f"cannot load tests file {args.tests_file}: {e}")
    else:
        allow_list = default_registry.names()

    try:
        manifest = load_notifier_manifest(args.notifier)
    except (NotifierNotFoundError, TypeError) as e:
        parser.error(str(e))

    try:
        notifier_config = manifest.config_cls(**json.loads(args.notifier_config))
    except (ValueError, TypeError) as e:
        parser.error(f"invalid notifier config: {e}")

    exit_code = asyncio.run(
        run(
            config=config,
            registry=default_registry,
            allow_list=allow_list,
            manifest=manifest,
            notifier_config=notifier_config,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
