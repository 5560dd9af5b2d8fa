"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing and execution
"""
import argparse
import json
import os
import sys
import time
from typing import Any, List, Optional

from spot_reconciler._version import __version__
from spot_reconciler.bootstrap import Application
from spot_reconciler.domain.base.exceptions import DomainException


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "spot-reconciler",
        description="Spot Reconciler - keep tracked EC2 spot requests in step with AWS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run-once                        # Reconcile every region once
  %(prog)s run                             # Reconcile on an interval until interrupted
  %(prog)s pollable --region us-east-1     # List tracked spot requests in a region
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set logging level')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    subparsers.required = True

    subparsers.add_parser('run-once', help='Run a single reconciliation pass')

    run_parser = subparsers.add_parser('run', help='Run reconciliation passes on an interval')
    run_parser.add_argument('--interval', type=_non_negative_float,
                            help='Seconds between passes (overrides configuration)')

    pollable_parser = subparsers.add_parser('pollable', help='List tracked spot request IDs')
    pollable_parser.add_argument('--region', required=True, help='Region to list')

    return parser.parse_args(argv)


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return number


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2))


def execute_command(args: argparse.Namespace, app: Application) -> int:
    """Execute the parsed command and return the process exit code."""
    if args.command == 'run-once':
        result = app.poller.run_pass()
        _print(result.to_dict())
        return 0 if result.succeeded else 1

    if args.command == 'run':
        poller = app.poller
        if args.interval is not None:
            poller.poll_interval = args.interval
        poller.start()
        try:
            while poller.running:
                time.sleep(1)
        except KeyboardInterrupt:
            app.logger.info("Interrupted, stopping spot request poller")
        finally:
            poller.stop()
        return 0

    if args.command == 'pollable':
        _print({
            "region": args.region,
            "ids": app.state_store.list_pollable(args.region),
        })
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    try:
        app = Application(args.config, log_level=args.log_level)
        return execute_command(args, app)
    except DomainException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
