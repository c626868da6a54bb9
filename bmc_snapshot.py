#!/usr/bin/env python3
"""
BMC Snapshot - collect a normalized hardware record from one BMC.

Talks to the BMC in its native dialect (Supermicro ipmi.cgi XML, HP
Onboard Administrator SOAP) and prints one snapshot:
- Blade or Discrete record for server BMCs
- Chassis record for enclosure managers

Usage:
    python bmc_snapshot.py --host 10.0.0.5                  # Uses .env credentials
    python bmc_snapshot.py --host 10.0.0.5 --type c7000     # HP c7000 OA
    python bmc_snapshot.py --format json                    # Output as JSON
    python bmc_snapshot.py --secure-tls --ca-bundle ca.pem  # Verify the BMC certificate
"""

import argparse
import logging
import sys
from typing import List, Optional

from bmc_inventory.config import AppConfig, BmcConfig, load_environment, setup_logging, validate_config
from bmc_inventory.errors import BmcError
from bmc_inventory.formatters import SnapshotFormatter
from bmc_inventory.repositories import ProviderFactory
from bmc_inventory.services import SnapshotService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=AppConfig.APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Snapshot the BMC configured in .env
  python bmc_snapshot.py

  # Snapshot a specific Supermicro BMC
  python bmc_snapshot.py --host 10.0.0.5 --username ADMIN --password secret

  # Snapshot an HP c7000 enclosure as JSON
  python bmc_snapshot.py --host oa.example.com --type c7000 --json

  # Verbose logging (includes wire traces)
  python bmc_snapshot.py --verbose
        """
    )

    parser.add_argument("--host", help="BMC address (default: BMC_HOST)")
    parser.add_argument("--username", "-u", help="BMC username (default: BMC_USERNAME)")
    parser.add_argument("--password", "-p", help="BMC password (default: BMC_PASSWORD)")

    parser.add_argument(
        "--type", "-t",
        choices=list(BmcConfig.SUPPORTED_TYPES),
        help="BMC dialect (default: BMC_TYPE or supermicrox)"
    )

    parser.add_argument(
        "--secure-tls",
        action="store_true",
        help="Verify the BMC TLS certificate"
    )

    parser.add_argument(
        "--ca-bundle",
        help="PEM file with trusted CAs (implies --secure-tls)"
    )

    parser.add_argument(
        "--format", "-f",
        choices=["list", "table", "json"],
        default=AppConfig.DEFAULT_OUTPUT_FORMAT,
        help="Output format: list (default), table, or json"
    )

    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON (shortcut for --format json)"
    )

    parser.add_argument(
        "--env-file", "-e",
        help="Path to .env file with credentials"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"{AppConfig.APP_NAME} {AppConfig.APP_VERSION}"
    )

    return parser


def apply_arguments(args: argparse.Namespace) -> None:
    """Command line values override the environment"""
    if args.host:
        BmcConfig.HOST = args.host
    if args.username:
        BmcConfig.USERNAME = args.username
    if args.password:
        BmcConfig.PASSWORD = args.password
    if args.type:
        BmcConfig.TYPE = args.type
    if args.secure_tls or args.ca_bundle:
        BmcConfig.SECURE_TLS = True
    if args.ca_bundle:
        BmcConfig.CA_BUNDLE = args.ca_bundle


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    # Load .env file
    if args.env_file:
        load_environment(args.env_file)
        BmcConfig.reload()

    apply_arguments(args)

    try:
        validate_config()
    except ValueError as e:
        logger.error(str(e))
        print(f"\n❌ {e}")
        print("\nPlease check your .env configuration or command line arguments.")
        return 1

    provider = ProviderFactory.create_provider(
        BmcConfig.TYPE,
        BmcConfig.get_target(),
        timeout=AppConfig.API_TIMEOUT,
        always_login=AppConfig.RELOGIN_EACH_CALL,
    )

    print(f"\n🔍 Collecting snapshot from {BmcConfig.HOST} ({BmcConfig.TYPE})\n")

    try:
        with provider:
            snapshot = SnapshotService(provider).snapshot()
    except BmcError as e:
        logger.error(f"Snapshot failed: {e}")
        print(f"\n❌ Snapshot failed: {e}")
        return 1

    # Format and display results
    output_format = "json" if args.json else args.format
    print(SnapshotFormatter(output_format=output_format).format(snapshot))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nSnapshot cancelled by user.")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\n❌ Unexpected error: {e}")
        sys.exit(1)
