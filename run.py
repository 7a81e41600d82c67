#!/usr/bin/env python3
"""
Operator Verifier - Entry Point

Drives the cert-manager operator's override scenarios against a cluster and
checks that the operand deployments reflect each change.

Usage:
    python run.py [--operand-namespace NAMESPACE] [--scenario NAME] [--in-cluster]
"""

import argparse
import logging
import sys

from kubernetes import config

from operator_verifier.config import (
    OPERATOR_NAME,
    OPERAND_NAMESPACE,
    POLL_INTERVAL_SECONDS,
    POLL_TIMEOUT_SECONDS,
)
from operator_verifier.context import VerifierContext
from operator_verifier.errors import VerifierError
from operator_verifier.scenarios import OverridesRunner, default_scenarios
from operator_verifier.store import ResourceStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Operator Verifier - Check that operator overrides reach the operand deployments"
    )
    parser.add_argument(
        "--operator-name",
        default=OPERATOR_NAME,
        help=f"Name of the operator object (default: {OPERATOR_NAME})"
    )
    parser.add_argument(
        "--operand-namespace", "-n",
        default=OPERAND_NAMESPACE,
        help=f"Namespace of the operand deployments (default: {OPERAND_NAMESPACE})"
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=POLL_INTERVAL_SECONDS,
        help="Seconds between polls"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=POLL_TIMEOUT_SECONDS,
        help="Seconds to wait for each condition"
    )
    parser.add_argument(
        "--scenario", "-s",
        action="append",
        default=[],
        help="Run only the named scenario (repeatable)"
    )
    parser.add_argument(
        "--in-cluster",
        action="store_true",
        help="Use in-cluster config (for running inside Kubernetes)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )

    args = parser.parse_args()

    # Set log level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Load Kubernetes configuration
    try:
        if args.in_cluster:
            config.load_incluster_config()
            logger.info("Loaded in-cluster configuration")
        else:
            config.load_kube_config()
            logger.info("Loaded kubeconfig from default location")
    except config.ConfigException as e:
        logger.error(f"Failed to load Kubernetes config: {e}")
        sys.exit(1)

    scenarios = default_scenarios()
    if args.scenario:
        known = {s.name for s in scenarios}
        unknown = [name for name in args.scenario if name not in known]
        if unknown:
            parser.error(f"unknown scenario(s): {', '.join(unknown)}")
        scenarios = [s for s in scenarios if s.name in args.scenario]

    ctx = VerifierContext(
        store=ResourceStore(),
        operator_name=args.operator_name,
        operand_namespace=args.operand_namespace,
        poll_interval=args.interval,
        poll_timeout=args.timeout,
    )
    runner = OverridesRunner(ctx)

    try:
        results = runner.run(scenarios)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)
    except VerifierError as e:
        logger.error(f"Verifier error: {e}")
        sys.exit(1)

    if any(r["status"] != "passed" for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
