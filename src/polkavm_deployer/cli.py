"""Console entry point for polkavm-deployer."""

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .config import DeployConfig
from .constants import DEFAULT_RPC_URL, PRIVATE_KEY_ENV, RPC_URL_ENV
from .exceptions import PartialDeploymentError, PipelineError
from .paths import get_project_paths
from .pipeline import deploy_contract

logger = logging.getLogger("polkavm_deployer")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PARTIAL = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polkavm-deploy",
        description="Compile verifier.sol to PolkaVM, deploy it and write deployment.json",
    )
    parser.add_argument("project_dir", help="Directory containing verifier.sol")
    parser.add_argument(
        "--private-key",
        help=f"Signing key (defaults to ${PRIVATE_KEY_ENV}, also read from .env)",
    )
    parser.add_argument(
        "--rpc-url",
        help=f"RPC endpoint (defaults to ${RPC_URL_ENV} or {DEFAULT_RPC_URL})",
    )
    parser.add_argument(
        "--broadcast-timeout",
        type=float,
        help="Seconds to wait for the broadcaster before giving up",
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Check that contract code exists at the new address after deploying",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.broadcast_timeout is not None and args.broadcast_timeout <= 0:
        parser.error("--broadcast-timeout must be a positive number of seconds")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    load_dotenv(find_dotenv(usecwd=True))

    # Explicit argument takes precedence over the environment
    private_key = args.private_key or os.environ.get(PRIVATE_KEY_ENV)
    if not private_key:
        logger.error(
            "Deployment failed: no private key given; pass --private-key or set $%s",
            PRIVATE_KEY_ENV,
        )
        return EXIT_FAILURE

    rpc_url = args.rpc_url or os.environ.get(RPC_URL_ENV) or DEFAULT_RPC_URL
    config = DeployConfig(
        rpc_url=rpc_url,
        broadcast_timeout=args.broadcast_timeout,
        confirm_deployment=args.confirm,
    )

    try:
        record = deploy_contract(args.project_dir, private_key, config=config)
    except PartialDeploymentError as e:
        logger.error("Deployment failed: %s", e)
        if e.deployment is not None:
            logger.error("Contract Address: %s", e.deployment.contract_address)
            logger.error("Transaction Hash: %s", e.deployment.transaction_hash)
        return EXIT_PARTIAL
    except PipelineError as e:
        logger.error("Deployment failed: %s", e)
        return EXIT_FAILURE

    _, _, record_path = get_project_paths(Path(args.project_dir), config)
    logger.info("Contract deployed!")
    logger.info("Contract Address: %s", record.contract_address)
    logger.info("Transaction Hash: %s", record.transaction_hash)
    logger.info("Deployment record: %s", record_path)
    return EXIT_OK

