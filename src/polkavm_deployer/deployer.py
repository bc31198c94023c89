"""Contract-creation transaction submission for polkavm-deployer."""

import json
import logging

from .config import DeployConfig
from .exceptions import DeploymentError
from .toolchain import ToolchainRunner
from .types import CompiledArtifact, DeploymentResult

logger = logging.getLogger(__name__)

# Receipt status of a reverted transaction
REVERTED_STATUS = "0x0"


def encode_creation_data(bytecode: bytes) -> str:
    """
    Encode binary contract code for the broadcaster's --create argument.

    Args:
        bytecode: Raw compiled contract code

    Returns:
        Lowercase hex string without a 0x prefix
    """
    return bytecode.hex()


def parse_broadcast_output(output: str) -> DeploymentResult:
    """
    Parse the broadcaster's JSON receipt.

    Args:
        output: Standard output of the broadcaster

    Returns:
        DeploymentResult with contract address and transaction hash

    Raises:
        DeploymentError: If output is not JSON, lacks the required fields,
            or reports a reverted transaction
    """
    try:
        receipt = json.loads(output)
    except json.JSONDecodeError as e:
        raise DeploymentError(f"Could not parse broadcast output as JSON: {e}") from e

    if not isinstance(receipt, dict):
        raise DeploymentError("Broadcast output is not a JSON object")

    if receipt.get("status") == REVERTED_STATUS:
        raise DeploymentError(
            f"Contract creation reverted (transaction {receipt.get('transactionHash')})"
        )

    fields = {}
    for key in ("contractAddress", "transactionHash"):
        value = receipt.get(key)
        if not isinstance(value, str) or not value:
            raise DeploymentError(f"Broadcast output is missing '{key}'")
        fields[key] = value

    return DeploymentResult(
        contract_address=fields["contractAddress"],
        transaction_hash=fields["transactionHash"],
    )


def deploy_artifact(
    artifact: CompiledArtifact,
    private_key: str,
    runner: ToolchainRunner,
    config: DeployConfig,
) -> DeploymentResult:
    """
    Submit a compiled artifact as a contract-creation transaction.

    Never retried: resubmitting a creation transaction can deploy twice.

    Args:
        artifact: Compiled PolkaVM binary
        private_key: Signing key (never logged or persisted)
        runner: Toolchain providing the broadcaster
        config: Deployment configuration (RPC endpoint)

    Returns:
        DeploymentResult parsed from the broadcaster's receipt

    Raises:
        DeploymentError: If the key is empty, the broadcast fails, or its
            output cannot be parsed
    """
    if not private_key:
        raise DeploymentError("A private key is required to deploy")

    creation_data = encode_creation_data(artifact.bytecode)

    logger.info("Deploying contract to %s...", config.rpc_url)
    output = runner.broadcast(config.rpc_url, private_key, creation_data)

    return parse_broadcast_output(output)
