"""JSON-RPC helpers for confirming deployments."""

from typing import Any, List

import requests

from .exceptions import DeploymentError
from .types import DeploymentResult

# Code returned by eth_getCode for an address without a contract
EMPTY_CODE = ("", "0x", "0x0")


def rpc_request(rpc_url: str, method: str, params: List[Any], timeout: float = 30) -> Any:
    """
    Make a single JSON-RPC call.

    Args:
        rpc_url: RPC endpoint URL
        method: JSON-RPC method name
        params: Method parameters
        timeout: Request timeout in seconds

    Returns:
        The "result" member of the response

    Raises:
        DeploymentError: On network errors, non-200 responses, RPC errors or
            responses without a result
    """
    try:
        response = requests.post(
            rpc_url,
            json={"jsonrpc": "2.0", "method": method, "params": params, "id": 1},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise DeploymentError(f"Network error during RPC call: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise DeploymentError(f"RPC request failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise DeploymentError(f"RPC response is not JSON: {e}") from e

    # Check for RPC errors
    if "error" in result:
        raise DeploymentError(f"RPC error: {result['error']}")

    if "result" not in result:
        raise DeploymentError(f"RPC response for {method} has no result")

    return result["result"]


def get_code(address: str, rpc_url: str) -> str:
    """Return the hex-encoded code stored at address on the latest block."""
    return rpc_request(rpc_url, "eth_getCode", [address, "latest"])


def confirm_contract_code(result: DeploymentResult, rpc_url: str) -> None:
    """
    Check that code exists at a freshly deployed contract address.

    Raises:
        DeploymentError: If the address holds no code or the RPC call fails
    """
    code = get_code(result.contract_address, rpc_url)
    if code in EMPTY_CODE:
        raise DeploymentError(
            f"No contract code found at {result.contract_address} "
            f"(transaction {result.transaction_hash})"
        )
