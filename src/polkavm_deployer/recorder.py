"""ABI extraction and deployment record persistence for polkavm-deployer."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .config import DeployConfig
from .exceptions import CompilationError, PersistenceError
from .paths import get_project_paths
from .solidity import read_source_text, resolve_contract_name
from .toolchain import ToolchainRunner
from .types import DeploymentRecord, DeploymentResult, SourceUnit

logger = logging.getLogger(__name__)


def select_abi(
    output: Dict[str, Any], source_name: str, contract_name: str
) -> List[Dict[str, Any]]:
    """
    Pick one contract's ABI out of solc standard-JSON output.

    Args:
        output: Standard-JSON compiler output
        source_name: Source unit key used in the compiler input
        contract_name: Contract to select

    Returns:
        The contract's ABI

    Raises:
        CompilationError: If the output holds no contracts for the source,
            or not the requested one
    """
    contracts = output.get("contracts", {}).get(source_name, {})
    if not contracts:
        raise CompilationError(f"no contract found in output for {source_name}")

    if contract_name not in contracts:
        raise CompilationError(
            f"Contract '{contract_name}' not found in output for {source_name} "
            f"(found: {', '.join(contracts)})"
        )

    try:
        return contracts[contract_name]["abi"]
    except KeyError as e:
        raise CompilationError(f"Compiler output has no ABI for '{contract_name}'") from e


def extract_abi(source: SourceUnit, runner: ToolchainRunner) -> List[Dict[str, Any]]:
    """
    Derive a contract's ABI through an interface-only compilation.

    The source is read from disk and passed to the compiler inline.

    Raises:
        CompilationError: If the source cannot be read or compiled, or the
            output does not contain exactly the declared contract
    """
    source_text = read_source_text(source)

    contract_name = resolve_contract_name(source_text, source.name)

    logger.info("Extracting ABI for %s...", contract_name)
    output = runner.compile_interface(source.name, source_text)

    return select_abi(output, source.name, contract_name)


def write_deployment_record(record: DeploymentRecord, record_path: Path) -> None:
    """
    Write a deployment record as indented JSON, replacing any previous record.

    Raises:
        PersistenceError: If the record cannot be serialized or written
    """
    try:
        content = json.dumps(record.to_dict(), indent=2)
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Could not serialize deployment record: {e}") from e

    try:
        with open(record_path, "w") as f:
            f.write(content)
            f.write("\n")
    except OSError as e:
        raise PersistenceError(f"Could not write {record_path}: {e}") from e


def record_deployment(
    source: SourceUnit,
    result: DeploymentResult,
    runner: ToolchainRunner,
    config: DeployConfig,
) -> DeploymentRecord:
    """
    Attach the ABI to a deployment result and persist it.

    Returns:
        The DeploymentRecord that was written

    Raises:
        CompilationError: If the ABI cannot be extracted
        PersistenceError: If the record cannot be written
    """
    abi = extract_abi(source, runner)
    record = DeploymentRecord.from_result(result, abi)

    _, _, record_path = get_project_paths(source.project_dir, config)
    write_deployment_record(record, record_path)
    logger.info("Wrote %s", record_path)

    return record
