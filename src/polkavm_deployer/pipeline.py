"""Compile, deploy and record pipeline for polkavm-deployer."""

import logging
from pathlib import Path
from typing import Optional, Union

from .compiler import compile_artifact
from .config import DeployConfig
from .deployer import deploy_artifact
from .exceptions import PartialDeploymentError
from .project import prepare_project
from .recorder import record_deployment
from .rpc import confirm_contract_code
from .toolchain import SubprocessToolchainRunner, ToolchainRunner
from .types import DeploymentRecord

logger = logging.getLogger(__name__)


def deploy_contract(
    project_dir: Union[Path, str],
    private_key: str,
    config: Optional[DeployConfig] = None,
    runner: Optional[ToolchainRunner] = None,
) -> DeploymentRecord:
    """
    Compile the project's contract, deploy it and write deployment.json.

    Stages run strictly in order and the first failure aborts the run:
    project preparation, PolkaVM compilation, broadcast, then ABI extraction
    and persistence. Nothing is retried.

    Args:
        project_dir: Directory containing the contract source
        private_key: Key used to sign the creation transaction
        config: Deployment configuration (defaults to DeployConfig())
        runner: Toolchain implementation (defaults to SubprocessToolchainRunner)

    Returns:
        The DeploymentRecord written to the project directory

    Raises:
        FatalInputError: If the project directory or source file is missing
        CompilationError: If toolchain installation or compilation fails
        DeploymentError: If broadcasting or parsing its result fails
        PartialDeploymentError: If the contract was deployed but confirming or
            recording it failed
    """
    if config is None:
        config = DeployConfig()
    if runner is None:
        runner = SubprocessToolchainRunner.from_config(config)

    source = prepare_project(project_dir, runner, config)
    artifact = compile_artifact(source, runner, config)
    result = deploy_artifact(artifact, private_key, runner, config)

    logger.info("Contract created at %s", result.contract_address)

    try:
        if config.confirm_deployment:
            logger.info("Confirming contract code at %s...", result.contract_address)
            confirm_contract_code(result, config.rpc_url)
        return record_deployment(source, result, runner, config)
    except Exception as e:
        # Anything raised past this point leaves a live contract behind
        raise PartialDeploymentError(
            f"Contract deployed but not recorded: {e}", deployment=result
        ) from e
