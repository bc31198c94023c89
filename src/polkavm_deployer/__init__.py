"""
polkavm-deployer: compile a Solidity contract to PolkaVM, deploy it and record the result
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeployConfig
from .exceptions import (
    CompilationError,
    DeploymentError,
    FatalInputError,
    PartialDeploymentError,
    PersistenceError,
    PipelineError,
)
from .pipeline import deploy_contract
from .toolchain import SubprocessToolchainRunner, ToolchainRunner
from .types import CompiledArtifact, DeploymentRecord, DeploymentResult, SourceUnit

try:
    __version__ = version("polkavm-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "deploy_contract",
    "DeployConfig",
    "ToolchainRunner",
    "SubprocessToolchainRunner",
    "SourceUnit",
    "CompiledArtifact",
    "DeploymentResult",
    "DeploymentRecord",
    "PipelineError",
    "FatalInputError",
    "CompilationError",
    "DeploymentError",
    "PersistenceError",
    "PartialDeploymentError",
]
