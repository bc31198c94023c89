"""Deployment configuration for polkavm-deployer."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import (
    ARTIFACT_EXTENSION,
    COMPILER_PACKAGE,
    DEFAULT_RPC_URL,
    MANIFEST_FILENAME,
    RECORD_FILENAME,
    SOLC_VERSION,
    SOURCE_FILENAME,
)


@dataclass(frozen=True)
class DeployConfig:
    """
    Settings for a single pipeline run.

    Every field has a default matching the fixed Passet Hub setup, so
    ``DeployConfig()`` reproduces the standard behaviour. Tests override
    fields to point at fake endpoints or alternative file names.

    Attributes:
        rpc_url: Ethereum JSON-RPC endpoint the creation transaction is sent to
        source_filename: Contract source file inside the project directory
        record_filename: Deployment record written to the project directory
        manifest_filename: npm package manifest required by the toolchain
        artifact_extension: Extension of the compiled PolkaVM binary
        compiler_package: npm package providing the PolkaVM compiler
        solc_version: Pinned solc version for both compilation passes
        broadcast_timeout: Seconds to wait for the broadcaster (None waits forever)
        confirm_deployment: Check via eth_getCode that code exists after deploying
    """

    rpc_url: str = DEFAULT_RPC_URL
    source_filename: str = SOURCE_FILENAME
    record_filename: str = RECORD_FILENAME
    manifest_filename: str = MANIFEST_FILENAME
    artifact_extension: str = ARTIFACT_EXTENSION
    compiler_package: str = COMPILER_PACKAGE
    solc_version: str = SOLC_VERSION
    broadcast_timeout: Optional[float] = None
    confirm_deployment: bool = False

    @property
    def toolchain_packages(self) -> Tuple[str, ...]:
        """npm packages installed into the project before compiling."""
        return (self.compiler_package, f"solc@{self.solc_version}")
