"""External toolchain invocation for polkavm-deployer."""

import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

import solcx
from solcx.exceptions import SolcError, SolcInstallationError, UnsupportedVersionError

from .config import DeployConfig
from .constants import COMPILER_PACKAGE, SOLC_VERSION
from .exceptions import CompilationError, DeploymentError

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"


class ToolchainRunner(Protocol):
    """
    Capability interface for every external process the pipeline depends on.

    The pipeline only talks to the outside world through these methods, so a
    deterministic fake can stand in for npm, the PolkaVM compiler, solc and
    the broadcaster in tests.
    """

    def init_manifest(self, project_dir: Path) -> None:
        """Create a package manifest in project_dir."""
        ...

    def install(self, project_dir: Path, packages: Sequence[str]) -> None:
        """Install packages as local dependencies of project_dir."""
        ...

    def compile_binary(self, project_dir: Path, source_filename: str) -> None:
        """Compile source_filename, leaving a binary artifact in project_dir."""
        ...

    def compile_interface(self, source_name: str, source_text: str) -> Dict[str, Any]:
        """Compile inline source text and return the standard-JSON output (ABI only)."""
        ...

    def broadcast(self, rpc_url: str, private_key: str, creation_data: str) -> str:
        """Send a contract-creation transaction and return the broadcaster's JSON output."""
        ...


def build_interface_input(source_name: str, source_text: str) -> Dict[str, Any]:
    """
    Build a solc standard-JSON input requesting only ABI output.

    Args:
        source_name: Source unit key (e.g. "verifier.sol")
        source_text: Inline Solidity source

    Returns:
        Standard-JSON input dictionary
    """
    return {
        "language": "Solidity",
        "sources": {source_name: {"content": source_text}},
        "settings": {"outputSelection": {"*": {"*": ["abi"]}}},
    }


def _describe(args: Sequence[str], private_key: Optional[str] = None) -> str:
    """Render a command line for logging, hiding the key and abbreviating hex payloads."""
    shown: List[str] = []
    for arg in args:
        if private_key and arg == private_key:
            shown.append(REDACTED)
        elif len(arg) > 80:
            shown.append(f"<{len(arg)} chars>")
        else:
            shown.append(arg)
    return " ".join(shown)


def _error_output(e: subprocess.CalledProcessError) -> str:
    output = (e.stderr or e.stdout or "").strip()
    return output or f"exit status {e.returncode}"


class SubprocessToolchainRunner:
    """ToolchainRunner backed by npm/npx, cast and py-solc-x."""

    def __init__(
        self,
        compiler_package: str = COMPILER_PACKAGE,
        solc_version: str = SOLC_VERSION,
        broadcast_timeout: Optional[float] = None,
        npm: str = "npm",
        npx: str = "npx",
        cast: str = "cast",
    ):
        self.compiler_package = compiler_package
        self.solc_version = solc_version
        self.broadcast_timeout = broadcast_timeout
        self.npm = npm
        self.npx = npx
        self.cast = cast

    @classmethod
    def from_config(cls, config: DeployConfig) -> "SubprocessToolchainRunner":
        return cls(
            compiler_package=config.compiler_package,
            solc_version=config.solc_version,
            broadcast_timeout=config.broadcast_timeout,
        )

    def _run_tool(self, args: List[str], cwd: Path, capture: bool = True) -> None:
        logger.debug("Running %s in %s", _describe(args), cwd)
        try:
            subprocess.run(args, cwd=cwd, check=True, capture_output=capture, text=True)
        except subprocess.CalledProcessError as e:
            raise CompilationError(
                f"Command '{_describe(args)}' failed: {_error_output(e)}"
            ) from e
        except OSError as e:
            raise CompilationError(f"Could not run '{args[0]}': {e}") from e

    def init_manifest(self, project_dir: Path) -> None:
        self._run_tool([self.npm, "init", "-y"], cwd=project_dir)

    def install(self, project_dir: Path, packages: Sequence[str]) -> None:
        # Inherit stdout/stderr so npm progress reaches the caller
        self._run_tool([self.npm, "install", *packages], cwd=project_dir, capture=False)

    def compile_binary(self, project_dir: Path, source_filename: str) -> None:
        self._run_tool(
            [self.npx, self.compiler_package, "--bin", source_filename], cwd=project_dir
        )

    def _ensure_solc(self) -> None:
        installed = {str(v) for v in solcx.get_installed_solc_versions()}
        if self.solc_version not in installed:
            logger.info("Installing solc %s for ABI extraction...", self.solc_version)
            solcx.install_solc(self.solc_version)

    def compile_interface(self, source_name: str, source_text: str) -> Dict[str, Any]:
        try:
            self._ensure_solc()
            return solcx.compile_standard(
                build_interface_input(source_name, source_text),
                solc_version=self.solc_version,
                allow_empty=True,
            )
        except (SolcError, SolcInstallationError, UnsupportedVersionError, OSError) as e:
            raise CompilationError(f"Interface compilation failed: {e}") from e

    def broadcast(self, rpc_url: str, private_key: str, creation_data: str) -> str:
        args = [
            self.cast,
            "send",
            "--rpc-url",
            rpc_url,
            "--private-key",
            private_key,
            "--create",
            creation_data,
            "--json",
        ]
        logger.debug("Running %s", _describe(args, private_key))

        # The command line carries the private key, so no exception below is
        # chained to the subprocess error.
        try:
            result = subprocess.run(
                args,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.broadcast_timeout,
            )
        except subprocess.CalledProcessError as e:
            output = _error_output(e)
            if private_key:
                output = output.replace(private_key, REDACTED)
            raise DeploymentError(f"Broadcast failed: {output}") from None
        except subprocess.TimeoutExpired:
            raise DeploymentError(
                f"Broadcast timed out after {self.broadcast_timeout} seconds"
            ) from None
        except OSError as e:
            raise DeploymentError(f"Could not run '{self.cast}': {e.strerror}") from None

        return result.stdout
