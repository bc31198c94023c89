"""PolkaVM compilation and artifact lookup for polkavm-deployer."""

import logging
import re
import time
from pathlib import Path
from typing import List, Optional

from .config import DeployConfig
from .constants import ARTIFACT_MTIME_SLACK
from .exceptions import CompilationError
from .solidity import read_source_text, resolve_contract_name
from .toolchain import ToolchainRunner
from .types import CompiledArtifact, SourceUnit

logger = logging.getLogger(__name__)


def _matches_contract(path: Path, extension: str, contract_name: str) -> bool:
    """Whether an artifact name ends with contract_name and not a longer identifier."""
    base = path.name[: -len(extension)]
    return re.search(rf"(?<![A-Za-z0-9$]){re.escape(contract_name)}$", base) is not None


def find_binary_artifact(
    directory: Path,
    source_name: str,
    extension: str,
    newer_than: Optional[float] = None,
    contract_name: Optional[str] = None,
) -> Path:
    """
    Locate the compiled binary produced for a source file.

    Selection rules:
    - only regular files in the immediate directory listing ending with extension
    - if any of those mention the source stem, the others are ignored
    - if any of those are named after contract_name, the others are ignored
      (libraries compiled alongside the contract get their own artifacts)
    - files modified before newer_than (minus a small slack) are stale
      leftovers from an earlier run and are ignored

    Args:
        directory: Directory the compiler writes into
        source_name: Source file name (e.g. "verifier.sol")
        extension: Binary artifact extension (e.g. ".polkavm")
        newer_than: Unix time the compiler was started, or None to accept any file
        contract_name: Contract declared in the source, or None to skip name matching

    Returns:
        Path to the single matching artifact

    Raises:
        CompilationError: If no fresh artifact matches, or more than one does
    """
    candidates = sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(extension)
    )

    stem = Path(source_name).stem.lower()
    named = [p for p in candidates if stem in p.name.lower()]
    if named:
        candidates = named

    if contract_name:
        for_contract = [p for p in candidates if _matches_contract(p, extension, contract_name)]
        if for_contract:
            candidates = for_contract

    if newer_than is not None:
        fresh: List[Path] = []
        for path in candidates:
            if path.stat().st_mtime >= newer_than - ARTIFACT_MTIME_SLACK:
                fresh.append(path)
            else:
                logger.warning("Ignoring stale artifact %s", path.name)
        candidates = fresh

    if not candidates:
        raise CompilationError(f"No {extension} file found after compilation.")

    if len(candidates) > 1:
        names = ", ".join(p.name for p in candidates)
        raise CompilationError(
            f"Multiple {extension} files found after compilation ({names}); "
            "only one contract per source file is supported"
        )

    return candidates[0]


def compile_artifact(
    source: SourceUnit, runner: ToolchainRunner, config: DeployConfig
) -> CompiledArtifact:
    """
    Install the toolchain, compile the source and load the resulting binary.

    The source is read first to find the contract it declares, which picks
    the contract's binary out of any library binaries written next to it.

    Args:
        source: Contract source to compile
        runner: Toolchain used for installation and compilation
        config: Deployment configuration

    Returns:
        CompiledArtifact holding the binary's path and bytes

    Raises:
        CompilationError: If the source declares no single contract, or
            installation, compilation or artifact lookup fails
    """
    project_dir = source.project_dir
    contract_name = resolve_contract_name(read_source_text(source), source.name)

    logger.info("Installing %s...", ", ".join(config.toolchain_packages))
    runner.install(project_dir, config.toolchain_packages)

    logger.info("Compiling %s to PolkaVM bytecode...", source.name)
    started_at = time.time()
    runner.compile_binary(project_dir, source.name)

    artifact_path = find_binary_artifact(
        project_dir,
        source.name,
        config.artifact_extension,
        newer_than=started_at,
        contract_name=contract_name,
    )
    logger.debug("Selected artifact %s for %s", artifact_path, contract_name)

    try:
        bytecode = artifact_path.read_bytes()
    except OSError as e:
        raise CompilationError(f"Could not read {artifact_path}: {e}") from e

    if not bytecode:
        raise CompilationError(f"Compiled artifact {artifact_path.name} is empty")

    return CompiledArtifact(path=artifact_path, bytecode=bytecode)
