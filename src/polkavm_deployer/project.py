"""Project directory preparation for polkavm-deployer."""

import logging
from pathlib import Path
from typing import Union

from .config import DeployConfig
from .exceptions import FatalInputError
from .paths import get_project_paths, resolve_project_dir
from .toolchain import ToolchainRunner
from .types import SourceUnit

logger = logging.getLogger(__name__)


def locate_source(project_dir: Union[Path, str], config: DeployConfig) -> SourceUnit:
    """
    Find the contract source file in a project directory.

    Args:
        project_dir: Directory expected to contain the source file
        config: Deployment configuration

    Returns:
        SourceUnit for the source file

    Raises:
        FatalInputError: If the directory or the source file does not exist
    """
    root = resolve_project_dir(project_dir)
    if not root.is_dir():
        raise FatalInputError(f"Project directory not found: {root}")

    source_path, _, _ = get_project_paths(root, config)
    if not source_path.is_file():
        raise FatalInputError(f"{config.source_filename} not found in folder: {root}")

    return SourceUnit(path=source_path)


def prepare_project(
    project_dir: Union[Path, str], runner: ToolchainRunner, config: DeployConfig
) -> SourceUnit:
    """
    Validate the source file and make sure a package manifest exists.

    The source check happens before any external process is started. The
    manifest is only created when absent.

    Args:
        project_dir: Directory holding the contract source
        runner: Toolchain used to create the manifest
        config: Deployment configuration

    Returns:
        SourceUnit for the contract source

    Raises:
        FatalInputError: If the directory or the source file does not exist
        CompilationError: If the manifest cannot be created
    """
    source = locate_source(project_dir, config)

    _, manifest_path, _ = get_project_paths(source.project_dir, config)
    if manifest_path.exists():
        logger.debug("Found existing %s", manifest_path)
    else:
        logger.info("Creating %s in %s", config.manifest_filename, source.project_dir)
        runner.init_manifest(source.project_dir)

    return source
