"""Path management utilities for polkavm-deployer."""

from pathlib import Path
from typing import Optional, Union

from .config import DeployConfig


def resolve_project_dir(project_dir: Union[Path, str]) -> Path:
    """
    Normalize a project directory argument.

    Args:
        project_dir: Directory holding the contract source

    Returns:
        Absolute path to the project directory
    """
    return Path(project_dir).expanduser().absolute()


def get_project_paths(
    project_dir: Union[Path, str], config: Optional[DeployConfig] = None
) -> tuple[Path, Path, Path]:
    """
    Get the fixed file paths inside a project directory.

    Args:
        project_dir: Directory holding the contract source
        config: Deployment configuration (defaults to DeployConfig())

    Returns:
        Tuple of (source_path, manifest_path, record_path)
    """
    if config is None:
        config = DeployConfig()

    root = resolve_project_dir(project_dir)

    source_path = root / config.source_filename
    manifest_path = root / config.manifest_filename
    record_path = root / config.record_filename

    return (source_path, manifest_path, record_path)
