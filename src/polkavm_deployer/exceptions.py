"""Custom exception classes for polkavm-deployer."""

from typing import Optional

from .types import DeploymentResult


class PipelineError(Exception):
    """Base exception for deployment pipeline errors."""

    pass


class FatalInputError(PipelineError, FileNotFoundError):
    """Raised when the project directory or contract source file is missing."""

    pass


class CompilationError(PipelineError, RuntimeError):
    """Raised when toolchain installation, compilation or artifact lookup fails."""

    pass


class DeploymentError(PipelineError, RuntimeError):
    """Raised when the creation transaction cannot be broadcast or parsed."""

    pass


class PersistenceError(PipelineError, OSError):
    """Raised when the deployment record cannot be serialized or written."""

    pass


class PartialDeploymentError(PipelineError):
    """
    Raised when the contract was deployed but a later step failed.

    The on-chain result is kept in ``deployment`` so callers can still report
    the address and transaction hash.
    """

    def __init__(self, message: str, deployment: Optional[DeploymentResult] = None):
        super().__init__(message)
        self.deployment = deployment
