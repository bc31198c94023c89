"""Data types and dataclasses for polkavm-deployer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List


@dataclass(frozen=True)
class SourceUnit:
    """A contract source file inside a project directory."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def project_dir(self) -> Path:
        return self.path.parent

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass(frozen=True)
class CompiledArtifact:
    """Binary output of the PolkaVM compiler."""

    path: Path
    bytecode: bytes


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a contract-creation transaction."""

    contract_address: str
    transaction_hash: str


@dataclass(frozen=True)
class DeploymentRecord:
    """Deployment result merged with the contract ABI, as persisted to disk."""

    contract_address: str
    transaction_hash: str
    abi: List[Dict[str, Any]]

    @classmethod
    def from_result(
        cls, result: DeploymentResult, abi: List[Dict[str, Any]]
    ) -> "DeploymentRecord":
        return cls(
            contract_address=result.contract_address,
            transaction_hash=result.transaction_hash,
            abi=abi,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase field names of deployment.json."""
        return {
            "contractAddress": self.contract_address,
            "transactionHash": self.transaction_hash,
            "abi": self.abi,
        }
