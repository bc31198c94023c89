"""Shared pytest fixtures for polkavm-deployer tests."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from polkavm_deployer.config import DeployConfig

VERIFIER_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"internalType": "uint256", "name": "input", "type": "uint256"}],
        "name": "verify",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "pure",
        "type": "function",
    }
]

TEST_RPC_URL = "http://rpc.test.invalid"


class FakeToolchainRunner:
    """Deterministic ToolchainRunner that records every call it receives."""

    def __init__(self, broadcast_output: str):
        self.calls: List[Tuple[Any, ...]] = []
        self.bytecode = b"PVM\x00\x01\x02\xab\xcd"
        self.artifact_name: Optional[str] = "verifier_Verifier.polkavm"
        self.contract_name = "Verifier"
        self.abi: List[Dict[str, Any]] = VERIFIER_ABI
        self.interface_output: Optional[Dict[str, Any]] = None
        self.broadcast_output = broadcast_output

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def init_manifest(self, project_dir: Path) -> None:
        self.calls.append(("init_manifest", project_dir))
        (project_dir / "package.json").write_text('{"name": "fake"}')

    def install(self, project_dir: Path, packages: Sequence[str]) -> None:
        self.calls.append(("install", project_dir, tuple(packages)))

    def compile_binary(self, project_dir: Path, source_filename: str) -> None:
        self.calls.append(("compile_binary", project_dir, source_filename))
        if self.artifact_name is not None:
            (project_dir / self.artifact_name).write_bytes(self.bytecode)

    def compile_interface(self, source_name: str, source_text: str) -> Dict[str, Any]:
        self.calls.append(("compile_interface", source_name, source_text))
        if self.interface_output is not None:
            return self.interface_output
        return {"contracts": {source_name: {self.contract_name: {"abi": self.abi}}}}

    def broadcast(self, rpc_url: str, private_key: str, creation_data: str) -> str:
        self.calls.append(("broadcast", rpc_url, private_key, creation_data))
        return self.broadcast_output


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def verifier_source(fixtures_dir: Path) -> str:
    """Return the sample verifier.sol source text."""
    return (fixtures_dir / "verifier.sol").read_text()


@pytest.fixture
def cast_receipt_json(fixtures_dir: Path) -> Dict[str, Any]:
    """Load and return the sample cast send --json receipt."""
    with open(fixtures_dir / "cast_receipt.json") as f:
        return json.load(f)


@pytest.fixture
def project_dir(tmp_path: Path, fixtures_dir: Path) -> Path:
    """Create a project directory containing verifier.sol."""
    directory = tmp_path / "project"
    directory.mkdir()
    shutil.copy(fixtures_dir / "verifier.sol", directory / "verifier.sol")
    return directory


@pytest.fixture
def config() -> DeployConfig:
    """Return a configuration pointing at a test RPC endpoint."""
    return DeployConfig(rpc_url=TEST_RPC_URL)


@pytest.fixture
def fake_runner(fixtures_dir: Path) -> FakeToolchainRunner:
    """Return a fake toolchain whose broadcaster replies with the sample receipt."""
    return FakeToolchainRunner((fixtures_dir / "cast_receipt.json").read_text())


@pytest.fixture
def private_key() -> str:
    """Return a throwaway signing key."""
    return "0x" + "11" * 32
