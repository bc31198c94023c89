"""Unit tests for Solidity source helpers."""

from pathlib import Path

import pytest

from polkavm_deployer.exceptions import CompilationError
from polkavm_deployer.solidity import (
    parse_contract_names,
    read_source_text,
    resolve_contract_name,
)
from polkavm_deployer.types import SourceUnit


class TestReadSourceText:
    """Test the read_source_text function."""

    def test_reads_utf8_source(self, project_dir: Path, verifier_source: str):
        """Test that a UTF-8 source is returned unchanged."""
        assert read_source_text(SourceUnit(project_dir / "verifier.sol")) == verifier_source

    def test_missing_source_raises(self, tmp_path: Path):
        """Test that a vanished source file is a CompilationError."""
        with pytest.raises(CompilationError):
            read_source_text(SourceUnit(tmp_path / "verifier.sol"))

    def test_non_utf8_source_raises(self, tmp_path: Path):
        """Test that undecodable bytes are a CompilationError, not a UnicodeDecodeError."""
        path = tmp_path / "verifier.sol"
        path.write_bytes(b"// \xa9 Latin-1 author\ncontract Verifier {}\n")

        with pytest.raises(CompilationError) as exc_info:
            read_source_text(SourceUnit(path))

        assert "not valid UTF-8" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestParseContractNames:
    """Test the parse_contract_names function."""

    def test_finds_single_contract(self, verifier_source: str):
        """Test the sample verifier declares exactly Verifier."""
        assert parse_contract_names(verifier_source) == ["Verifier"]

    def test_ignores_interfaces_and_libraries(self):
        """Test that only concrete contracts are listed."""
        source = """
        interface IThing { function f() external; }
        library Math { function add(uint a, uint b) internal pure returns (uint) { return a + b; } }
        abstract contract Base { function g() public virtual; }
        contract Thing is Base { function g() public override {} }
        """

        assert parse_contract_names(source) == ["Thing"]

    def test_ignores_comments(self):
        """Test that declarations inside comments are skipped."""
        source = """
        // contract LineComment {}
        /* contract BlockComment {} */
        contract Real {}
        """

        assert parse_contract_names(source) == ["Real"]

    def test_ignores_string_literals(self):
        """Test that declarations inside strings are skipped."""
        source = 'contract Real { string s = "contract Fake {}"; string u = "http://x"; }'

        assert parse_contract_names(source) == ["Real"]

    def test_lists_multiple_contracts_in_order(self):
        """Test declaration order is preserved."""
        assert parse_contract_names("contract A {}\ncontract B {}") == ["A", "B"]


class TestResolveContractName:
    """Test the resolve_contract_name function."""

    def test_no_contract_raises(self):
        """Test that a source without contracts is a CompilationError."""
        with pytest.raises(CompilationError):
            resolve_contract_name("interface I {}", "verifier.sol")

    def test_multiple_contracts_raise(self):
        """Test that ambiguous sources are rejected."""
        with pytest.raises(CompilationError) as exc_info:
            resolve_contract_name("contract A {}\ncontract B {}", "verifier.sol")

        assert "A, B" in str(exc_info.value)
