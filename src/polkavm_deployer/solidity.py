"""Solidity source helpers for polkavm-deployer."""

import re
from typing import List

from .exceptions import CompilationError
from .types import SourceUnit

# Comments and string literals, matched in a single left-to-right pass
_NOISE_RE = re.compile(
    r"//[^\n]*|/\*.*?\*/|\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'",
    re.DOTALL,
)
_CONTRACT_RE = re.compile(r"\b(abstract\s+)?contract\s+([A-Za-z_$][A-Za-z0-9_$]*)")


def read_source_text(source: SourceUnit) -> str:
    """
    Read a contract source as UTF-8.

    Raises:
        CompilationError: If the file cannot be read or is not valid UTF-8
    """
    try:
        return source.read_text()
    except UnicodeDecodeError as e:
        raise CompilationError(f"{source.name} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CompilationError(f"Could not read {source.path}: {e}") from e


def parse_contract_names(source_text: str) -> List[str]:
    """
    List the concrete contracts declared in Solidity source.

    Comments and string literals are ignored, as are abstract contracts,
    interfaces and libraries.

    Args:
        source_text: Solidity source

    Returns:
        Contract names in declaration order
    """
    stripped = _NOISE_RE.sub(" ", source_text)
    return [
        match.group(2)
        for match in _CONTRACT_RE.finditer(stripped)
        if not match.group(1)
    ]


def resolve_contract_name(source_text: str, source_name: str) -> str:
    """
    Get the single contract declared in a source file.

    Raises:
        CompilationError: If the source declares no contract or more than one
    """
    names = parse_contract_names(source_text)
    if not names:
        raise CompilationError(f"No contract declared in {source_name}")
    if len(names) > 1:
        raise CompilationError(
            f"{source_name} declares multiple contracts ({', '.join(names)}); "
            "only one contract per source file is supported"
        )
    return names[0]
