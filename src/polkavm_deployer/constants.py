"""Configuration constants for polkavm-deployer."""

# Passet Hub testnet Ethereum-compatible RPC endpoint
DEFAULT_RPC_URL = "https://testnet-passet-hub-eth-rpc.polkadot.io"

# Fixed file names inside the project directory
SOURCE_FILENAME = "verifier.sol"
RECORD_FILENAME = "deployment.json"
MANIFEST_FILENAME = "package.json"

# PolkaVM toolchain
ARTIFACT_EXTENSION = ".polkavm"
COMPILER_PACKAGE = "@parity/revive"
SOLC_VERSION = "0.8.29"

# Seconds of mtime tolerance when deciding whether an artifact predates compilation
ARTIFACT_MTIME_SLACK = 2.0

# Environment variables read by the console entry point
RPC_URL_ENV = "POLKAVM_RPC_URL"
PRIVATE_KEY_ENV = "PRIVATE_KEY"
