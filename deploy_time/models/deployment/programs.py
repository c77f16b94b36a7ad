"""Well-known program ids and deployment log markers."""

import base58

from deploy_time.errors import InvalidProgramIdError

PUBKEY_LENGTH = 32

# Built-in programs: no deployment transaction to look for
NATIVE_PROGRAMS = frozenset(
    {
        "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",  # Token Program
        "ComputeBudget111111111111111111111111111111",
        "BPFLoader2111111111111111111111111111111111",
        "BPFLoader1111111111111111111111111111111111",
        "Feature111111111111111111111111111111111111",
        "NativeLoader1111111111111111111111111111111",
        "Sysvar1111111111111111111111111111111111111",
        "11111111111111111111111111111111",  # System Program
        "Config1111111111111111111111111111111111111",
        "Stake11111111111111111111111111111111111111",
        "Vote111111111111111111111111111111111111111",
        "AddressLookupTab1e1111111111111111111111111",
        "BPFLoaderUpgradeab1e11111111111111111111111",
        "Ed25519SigVerify111111111111111111111111111",
        "KeccakSecp256k11111111111111111111111111111",
        "Secp256r1SigVerify1111111111111111111111111",
    }
)

# Loaders are the only valid owners of program accounts
LOADER_PROGRAMS = frozenset(
    {
        "BPFLoader2111111111111111111111111111111111",
        "BPFLoader1111111111111111111111111111111111",
        "BPFLoaderUpgradeab1e11111111111111111111111",
    }
)

DEPLOYMENT_MARKERS = ("Deployed program", "Deploy with ID")
SUCCESS_MARKER = "success"


def is_native_program(program_id: str) -> bool:
    return program_id in NATIVE_PROGRAMS


def is_loader(owner: str) -> bool:
    return owner in LOADER_PROGRAMS


def validate_program_id(program_id: str) -> str:
    """Check the id decodes to a 32-byte base58 public key."""
    try:
        raw = base58.b58decode(program_id)
    except ValueError as e:
        raise InvalidProgramIdError(f"Non-base58 character in program id: {program_id!r}") from e

    if len(raw) != PUBKEY_LENGTH:
        raise InvalidProgramIdError(
            f"Invalid program id {program_id!r}: expected {PUBKEY_LENGTH} bytes, got {len(raw)}"
        )
    return program_id


def is_deployment_log(program_id: str, log_lines: list[str]) -> bool:
    """Heuristic match on loader log output.

    Matches a known deployment phrase, or a line naming the program together
    with a success marker.
    """
    for line in log_lines:
        if any(marker in line for marker in DEPLOYMENT_MARKERS):
            return True
        if program_id in line and SUCCESS_MARKER in line:
            return True
    return False
