"""Deployment detection errors.

Every error carries a ``message``. ``transient`` tells the detector's retry loop
whether another attempt (possibly against another endpoint) can change the
outcome; terminal errors are raised to the caller immediately.
"""


class DeployTimeError(Exception):
    """Base error for deployment detection."""

    transient = True
    default_message = "Failed to get deployment information"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(DeployTimeError):
    """Required configuration is missing."""

    transient = False
    default_message = "MAIN_RPC_URL environment variable is not set"


class InvalidProgramIdError(DeployTimeError):
    """Program id is not a valid base58 address."""

    transient = False
    default_message = "Invalid program id"


class EndpointsExhaustedError(DeployTimeError):
    """No healthy RPC endpoint left to try."""

    default_message = "No healthy RPC endpoints available"


class AccountNotFoundError(DeployTimeError):
    """The program account does not exist on the ledger."""

    default_message = "Account not found"


class NotAProgramAccountError(DeployTimeError):
    """The account exists but is not owned by a loader."""

    transient = False
    default_message = "Not a program account. This appears to be a regular account or token."


class NoTransactionHistoryError(DeployTimeError):
    """The target account has no transaction signatures."""

    default_message = "No transactions found for this program"


class DeploymentNotFoundError(DeployTimeError):
    """Full history scanned without a deployment match."""

    default_message = "Could not find deployment transaction"


class CacheCorruptedError(DeployTimeError):
    """Cache document could not be parsed. Never leaves the cache repository."""

    default_message = "Cache file is corrupted"


def is_transient(exc: BaseException) -> bool:
    """Retry everything except errors explicitly classified as terminal."""
    if isinstance(exc, DeployTimeError):
        return exc.transient
    return True
