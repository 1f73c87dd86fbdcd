class LedgerError(Exception):
    """Base exception for ledger collaborator failures."""


class LedgerConfigurationError(LedgerError):
    """Raised when ledger credentials or provider settings are missing or invalid."""


class LedgerNetworkError(LedgerError):
    """Raised when a request did not reach the ledger or was refused before submission."""


class LedgerSubmissionUnknownError(LedgerError):
    """Raised when a request was sent but its response was never observed.

    The transaction may or may not have reached consensus.
    """
