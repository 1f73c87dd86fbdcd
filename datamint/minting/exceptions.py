class MintingError(Exception):
    """Base exception for mint orchestration failures."""


class CollectionCreationError(MintingError):
    """Raised when the dataset collection cannot be created."""


class MetadataSizeError(MintingError):
    """Raised when metadata cannot be compacted under the on-chain byte ceiling."""


class MintError(MintingError):
    """Raised when the mint transaction fails."""


class MintUnconfirmedError(MintError):
    """Raised when a mint was submitted but its outcome was never observed.

    Check the collection on the explorer before minting the dataset again.
    """


class VerificationError(MintingError):
    """Raised when on-chain metadata cannot be read or interpreted."""
