from abc import ABC, abstractmethod

from datamint.ledger.models import AuditReceipt, MintReceipt, NftInfo


class BaseTokenService(ABC):
    """Contract for token-service adapters."""

    @abstractmethod
    def create_collection(self) -> str:
        """Create the dataset NFT collection and return its token id.

        Raises:
            LedgerError: on any failure.
        """

    @abstractmethod
    def mint(self, collection_id: str, payload: bytes) -> MintReceipt:
        """Mint one NFT carrying ``payload`` (at most 100 bytes) as its metadata.

        Raises:
            LedgerSubmissionUnknownError: if the mint was sent but no response arrived.
            LedgerError: on any other failure.
        """


class BaseAuditLog(ABC):
    """Contract for audit-log (consensus topic) adapters."""

    @abstractmethod
    def submit(self, topic_id: str, message: str) -> AuditReceipt:
        """Append ``message`` to the topic.

        Raises:
            LedgerError: on any failure.
        """


class BaseNftReader(ABC):
    """Contract for reading minted NFTs back from the ledger."""

    @abstractmethod
    def get_nft(self, token_id: str, serial_number: int) -> NftInfo:
        """Fetch one NFT with its decoded metadata.

        Raises:
            LedgerError: if the NFT cannot be fetched.
        """
