from datamint.ingestion.fingerprint import fingerprint
from datamint.ledger.base import BaseNftReader
from datamint.ledger.exceptions import LedgerError
from datamint.logging.logger import Log
from datamint.minting.compactor import MIN_PREFIX_LENGTH, decode_payload
from datamint.minting.exceptions import VerificationError
from datamint.minting.models import VerificationResult


class DatasetVerifier:
    """Checks a local file against the hash prefix anchored in a minted NFT."""

    def __init__(self, nft_reader: BaseNftReader) -> None:
        self._nft_reader = nft_reader

    def verify(self, content: bytes, token_id: str, serial_number: int) -> VerificationResult:
        """Fingerprint ``content`` and compare it with the NFT's on-chain prefix.

        Raises:
            VerificationError: if the NFT cannot be read or carries no dataset hash.
        """
        try:
            nft = self._nft_reader.get_nft(token_id, serial_number)
        except LedgerError as exc:
            raise VerificationError(str(exc)) from exc

        try:
            prefix = decode_payload(nft.metadata)["h"]
        except ValueError as exc:
            raise VerificationError(
                f"NFT {token_id}/{serial_number} does not carry a dataset hash: {exc}"
            ) from exc
        if len(prefix) < MIN_PREFIX_LENGTH:
            raise VerificationError(
                f"NFT {token_id}/{serial_number} does not carry a dataset hash"
            )

        content_hash = fingerprint(content)
        matches = content_hash.startswith(prefix.lower())
        Log.info(
            f"Verified content against {token_id} #{serial_number}",
            matches=matches,
        )
        return VerificationResult(
            token_id=token_id,
            serial_number=serial_number,
            content_hash=content_hash,
            onchain_hash_prefix=prefix,
            matches=matches,
            owner_account_id=nft.account_id,
            onchain_metadata=nft.decoded_metadata,
        )
