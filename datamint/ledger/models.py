from dataclasses import dataclass
from typing import Any

NETWORKS = ("testnet", "mainnet", "previewnet")

MIRROR_NODE_URLS: dict[str, str] = {
    "mainnet": "https://mainnet-public.mirrornode.hedera.com",
    "testnet": "https://testnet.mirrornode.hedera.com",
    "previewnet": "https://previewnet.mirrornode.hedera.com",
}


def explorer_url(network: str, kind: str, entity_id: str) -> str:
    """Public explorer link for a token, transaction, account or topic."""
    return f"https://hashscan.io/{network}/{kind}/{entity_id}"


@dataclass(frozen=True)
class CollectionSpec:
    """Parameters of the one-time dataset NFT collection."""

    name: str = "Analytics Dataset NFTs"
    symbol: str = "DATASET"
    token_type: str = "NON_FUNGIBLE_UNIQUE"
    supply_type: str = "INFINITE"
    decimals: int = 0
    initial_supply: int = 0
    max_transaction_fee_hbar: int = 50


@dataclass(frozen=True)
class MintReceipt:
    serial_number: int
    transaction_id: str


@dataclass(frozen=True)
class AuditReceipt:
    consensus_timestamp: str
    sequence_number: int
    transaction_id: str = ""


@dataclass(frozen=True)
class NftInfo:
    """An NFT as reported by the mirror node, metadata already base64-decoded."""

    token_id: str
    serial_number: int
    account_id: str
    metadata: bytes
    decoded_metadata: dict[str, Any] | str
