from dataclasses import dataclass

from datamint.config.settings import Settings
from datamint.ledger.base import BaseAuditLog, BaseNftReader, BaseTokenService
from datamint.ledger.example_adapter import ExampleLedgerAdapter
from datamint.ledger.exceptions import LedgerConfigurationError
from datamint.ledger.gateway_adapter import GatewayLedgerAdapter
from datamint.ledger.mirror_node import MirrorNodeClient
from datamint.ledger.models import NETWORKS


@dataclass(frozen=True)
class LedgerClients:
    """The collaborators one provider supplies to the minting layer."""

    token_service: BaseTokenService
    audit_log: BaseAuditLog
    nft_reader: BaseNftReader


class LedgerFactory:
    """Creates the configured ledger adapters."""

    PROVIDERS = ("example", "gateway")

    @classmethod
    def create(cls, settings: Settings) -> LedgerClients:
        """Build ledger clients from settings.

        Raises:
            LedgerConfigurationError: if credentials are missing or the
                provider/network is unknown. Raised before any client is built.
        """
        cls.require_credentials(settings)
        network = cls._resolve_network(settings)
        provider = settings.ledger_provider.lower()

        if provider == "example":
            adapter = ExampleLedgerAdapter(account_id=settings.ledger_account_id)
            return LedgerClients(token_service=adapter, audit_log=adapter, nft_reader=adapter)

        if provider == "gateway":
            url = settings.ledger_gateway_url.strip()
            if not url:
                raise LedgerConfigurationError(
                    "ledger_gateway_url is required for ledger_provider=gateway"
                )
            gateway = GatewayLedgerAdapter(
                base_url=url,
                account_id=settings.ledger_account_id,
                private_key=settings.ledger_private_key,
                timeout_seconds=settings.ledger_timeout_seconds,
            )
            return LedgerClients(
                token_service=gateway,
                audit_log=gateway,
                nft_reader=cls._mirror_node(settings, network),
            )

        raise LedgerConfigurationError(
            f"Unknown ledger provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @staticmethod
    def require_credentials(settings: Settings) -> None:
        missing = [
            name
            for name, value in (
                ("LEDGER_ACCOUNT_ID", settings.ledger_account_id),
                ("LEDGER_PRIVATE_KEY", settings.ledger_private_key),
            )
            if not value.strip()
        ]
        if missing:
            raise LedgerConfigurationError(
                f"Ledger credentials not configured: set {' and '.join(missing)}"
            )

    @staticmethod
    def _resolve_network(settings: Settings) -> str:
        network = settings.ledger_network.lower()
        if network not in NETWORKS:
            raise LedgerConfigurationError(
                f"Unknown ledger network '{network}'. Choose from: {list(NETWORKS)}"
            )
        return network

    @staticmethod
    def _mirror_node(settings: Settings, network: str) -> MirrorNodeClient:
        override = settings.mirror_node_url.strip()
        if override:
            return MirrorNodeClient(
                base_url=override, timeout_seconds=settings.ledger_timeout_seconds
            )
        return MirrorNodeClient.for_network(network, settings.ledger_timeout_seconds)
