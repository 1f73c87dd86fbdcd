import threading

from datamint.config.settings import Settings
from datamint.ledger.factory import LedgerClients, LedgerFactory
from datamint.minting.collection_cache import CollectionCache
from datamint.minting.orchestrator import MintOrchestrator
from datamint.minting.verifier import DatasetVerifier


class LedgerServices:
    """Builds ledger-backed services on first use and shares them across requests.

    Credentials are checked when a ledger operation is requested, so the
    validation endpoints keep working on a node with no ledger configured.
    """

    def __init__(
        self,
        settings: Settings,
        clients: LedgerClients | None = None,
        collection_cache: CollectionCache | None = None,
    ) -> None:
        self._settings = settings
        self._clients = clients
        self._collection_cache = collection_cache or CollectionCache()
        self._lock = threading.Lock()

    def orchestrator(self) -> MintOrchestrator:
        """Raises LedgerConfigurationError when credentials are missing."""
        clients = self._ledger_clients()
        return MintOrchestrator(
            token_service=clients.token_service,
            audit_log=clients.audit_log,
            collection_cache=self._collection_cache,
            network=self._settings.ledger_network.lower(),
            audit_topic_id=self._settings.audit_topic_id.strip() or None,
        )

    def verifier(self) -> DatasetVerifier:
        return DatasetVerifier(self._ledger_clients().nft_reader)

    def _ledger_clients(self) -> LedgerClients:
        LedgerFactory.require_credentials(self._settings)
        with self._lock:
            if self._clients is None:
                self._clients = LedgerFactory.create(self._settings)
            return self._clients
