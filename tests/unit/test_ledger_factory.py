import pytest

from datamint.config.settings import Settings
from datamint.ledger.example_adapter import ExampleLedgerAdapter
from datamint.ledger.exceptions import LedgerConfigurationError
from datamint.ledger.factory import LedgerFactory
from datamint.ledger.gateway_adapter import GatewayLedgerAdapter
from datamint.ledger.mirror_node import MirrorNodeClient


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "ledger_provider": "example",
        "ledger_network": "testnet",
        "ledger_account_id": "0.0.1001",
        "ledger_private_key": "key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestLedgerFactory:
    def test_example_provider_shares_one_adapter(self) -> None:
        clients = LedgerFactory.create(_settings())

        assert isinstance(clients.token_service, ExampleLedgerAdapter)
        assert clients.audit_log is clients.token_service
        assert clients.nft_reader is clients.token_service

    def test_gateway_provider_reads_through_mirror_node(self) -> None:
        clients = LedgerFactory.create(
            _settings(ledger_provider="gateway", ledger_gateway_url="https://gateway.test")
        )

        assert isinstance(clients.token_service, GatewayLedgerAdapter)
        assert isinstance(clients.nft_reader, MirrorNodeClient)

    def test_gateway_provider_requires_url(self) -> None:
        with pytest.raises(LedgerConfigurationError, match="ledger_gateway_url"):
            LedgerFactory.create(_settings(ledger_provider="gateway"))

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(LedgerConfigurationError, match="Unknown ledger provider"):
            LedgerFactory.create(_settings(ledger_provider="sdk"))

    def test_unknown_network_raises(self) -> None:
        with pytest.raises(LedgerConfigurationError, match="Unknown ledger network"):
            LedgerFactory.create(_settings(ledger_network="devnet"))

    @pytest.mark.parametrize(
        "overrides, missing",
        [
            ({"ledger_account_id": ""}, "LEDGER_ACCOUNT_ID"),
            ({"ledger_private_key": "  "}, "LEDGER_PRIVATE_KEY"),
        ],
    )
    def test_missing_credentials_raise(self, overrides: dict, missing: str) -> None:
        with pytest.raises(LedgerConfigurationError, match=missing):
            LedgerFactory.create(_settings(**overrides))

    def test_credentials_checked_for_every_provider(self) -> None:
        with pytest.raises(LedgerConfigurationError, match="credentials not configured"):
            LedgerFactory.create(
                _settings(ledger_provider="unknown", ledger_account_id="", ledger_private_key="")
            )
