from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    ledger_provider: str = "example"
    ledger_network: str = "testnet"
    ledger_account_id: str = ""
    ledger_private_key: str = ""
    ledger_gateway_url: str = ""
    ledger_timeout_seconds: int = 30

    audit_topic_id: str = ""

    mirror_node_url: str = ""

    mint_registry_enabled: bool = False
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "datamint"
    db_username: str = "datamint"
    db_password: str = "secret"
