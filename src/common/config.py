from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="ledger-transfer-service")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    database_path: Path = Field(default=Path("./data/bank.sqlite"))

    source_account_id: int = Field(default=1)
    destination_account_id: int = Field(default=2)

    initial_source_balance: int = Field(default=1000)
    initial_destination_balance: int = Field(default=500)

    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def get_initial_balances(self) -> dict:
        return {
            self.source_account_id: self.initial_source_balance,
            self.destination_account_id: self.initial_destination_balance,
        }


settings = Settings()
