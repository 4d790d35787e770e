from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_ASSETS_DIR = Path(__file__).resolve().parent / "assets" / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path(".data"), alias="FINSIGHT_DATA_DIR")
    assets_dir: Path = Field(default=BUNDLED_ASSETS_DIR, alias="FINSIGHT_ASSETS_DIR")
    transactions_filename: str = Field(default="transactions.csv", alias="FINSIGHT_TRANSACTIONS_FILE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def transactions_path(self) -> Path:
        return self.data_dir / self.transactions_filename

    def validate_required(self) -> None:
        if not self.assets_dir.is_dir():
            raise ValueError(f"FINSIGHT_ASSETS_DIR does not exist: {self.assets_dir}")

        if not self.transactions_filename.strip():
            raise ValueError("FINSIGHT_TRANSACTIONS_FILE must not be empty")


@lru_cache
def load_settings() -> Settings:
    settings = Settings()
    settings.validate_required()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
