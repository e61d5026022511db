from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.wm_common.constants import (
    DEFAULT_FEE_RECIPIENT,
    DEFAULT_MATCH_WINDOW_SECONDS,
    EXCHANGE_ADDRESSES,
)
from src.wm_common.enums import NetworkName


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Network: picks the exchange contract unless EXCHANGE_ADDRESS overrides it
    NETWORK_NAME: NetworkName = NetworkName.MAIN
    EXCHANGE_ADDRESS: str | None = None

    # Matching
    FEE_RECIPIENT: str = DEFAULT_FEE_RECIPIENT
    MATCH_WINDOW_SECONDS: int = DEFAULT_MATCH_WINDOW_SECONDS

    # App
    APP_NAME: str = "Wyvern Match Engine"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev

    @field_validator("EXCHANGE_ADDRESS", "FEE_RECIPIENT")
    @classmethod
    def lowercase_address(cls, v: str | None) -> str | None:
        return v.lower() if v else v

    @field_validator("MATCH_WINDOW_SECONDS")
    @classmethod
    def positive_window(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MATCH_WINDOW_SECONDS must be positive")
        return v

    @property
    def exchange_address(self) -> str:
        return self.EXCHANGE_ADDRESS or EXCHANGE_ADDRESSES[self.NETWORK_NAME.value]


settings = Settings()
