from functools import lru_cache
from typing import List, Optional

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    probe_timeout_seconds: float = Field(default=10.0, gt=0, validation_alias="PROBE_TIMEOUT_SECONDS")
    reference_timeout_seconds: float = Field(default=10.0, gt=0, validation_alias="REFERENCE_TIMEOUT_SECONDS")

    coingecko_base_url: AnyHttpUrl = Field(
        default="https://api.coingecko.com/api/v3",
        validation_alias="COINGECKO_BASE_URL",
    )
    coincap_base_url: AnyHttpUrl = Field(
        default="https://api.coincap.io/v2",
        validation_alias="COINCAP_BASE_URL",
    )
    default_reference_symbols: List[str] = Field(
        default_factory=lambda: ["bitcoin"],
        validation_alias="DEFAULT_REFERENCE_SYMBOLS",
    )
    default_quote_currency: str = Field(default="usd", validation_alias="DEFAULT_QUOTE_CURRENCY")

    price_endpoint_types: List[str] = Field(
        default_factory=lambda: ["price", "crypto-price"],
        validation_alias="PRICE_ENDPOINT_TYPES",
    )
    reference_source_ids: List[str] = Field(
        default_factory=lambda: ["pulseapi", "reference"],
        validation_alias="REFERENCE_SOURCE_IDS",
    )

    # Baseline heuristics for the accuracy signal.
    accuracy_baseline_score: float = Field(default=85.0, ge=0, le=100, validation_alias="ACCURACY_BASELINE_SCORE")
    accuracy_reference_failure_score: float = Field(
        default=70.0, ge=0, le=100, validation_alias="ACCURACY_REFERENCE_FAILURE_SCORE"
    )
    accuracy_no_price_data_score: float = Field(default=60.0, ge=0, le=100, validation_alias="ACCURACY_NO_PRICE_DATA_SCORE")
    accuracy_unmatched_score: float = Field(default=55.0, ge=0, le=100, validation_alias="ACCURACY_UNMATCHED_SCORE")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    def coingecko_url(self, path: str) -> str:
        return f"{str(self.coingecko_base_url).rstrip('/')}/{path.lstrip('/')}"

    def coincap_url(self, path: str) -> str:
        return f"{str(self.coincap_base_url).rstrip('/')}/{path.lstrip('/')}"

    def is_price_endpoint(self, endpoint_type: Optional[str]) -> bool:
        if not endpoint_type:
            return False
        return endpoint_type.strip().lower() in {kind.lower() for kind in self.price_endpoint_types}

    def wants_reference_comparison(self, sources) -> bool:
        wanted = {source.strip().lower() for source in sources or () if source}
        return bool(wanted & {source.lower() for source in self.reference_source_ids})


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
