from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RESILIENCE_MODES = ("always_degrade", "strict")
FALLBACK_TIERS = ("simple", "enhanced")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    deepseek_api_key: str = Field(default="", alias="DEEPSEEK_API_KEY")
    deepseek_base_url: str = Field(default="https://api.deepseek.com", alias="DEEPSEEK_BASE_URL")
    deepseek_model: str = Field(default="deepseek-chat", alias="DEEPSEEK_MODEL")
    llm_timeout_seconds: float | None = Field(default=None, alias="LLM_TIMEOUT_SECONDS")
    llm_max_tokens: int = Field(default=500, alias="LLM_MAX_TOKENS")
    llm_temperature: float = Field(default=0.7, alias="LLM_TEMPERATURE")

    resilience_mode: str = Field(default="always_degrade", alias="RESILIENCE_MODE")
    no_key_tier: str = Field(default="simple", alias="NO_KEY_TIER")

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        self.deepseek_api_key = self.deepseek_api_key.strip()
        self.deepseek_base_url = self.deepseek_base_url.strip().rstrip("/")
        self.resilience_mode = self.resilience_mode.strip().lower()
        if self.resilience_mode not in RESILIENCE_MODES:
            self.resilience_mode = "always_degrade"
        self.no_key_tier = self.no_key_tier.strip().lower()
        if self.no_key_tier not in FALLBACK_TIERS:
            self.no_key_tier = "simple"

    @property
    def has_credential(self) -> bool:
        return bool(self.deepseek_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
