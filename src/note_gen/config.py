from dataclasses import dataclass, field
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable upstream call settings, built once at startup."""

    api_key: str = field(repr=False)
    model: str
    max_output_tokens: int
    base_url: str
    timeout_seconds: float
    max_retries: int


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    llm_api_key: str = Field(default="", alias="CLAUDE_API_KEY")
    llm_base_url: str = Field(default="https://api.anthropic.com/v1/", alias="LLM_BASE_URL")
    llm_model: str = Field(default="claude-sonnet-4-20250514", alias="LLM_MODEL")
    llm_max_output_tokens: int = Field(default=1024, alias="LLM_MAX_OUTPUT_TOKENS")
    llm_timeout_seconds: float = Field(default=60.0, alias="LLM_TIMEOUT_SECONDS")
    llm_num_retries: int = Field(default=0, alias="LLM_NUM_RETRIES")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    def generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            api_key=self.llm_api_key.strip(),
            model=self.llm_model.strip(),
            max_output_tokens=max(1, self.llm_max_output_tokens),
            base_url=self.llm_base_url.strip(),
            timeout_seconds=self.llm_timeout_seconds,
            max_retries=max(0, self.llm_num_retries),
        )

    def cors_origins(self) -> list[str]:
        origins = [item.strip() for item in self.cors_allow_origins.split(",")]
        return [item for item in origins if item] or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
