from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Server-side credential; clients may also send their own key per request
	openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
	openai_model: str = Field(default="gpt-3.5-turbo", validation_alias="OPENAI_MODEL")
	openai_base_url: str = Field(default="https://api.openai.com/v1/chat/completions", validation_alias="OPENAI_BASE_URL")
	openai_temperature: float = Field(default=0.7, validation_alias="OPENAI_TEMPERATURE")
	openai_timeout_seconds: float = Field(default=30, validation_alias="OPENAI_TIMEOUT_SECONDS")

	# Token budgets for the two kinds of calls
	generation_tokens_per_response: int = Field(default=60, validation_alias="GENERATION_TOKENS_PER_RESPONSE")
	generation_max_tokens: int = Field(default=1500, validation_alias="GENERATION_MAX_TOKENS")
	analysis_max_tokens: int = Field(default=600, validation_alias="ANALYSIS_MAX_TOKENS")

	# Simulated latency for demo/mock paths (0 disables)
	mock_delay_seconds: float = Field(default=0, validation_alias="MOCK_DELAY_SECONDS")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
