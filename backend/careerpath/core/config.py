from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "sqlite:///./careerpath.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5000"
    log_level: str = "INFO"
    ai_enabled: bool = False
    ai_fallback_to_sample: bool = True
    llm_provider: str = "openai"
    groq_api_key: str | None = None
    groq_model: str = "llama-3.1-8b-instant"
    groq_api_base: str = "https://api.groq.com/openai/v1"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openai_api_base: str = "https://api.openai.com/v1"
    llm_timeout_seconds: float = 60.0
    analysis_rate_limit: int = 20
    analysis_rate_window_seconds: int = 60
    saved_resources_dir: str = ".saved_resources"

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        # Render/Postgres providers often expose postgres:// URLs.
        if isinstance(value, str) and value.startswith("postgres://"):
            return "postgresql://" + value[len("postgres://"):]
        return value

settings = Settings()
