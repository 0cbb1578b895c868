from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    edenai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("edenai_api_key", "edenai_bearer_token"),
    )
    edenai_base_url: str = "https://api.edenai.run/v2"
    edenai_timeout_seconds: int = 30

    extraction_strategy: str = "sync"
    cv_extraction_strategy: str = "sync"
    jd_extraction_strategy: str = "async"

    resume_parser_provider: str = "openai/gpt-4o-mini"
    ocr_provider: str = "amazon"
    ocr_language: str = "en"
    ocr_poll_interval_seconds: float = 2.0
    ocr_max_poll_attempts: int = Field(default=30, ge=1)

    pdf_engine: str = "pdfplumber"

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4"
    openai_timeout_seconds: int = 30
    openai_max_tokens: int = 500
