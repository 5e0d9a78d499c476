from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="conjugador", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"

    @computed_field
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class BlobSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    backend: str = Field(default="local", alias="BLOB_BACKEND")
    root: str = Field(default="blob-data", alias="BLOB_ROOT")
    question_set_prefix: str = Field(default="question-sets", alias="QUESTION_SET_PREFIX")
    index_write_retries: int = Field(default=3, alias="INDEX_WRITE_RETRIES")
    index_retry_backoff: float = Field(default=0.05, alias="INDEX_RETRY_BACKOFF")


class GenerationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    # Model provider selection: "openai", "google" or "openrouter"
    model_provider: str = Field(default="openai", alias="MODEL_PROVIDER")

    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4.1-mini", alias="OPENAI_MODEL")
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    openrouter_api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    openrouter_model: str = Field(
        default="openai/gpt-4.1-mini", alias="OPENROUTER_MODEL"
    )

    default_question_count: int = Field(default=10, alias="DEFAULT_QUESTION_COUNT")
    max_question_count: int = Field(default=50, alias="MAX_QUESTION_COUNT")


class AuthSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    shared_password: str = Field(default="secreto", alias="SHARED_PASSWORD")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    blob: BlobSettings = Field(default_factory=lambda: BlobSettings())
    generation: GenerationSettings = Field(default_factory=lambda: GenerationSettings())
    auth: AuthSettings = Field(default_factory=lambda: AuthSettings())


settings = Settings()
