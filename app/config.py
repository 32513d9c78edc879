"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")

INSECURE_DEFAULT_SECRET = "change-this-secret-key-in-production"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
    )

    # ===== Database Configuration =====
    app_database_url: str = Field(
        default="sqlite+aiosqlite:///./sales_reports.db",
        alias="REPORTS_DATABASE_URL",
        description="Application database URL (postgresql+asyncpg or sqlite+aiosqlite)",
    )

    reports_db_schema: str | None = Field(
        default=None,
        alias="REPORTS_DB_SCHEMA",
        description="PostgreSQL schema holding the application tables",
    )

    # ===== Authentication Configuration =====
    secret_key: str = Field(
        default=INSECURE_DEFAULT_SECRET,
        alias="SECRET_KEY",
        description="Symmetric key used to sign session tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
        description="JWT signing algorithm",
    )

    access_token_expire_minutes: int = Field(
        default=1440,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Session token validity window in minutes (24 hours default)",
    )

    bcrypt_rounds: int = Field(
        default=12,
        alias="BCRYPT_ROUNDS",
        description="bcrypt cost factor for new password hashes",
    )

    # ===== Initial Admin Provisioning =====
    initial_admin_username: str = Field(
        default="admin",
        alias="INITIAL_ADMIN_USERNAME",
        description="Username of the admin provisioned when no admin exists",
    )

    initial_admin_password: str = Field(
        default="password",
        alias="INITIAL_ADMIN_PASSWORD",
        description="Password of the provisioned admin",
    )

    initial_admin_full_name: str = Field(
        default="Admin User",
        alias="INITIAL_ADMIN_FULL_NAME",
        description="Display name of the provisioned admin",
    )

    # ===== LLM Provider Configuration =====
    default_llm_provider: str = Field(
        default="gemini",
        alias="DEFAULT_LLM_PROVIDER",
        description="LLM provider used for report summaries (gemini, openai, ollama)",
    )

    gemini_api_key: str | None = Field(
        default=None, alias="GEMINI_API_KEY", description="Google Gemini API key"
    )

    default_gemini_model: str = Field(
        default="gemini-2.5-flash",
        alias="DEFAULT_GEMINI_MODEL",
        description="Default Gemini model to use",
    )

    openai_api_key: str | None = Field(
        default=None,
        alias="OPENAI_API_KEY",
        description="OpenAI API key for accessing OpenAI services",
    )

    openai_base_url: str | None = Field(
        default=None,
        alias="OPENAI_BASE_URL",
        description="OpenAI API base URL, defaults to https://api.openai.com/v1",
    )

    default_openai_model: str = Field(
        default="gpt-4o-mini",
        alias="DEFAULT_OPENAI_MODEL",
        description="Default OpenAI model to use",
    )

    ollama_base_url: str | None = Field(
        default=None,
        alias="OLLAMA_BASE_URL",
        description="Ollama API base URL, e.g. http://localhost:11434",
    )

    default_ollama_model: str = Field(
        default="llama3:instruct",
        alias="DEFAULT_OLLAMA_MODEL",
        description="Default Ollama model to use",
    )

    llm_timeout_seconds: float = Field(
        default=120.0,
        alias="LLM_TIMEOUT_SECONDS",
        description="Timeout for a single summary generation call",
    )

    llm_summary_max_tokens: int = Field(
        default=2048,
        alias="LLM_SUMMARY_MAX_TOKENS",
        description="Maximum output tokens for a report summary",
    )

    llm_summary_temperature: float = Field(
        default=0.4,
        alias="LLM_SUMMARY_TEMPERATURE",
        description="Sampling temperature for report summaries",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=5000, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["Authorization", "Content-Type"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        if self.secret_key == INSECURE_DEFAULT_SECRET:
            logger.warning(
                "SECRET_KEY is not set; session tokens are signed with the insecure default key."
            )

        if self.initial_admin_password == "password":
            logger.warning(
                "INITIAL_ADMIN_PASSWORD is not set; the provisioned admin uses the default password."
            )

        if not any([self.gemini_api_key, self.openai_api_key, self.ollama_base_url]):
            logger.warning(
                "No LLM provider configured (GEMINI_API_KEY, OPENAI_API_KEY, OLLAMA_BASE_URL). "
                "Report summaries will be unavailable."
            )

        logger.debug(f"Using database dialect: {self.database_dialect}")
        return self

    @property
    def database_dialect(self) -> str:
        return self.app_database_url.split(":", 1)[0].split("+", 1)[0]

    @property
    def is_sqlite(self) -> bool:
        return self.database_dialect == "sqlite"

    @property
    def schema_name(self) -> str | None:
        # SQLite has no schemas; tables live in the main database.
        if self.is_sqlite:
            return None
        return self.reports_db_schema


# Global settings instance
settings = Settings()

SCHEMA_NAME = settings.schema_name
