from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from core_config.constants import (
    CACHE_DEFAULT_TTL_S,
    ENV_PRODUCTION,
    JWT_ISSUER,
    MAX_REQUEST_BODY_BYTES,
    SERVER_PORT,
    SERVER_SHUTDOWN_TIMEOUT_S,
    SERVER_TIMEOUT_KEEP_ALIVE_S,
    SQS_MAX_MESSAGES,
    SQS_WAIT_TIME_S,
)

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = Field(default=ENV_PRODUCTION, alias="ENVIRONMENT")
    service_log_level: str = Field(default="INFO", alias="SERVICE_LOG_LEVEL")

    # Redis / cache-aside
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    redis_max_connections: int = Field(default=100, alias="REDIS_MAX_CONNECTIONS")
    cache_default_ttl_s: int = Field(default=CACHE_DEFAULT_TTL_S, alias="CACHE_DEFAULT_TTL_S")

    # HTTP
    http_max_body_bytes: int = Field(default=MAX_REQUEST_BODY_BYTES, alias="HTTP_MAX_BODY_BYTES")
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=SERVER_PORT, alias="SERVER_PORT")
    server_timeout_keep_alive_s: int = Field(default=SERVER_TIMEOUT_KEEP_ALIVE_S, alias="SERVER_TIMEOUT_KEEP_ALIVE_S")
    server_shutdown_timeout_s: int = Field(default=SERVER_SHUTDOWN_TIMEOUT_S, alias="SERVER_SHUTDOWN_TIMEOUT_S")

    # Tokens / OTP
    jwt_secret_key: Optional[str] = Field(default=None, alias="JWT_SECRET_KEY")
    jwt_issuer: str = Field(default=JWT_ISSUER, alias="JWT_ISSUER")
    otp_pepper: Optional[str] = Field(default=None, alias="OTP_PEPPER")

    # SQS
    sqs_region: Optional[str] = Field(default=None, alias="SQS_REGION")
    sqs_queue_url: Optional[str] = Field(default=None, alias="SQS_QUEUE_URL")
    sqs_max_messages: int = Field(default=SQS_MAX_MESSAGES, alias="SQS_MAX_MESSAGES")
    sqs_wait_time_s: int = Field(default=SQS_WAIT_TIME_S, alias="SQS_WAIT_TIME_S")

    # SQL
    database_url: str = Field(default="sqlite:///./app.db", alias="DATABASE_URL")

    @property
    def is_development(self) -> bool:  # noqa: D401
        """True when running with ENVIRONMENT=development."""
        return self.environment.strip().lower() in ("dev", "development", "local")

def get_settings() -> "Settings":
    return Settings()  # type: ignore
